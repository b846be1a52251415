"""
Ball Flight Domain Models

Biomechanics snapshot in, predicted batted-ball flight out. Every input is
optional; the predictor works with whatever subset is present.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class BiomechanicsInput:
    """
    Aggregate biomechanics for a player or session.

    Attributes:
        bat_ke: Bat kinetic energy (joules)
        pelvis_velocity: Peak pelvis angular velocity (deg/s)
        torso_velocity: Peak torso angular velocity (deg/s)
        transfer_efficiency: Energy transfer efficiency (percent)
        x_factor: Hip-shoulder separation (degrees)
        brain_score: Sequencing score (20-80 scale)
        body_score: Body score (20-80 scale)
        motor_profile: Motor profile label, e.g. "Spinner"
    """
    bat_ke: Optional[float] = None
    pelvis_velocity: Optional[float] = None
    torso_velocity: Optional[float] = None
    transfer_efficiency: Optional[float] = None
    x_factor: Optional[float] = None
    brain_score: Optional[float] = None
    body_score: Optional[float] = None
    motor_profile: Optional[str] = None


@dataclass(frozen=True)
class BallFlightPrediction:
    """
    Predicted flight.

    Attributes:
        exit_velocity: mph, None without a positive bat_ke
        launch_angle: degrees
        kinetic_potential: 20-80 scale, None without bat_ke
        confidence: How many inputs backed the prediction
    """
    exit_velocity: Optional[float]
    launch_angle: Optional[int]
    kinetic_potential: Optional[int]
    confidence: ConfidenceLevel
