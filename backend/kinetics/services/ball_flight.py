"""
Ball Flight Predictor Service

Predicts exit velocity, launch angle and a 20-80 kinetic potential grade from
biomechanics alone, without a launch monitor.

Exit velocity comes from the collision energy balance:

    v = sqrt(2 * KE_bat * efficiency / m_ball)

Launch angle and kinetic potential are heuristics on top of that.
"""

import logging
import math
from dataclasses import fields
from typing import Optional

from ..domain.ball_flight import BallFlightPrediction, BiomechanicsInput, ConfidenceLevel
from .signal import clamp, round_half_up, round_int

logger = logging.getLogger(__name__)


class BallFlightPredictor:
    """
    Closed-form ball flight model.

    Every input is optional. A missing (or non-finite) value simply drops
    the term it feeds; only exit velocity and kinetic potential need bat_ke.

    Usage:
        predictor = BallFlightPredictor()
        prediction = predictor.predict(BiomechanicsInput(bat_ke=180, transfer_efficiency=80))
        print(prediction.exit_velocity, prediction.confidence)
    """

    BALL_MASS_KG = 0.145
    MS_TO_MPH = 2.237

    BASE_COLLISION_EFFICIENCY = 0.20
    COLLISION_EFFICIENCY_RANGE = (0.18, 0.25)
    SEQUENCING_BONUS = 0.01
    SEQUENCING_BRAIN_SCORE = 60

    BASE_LAUNCH_ANGLE = 18
    # Matched as a lowercase substring of the motor profile label
    PROFILE_LAUNCH_ANGLES = (
        ("spinner", 17),
        ("slingshotter", 21),
        ("whipper", 15),
        ("titan", 24),
    )

    # (minimum bat KE in joules, grade), highest first
    KINETIC_POTENTIAL_BANDS = (
        (200, 80),   # Elite MLB
        (180, 70),   # Plus MLB
        (160, 60),   # Average MLB
        (140, 50),   # Fringe MLB
        (120, 45),   # Top college
        (100, 40),   # College
        (80, 35),    # High school
    )
    KINETIC_POTENTIAL_FLOOR = 30

    CONFIDENCE_FIELDS = (
        "bat_ke",
        "transfer_efficiency",
        "brain_score",
        "body_score",
        "motor_profile",
        "torso_velocity",
        "x_factor",
    )

    CONFIDENCE_LABELS = {
        ConfidenceLevel.HIGH: "High ✓",
        ConfidenceLevel.MEDIUM: "Medium ~",
        ConfidenceLevel.LOW: "Low ?",
    }

    def predict(self, data: BiomechanicsInput) -> BallFlightPrediction:
        data = self._drop_non_finite(data)
        return BallFlightPrediction(
            exit_velocity=self.predict_exit_velocity(data),
            launch_angle=self.predict_launch_angle(data),
            kinetic_potential=self.calculate_kinetic_potential(data),
            confidence=self.calculate_confidence(data),
        )

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def collision_efficiency(self, data: BiomechanicsInput) -> float:
        """
        Share of bat energy reaching the ball.

        Transfer efficiency moves it within [0.18, 0.25] (70% is neutral);
        a brain score above 60 then adds 0.01 outside that clamp.
        """
        efficiency = self.BASE_COLLISION_EFFICIENCY

        if data.transfer_efficiency is not None:
            bonus = (data.transfer_efficiency - 70) / 100 * 0.05
            low, high = self.COLLISION_EFFICIENCY_RANGE
            efficiency = clamp(self.BASE_COLLISION_EFFICIENCY + bonus, low, high)

        if data.brain_score is not None and data.brain_score > self.SEQUENCING_BRAIN_SCORE:
            efficiency += self.SEQUENCING_BONUS

        return efficiency

    def predict_exit_velocity(self, data: BiomechanicsInput) -> Optional[float]:
        """mph to 1 decimal; None unless bat_ke is positive."""
        if data.bat_ke is None or data.bat_ke <= 0:
            return None

        velocity_ms = math.sqrt(2 * data.bat_ke * self.collision_efficiency(data) / self.BALL_MASS_KG)
        return round_half_up(velocity_ms * self.MS_TO_MPH, 1)

    def predict_launch_angle(self, data: BiomechanicsInput) -> int:
        """Always available: 18 degrees adjusted by whichever inputs exist."""
        angle = self.BASE_LAUNCH_ANGLE

        if data.motor_profile:
            profile = data.motor_profile.lower()
            for name, profile_angle in self.PROFILE_LAUNCH_ANGLES:
                if name in profile:
                    angle = profile_angle
                    break

        # Faster torso rotation tilts the swing upward
        if data.torso_velocity is not None:
            angle += clamp((data.torso_velocity - 1000) / 200, -3, 3)

        # Hip-shoulder separation enables lift
        if data.x_factor is not None:
            angle += clamp((data.x_factor - 50) / 20, -2, 2)

        return round_int(angle)

    def calculate_kinetic_potential(self, data: BiomechanicsInput) -> Optional[int]:
        """20-80 grade from bat KE bands, +/-5 for transfer efficiency; None without bat_ke."""
        if data.bat_ke is None:
            return None

        score = self.KINETIC_POTENTIAL_FLOOR
        for min_ke, grade in self.KINETIC_POTENTIAL_BANDS:
            if data.bat_ke >= min_ke:
                score = grade
                break

        if data.transfer_efficiency is not None:
            score += clamp((data.transfer_efficiency - 70) / 10, -5, 5)

        return round_int(clamp(score, 20, 80))

    def calculate_confidence(self, data: BiomechanicsInput) -> ConfidenceLevel:
        present = sum(1 for name in self.CONFIDENCE_FIELDS if getattr(data, name) is not None)
        if present >= 5:
            return ConfidenceLevel.HIGH
        if present >= 3:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    @classmethod
    def confidence_label(cls, confidence: ConfidenceLevel) -> str:
        return cls.CONFIDENCE_LABELS[ConfidenceLevel(confidence)]

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _drop_non_finite(data: BiomechanicsInput) -> BiomechanicsInput:
        """NaN / infinite numbers count as missing."""
        cleaned = {}
        for f in fields(data):
            value = getattr(data, f.name)
            if isinstance(value, float) and not math.isfinite(value):
                logger.debug("Ignoring non-finite %s", f.name)
                value = None
            cleaned[f.name] = value
        return BiomechanicsInput(**cleaned)
