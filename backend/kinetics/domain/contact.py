"""
Contact Quality Domain Models

Batted-ball events, their StatCast-style classification and the session
roll-up. Exit velocity in mph, angles in degrees, distance in feet.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BattedBallType(str, Enum):
    """Batted-ball category by launch angle."""
    GROUND_BALL = "GB"
    LINE_DRIVE = "LD"
    FLY_BALL = "FB"
    POP_UP = "PU"
    UNKNOWN = "UNK"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass(frozen=True)
class BattedBallEvent:
    """
    One batted ball as reported by a launch monitor.

    Only exit_velocity and launch_angle feed the score.
    """
    exit_velocity: float
    launch_angle: float
    distance: Optional[float] = None
    spray_angle: Optional[float] = None
    hang_time: Optional[float] = None
    result: Optional[str] = None
    hit_type: Optional[str] = None


@dataclass(frozen=True)
class ContactScoreBreakdown:
    """
    Additive parts of the 0-100 contact score.

    Attributes:
        base_score: 0-70 from exit velocity (60 -> 115 mph)
        la_angle_bonus: -15 to +15 by launch angle tier
        hard_hit_bonus: +10 if hard hit
        sweet_spot_bonus: +10 if sweet spot and not a barrel
        barrel_bonus: +15 if barrel
        raw_score: Sum before clamping
        final_score: Clamped to 0-100 and rounded
    """
    base_score: float = 0.0
    la_angle_bonus: int = 0
    hard_hit_bonus: int = 0
    sweet_spot_bonus: int = 0
    barrel_bonus: int = 0
    raw_score: float = 0.0
    final_score: int = 0


@dataclass(frozen=True)
class ScoredBattedBallEvent:
    """A batted ball with its flags, category and contact score."""
    event: BattedBallEvent
    is_hard_hit: bool
    is_sweet_spot: bool
    is_barrel: bool
    bb_type: BattedBallType
    contact_score: int
    score_breakdown: ContactScoreBreakdown

    @property
    def exit_velocity(self) -> float:
        return self.event.exit_velocity

    @property
    def launch_angle(self) -> float:
        return self.event.launch_angle

    @property
    def distance(self) -> Optional[float]:
        return self.event.distance


@dataclass(frozen=True)
class ContactQualitySessionStats:
    """
    Session-level roll-up of scored batted balls.

    Percentages are 0-100 with one decimal.
    """
    total_events: int = 0

    # Exit velocity
    avg_ev: float = 0.0
    max_ev: float = 0.0
    min_ev: float = 0.0

    # Launch angle
    avg_la: float = 0.0
    max_la: float = 0.0
    min_la: float = 0.0

    # Quality percentages
    hard_hit_pct: float = 0.0
    sweet_spot_pct: float = 0.0
    barrel_pct: float = 0.0

    # Batted-ball type distribution
    gb_pct: float = 0.0
    ld_pct: float = 0.0
    fb_pct: float = 0.0
    pu_pct: float = 0.0

    # Contact score
    avg_contact_score: float = 0.0
    max_contact_score: int = 0
    min_contact_score: int = 0

    # Distance (only when reported)
    avg_distance: Optional[int] = None
    max_distance: Optional[int] = None
