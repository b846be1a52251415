"""
Contact Scorer Service

StatCast-aligned batted-ball classification and the 0-100 Contact Quality
Score: "how hard and how clean you hit the ball."

Definitions (fixed):
- Hard hit: EV >= 95 mph
- Sweet spot: 8 <= LA <= 32 degrees
- Barrel: EV >= 98 mph inside an LA window that widens with EV
- Batted-ball type: GB < 10 <= LD < 25 <= FB < 50 <= PU
"""

import logging
import math
from typing import Optional, Sequence

from ..domain.contact import (
    BattedBallEvent,
    BattedBallType,
    ContactQualitySessionStats,
    ContactScoreBreakdown,
    ScoredBattedBallEvent,
    TrendDirection,
)
from .signal import clamp, round_half_up, round_int

logger = logging.getLogger(__name__)


class ContactScorer:
    """
    Scores batted balls and rolls them up per session.

    All methods are static - no state needed.

    Usage:
        scored = ContactScorer.score_batted_ball(BattedBallEvent(102, 20))
        print(scored.contact_score, scored.is_barrel)

        stats = ContactScorer.calculate_session_stats([scored, ...])
    """

    HARD_HIT_MIN_EV = 95
    SWEET_SPOT_LA = (8, 32)

    BARREL_MIN_EV = 98
    BARREL_BASE_WINDOW = (26, 30)     # LA window at 98 mph
    BARREL_MAX_WINDOW = (8, 50)       # Fully open window
    BARREL_SATURATION_EV = 116
    # Degrees per mph above 98. The high side reaches 50 exactly at 116 mph;
    # the low side keeps 20 degrees inside the window from 102 mph.
    BARREL_LOW_WIDEN_PER_MPH = 1.5
    BARREL_HIGH_WIDEN = (20, 18)      # Degrees gained over mph

    # Base score maps EV over this range onto 0-70 points
    EV_SCORE_RANGE = (60, 115)
    BASE_SCORE_MAX = 70

    HARD_HIT_BONUS = 10
    SWEET_SPOT_BONUS = 10
    BARREL_BONUS = 15

    # -------------------------------------------------------------------------
    # StatCast Definitions
    # -------------------------------------------------------------------------

    @classmethod
    def is_hard_hit(cls, exit_velocity: float) -> bool:
        return exit_velocity >= cls.HARD_HIT_MIN_EV

    @classmethod
    def is_sweet_spot(cls, launch_angle: float) -> bool:
        low, high = cls.SWEET_SPOT_LA
        return low <= launch_angle <= high

    @classmethod
    def barrel_window(cls, exit_velocity: float) -> Optional[tuple[float, float]]:
        """
        Launch-angle window that counts as a barrel at this exit velocity.

        [26, 30] at 98 mph. The low bound drops 1.5 degrees per mph to a
        floor of 8; the high bound rises 20/18 degrees per mph, so the window
        is [8, 50] exactly from 116 mph.

        Returns:
            (low, high) in degrees, or None below 98 mph
        """
        if not exit_velocity >= cls.BARREL_MIN_EV:
            return None

        ev_above = min(exit_velocity - cls.BARREL_MIN_EV,
                       cls.BARREL_SATURATION_EV - cls.BARREL_MIN_EV)

        rise, run = cls.BARREL_HIGH_WIDEN

        low = max(cls.BARREL_MAX_WINDOW[0],
                  cls.BARREL_BASE_WINDOW[0] - ev_above * cls.BARREL_LOW_WIDEN_PER_MPH)
        high = min(cls.BARREL_MAX_WINDOW[1],
                   cls.BARREL_BASE_WINDOW[1] + ev_above * rise / run)
        return low, high

    @classmethod
    def is_barrel(cls, exit_velocity: float, launch_angle: float) -> bool:
        window = cls.barrel_window(exit_velocity)
        if window is None:
            return False
        return window[0] <= launch_angle <= window[1]

    @staticmethod
    def get_batted_ball_type(launch_angle: float) -> BattedBallType:
        if launch_angle < 10:
            return BattedBallType.GROUND_BALL
        if 10 <= launch_angle < 25:
            return BattedBallType.LINE_DRIVE
        if 25 <= launch_angle < 50:
            return BattedBallType.FLY_BALL
        if launch_angle >= 50:
            return BattedBallType.POP_UP
        return BattedBallType.UNKNOWN

    # -------------------------------------------------------------------------
    # Contact Quality Score
    # -------------------------------------------------------------------------

    @staticmethod
    def launch_angle_bonus(launch_angle: float) -> int:
        """
        Tiered bonus/penalty around the 18-22 degree optimum.

        18-22: +15 | 12-28: +10 | 8-32: +5 | 0-8 or 32-50: -5
        above 50: -15 | negative: -10
        """
        if 18 <= launch_angle <= 22:
            return 15
        if 12 <= launch_angle <= 28:
            return 10
        if 8 <= launch_angle <= 32:
            return 5
        if 0 <= launch_angle < 8:
            return -5
        if 32 < launch_angle <= 50:
            return -5
        if launch_angle > 50:
            return -15
        return -10

    @classmethod
    def calculate_contact_score(
        cls,
        exit_velocity: float,
        launch_angle: float,
    ) -> ContactScoreBreakdown:
        """
        Calculate the 0-100 Contact Quality Score.

        score = base (0-70) + LA bonus (-15..+15) + hard hit (+10)
                + sweet spot (+10, dropped when barrel) + barrel (+15)

        A barrel already implies a sweet-spot angle, so the sweet-spot
        bonus is zeroed when the barrel bonus applies.

        No contact (EV <= 0) or a non-finite input scores an all-zero
        breakdown.
        """
        if not cls._is_valid_contact(exit_velocity, launch_angle):
            return ContactScoreBreakdown()

        ev_min, ev_max = cls.EV_SCORE_RANGE
        ev_normalized = clamp((exit_velocity - ev_min) / (ev_max - ev_min), 0, 1)
        base_score = ev_normalized * cls.BASE_SCORE_MAX

        la_bonus = cls.launch_angle_bonus(launch_angle)

        barrel = cls.is_barrel(exit_velocity, launch_angle)
        hard_hit_bonus = cls.HARD_HIT_BONUS if cls.is_hard_hit(exit_velocity) else 0
        barrel_bonus = cls.BARREL_BONUS if barrel else 0
        sweet_spot_bonus = (
            cls.SWEET_SPOT_BONUS
            if cls.is_sweet_spot(launch_angle) and not barrel
            else 0
        )

        raw_score = base_score + la_bonus + hard_hit_bonus + sweet_spot_bonus + barrel_bonus

        return ContactScoreBreakdown(
            base_score=round_half_up(base_score, 1),
            la_angle_bonus=la_bonus,
            hard_hit_bonus=hard_hit_bonus,
            sweet_spot_bonus=sweet_spot_bonus,
            barrel_bonus=barrel_bonus,
            raw_score=round_half_up(raw_score, 1),
            final_score=round_int(clamp(raw_score, 0, 100)),
        )

    @classmethod
    def get_contact_score(cls, exit_velocity: float, launch_angle: float) -> int:
        return cls.calculate_contact_score(exit_velocity, launch_angle).final_score

    @classmethod
    def score_batted_ball(cls, event: BattedBallEvent) -> ScoredBattedBallEvent:
        """Classify and score a single batted ball."""
        ev, la = event.exit_velocity, event.launch_angle
        breakdown = cls.calculate_contact_score(ev, la)

        if not cls._is_valid_contact(ev, la):
            return ScoredBattedBallEvent(
                event=event,
                is_hard_hit=False,
                is_sweet_spot=False,
                is_barrel=False,
                bb_type=(
                    cls.get_batted_ball_type(la)
                    if math.isfinite(la) else BattedBallType.UNKNOWN
                ),
                contact_score=0,
                score_breakdown=breakdown,
            )

        return ScoredBattedBallEvent(
            event=event,
            is_hard_hit=cls.is_hard_hit(ev),
            is_sweet_spot=cls.is_sweet_spot(la),
            is_barrel=cls.is_barrel(ev, la),
            bb_type=cls.get_batted_ball_type(la),
            contact_score=breakdown.final_score,
            score_breakdown=breakdown,
        )

    # -------------------------------------------------------------------------
    # Session Aggregation
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_session_stats(
        events: Sequence[ScoredBattedBallEvent],
    ) -> ContactQualitySessionStats:
        """Roll scored events up into session statistics."""
        if not events:
            return ContactQualitySessionStats()

        total = len(events)

        def pct(count: int) -> float:
            return round_half_up(count / total * 100, 1)

        evs = [e.exit_velocity for e in events if e.exit_velocity > 0]
        las = [e.launch_angle for e in events if math.isfinite(e.launch_angle)]
        scores = [e.contact_score for e in events]
        distances = [e.distance for e in events if e.distance is not None and e.distance > 0]
        bb_types = [e.bb_type for e in events]

        return ContactQualitySessionStats(
            total_events=total,
            avg_ev=round_half_up(sum(evs) / len(evs), 1) if evs else 0.0,
            max_ev=round_half_up(max(evs), 1) if evs else 0.0,
            min_ev=round_half_up(min(evs), 1) if evs else 0.0,
            avg_la=round_half_up(sum(las) / len(las), 1) if las else 0.0,
            max_la=round_half_up(max(las), 1) if las else 0.0,
            min_la=round_half_up(min(las), 1) if las else 0.0,
            hard_hit_pct=pct(sum(1 for e in events if e.is_hard_hit)),
            sweet_spot_pct=pct(sum(1 for e in events if e.is_sweet_spot)),
            barrel_pct=pct(sum(1 for e in events if e.is_barrel)),
            gb_pct=pct(bb_types.count(BattedBallType.GROUND_BALL)),
            ld_pct=pct(bb_types.count(BattedBallType.LINE_DRIVE)),
            fb_pct=pct(bb_types.count(BattedBallType.FLY_BALL)),
            pu_pct=pct(bb_types.count(BattedBallType.POP_UP)),
            avg_contact_score=round_half_up(sum(scores) / total, 1),
            max_contact_score=max(scores),
            min_contact_score=min(scores),
            avg_distance=round_int(sum(distances) / len(distances)) if distances else None,
            max_distance=round_int(max(distances)) if distances else None,
        )

    # -------------------------------------------------------------------------
    # Trends & Labels
    # -------------------------------------------------------------------------

    @staticmethod
    def get_trend_direction(
        current_avg_score: float,
        previous_avg_score: float,
        threshold: float = 3,
    ) -> TrendDirection:
        change = current_avg_score - previous_avg_score
        if change > threshold:
            return TrendDirection.IMPROVING
        if change < -threshold:
            return TrendDirection.DECLINING
        return TrendDirection.STABLE

    @staticmethod
    def get_contact_score_grade(score: float) -> str:
        if score >= 90:
            return "Elite"
        elif score >= 80:
            return "Excellent"
        elif score >= 70:
            return "Very Good"
        elif score >= 60:
            return "Good"
        elif score >= 50:
            return "Average"
        elif score >= 40:
            return "Below Average"
        elif score >= 30:
            return "Poor"
        else:
            return "Very Poor"

    @staticmethod
    def explain_contact_score(score: float) -> str:
        """One-sentence explanation for players."""
        if score >= 90:
            return "You're crushing it: elite-level contact quality."
        if score >= 80:
            return "Excellent contact, consistently hitting the ball hard and clean."
        if score >= 70:
            return "Very good contact. Your swing is producing quality output."
        if score >= 60:
            return "Good contact. Solid work, room to grow."
        if score >= 50:
            return "Average contact. Keep working on barrel accuracy."
        if score >= 40:
            return "Below average. Focus on exit velocity and launch angle."
        return "Needs work. Let's build better contact quality."

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_valid_contact(exit_velocity: float, launch_angle: float) -> bool:
        return (
            math.isfinite(exit_velocity)
            and math.isfinite(launch_angle)
            and exit_velocity > 0
        )


def score_batted_ball(exit_velocity: float, launch_angle: float, **extra) -> ScoredBattedBallEvent:
    """
    Quick function to score one batted ball.

    Usage:
        scored = score_batted_ball(102, 20)
        print(scored.contact_score)
    """
    return ContactScorer.score_batted_ball(BattedBallEvent(exit_velocity, launch_angle, **extra))
