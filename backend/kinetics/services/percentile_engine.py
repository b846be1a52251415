"""
Percentile Engine Service

Ranks a player's bat speed, hand speed, hand-to-bat ratio and timing
consistency against age/level benchmarks, and estimates mechanical loss
(bat speed left on the table) from a linear athlete model.
"""

import logging
import math
import re
from typing import Mapping, Optional

from ..config import DEFAULT_LEVEL, default_regression_coefficients
from ..domain.population import (
    CompositeWeights,
    MechanicalLoss,
    PercentileRange,
    PercentileReport,
    PopulationBaseline,
    RegressionCoefficients,
)
from .benchmarks import DEFAULT_BASELINES
from .signal import clamp, round_half_up, round_int

logger = logging.getLogger(__name__)


class PercentileEngine:
    """
    Population percentile ranking.

    Percentiles are piecewise-linear between the p10 / p50 / p90 anchors of
    the player's group, always in [1, 99].

    Usage:
        engine = PercentileEngine()
        report = engine.get_all_percentiles(
            bat_speed=70, hand_speed=25, hand_to_bat_ratio=1.26,
            timing_cv=0.08, level="High School",
        )
        print(report.composite_percentile)
    """

    MIN_PERCENTILE = 1
    MAX_PERCENTILE = 99

    def __init__(
        self,
        baselines: Mapping[str, PopulationBaseline] = DEFAULT_BASELINES,
        default_group: str = DEFAULT_LEVEL,
        weights: Optional[CompositeWeights] = None,
        coefficients: Optional[RegressionCoefficients] = None,
    ):
        default_group = self.normalize_level(default_group)
        if default_group not in baselines:
            raise ValueError(f"Unknown default benchmark group: {default_group!r}")

        self.baselines = baselines
        self.default_group = default_group
        self.weights = weights or CompositeWeights()
        self.coefficients = coefficients or default_regression_coefficients()

    # -------------------------------------------------------------------------
    # Benchmarks
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_level(level: str) -> str:
        """'High School' / 'high-school' -> 'high_school'"""
        return re.sub(r"[\s-]", "_", level.strip().lower())

    def get_benchmark(self, level: Optional[str]) -> PopulationBaseline:
        """Benchmark for a level, falling back to the default group."""
        if level:
            key = self.normalize_level(level)
            if key in self.baselines:
                return self.baselines[key]

        logger.warning(
            "Unknown benchmark level %r, falling back to %s", level, self.default_group
        )
        return self.baselines[self.default_group]

    # -------------------------------------------------------------------------
    # Percentiles
    # -------------------------------------------------------------------------

    @classmethod
    def calculate_percentile(cls, value: float, range_: PercentileRange) -> int:
        """
        Percentile of a value within a p10/p50/p90 range.

        - value <= p10: linear from 0 at value 0 to 10 at p10
        - p10..p50 and p50..p90: linear between anchors
        - above p90: extrapolated with the p50..p90 slope, capped at 99

        Non-finite values rank 1. Degenerate ranges (p10 <= 0, equal anchors)
        never divide by zero.
        """
        if not math.isfinite(value):
            return cls.MIN_PERCENTILE

        p10, p50, p90 = range_.p10, range_.p50, range_.p90

        if value <= p10:
            raw = round_int(value / p10 * 10) if p10 > 0 else cls.MIN_PERCENTILE
        elif value <= p50:
            raw = 10 + round_int((value - p10) / (p50 - p10) * 40)
        elif value <= p90:
            raw = 50 + round_int((value - p50) / (p90 - p50) * 40)
        elif p90 > p50:
            raw = 90 + round_int((value - p90) / (p90 - p50) * 9)
        else:
            raw = cls.MAX_PERCENTILE

        return int(clamp(raw, cls.MIN_PERCENTILE, cls.MAX_PERCENTILE))

    def get_bat_speed_percentile(self, bat_speed: float, level: Optional[str] = None) -> int:
        return self.calculate_percentile(bat_speed, self.get_benchmark(level).bat_speed)

    def get_hand_speed_percentile(self, hand_speed: float, level: Optional[str] = None) -> int:
        return self.calculate_percentile(hand_speed, self.get_benchmark(level).hand_speed)

    def get_ratio_percentile(self, ratio: float, level: Optional[str] = None) -> int:
        return self.calculate_percentile(ratio, self.get_benchmark(level).hand_to_bat_ratio)

    def get_timing_consistency_percentile(self, timing_cv: float, level: Optional[str] = None) -> int:
        """Lower CV is better, so the raw percentile is inverted."""
        raw = self.calculate_percentile(timing_cv, self.get_benchmark(level).timing_cv)
        return 100 - raw

    def get_all_percentiles(
        self,
        bat_speed: float,
        hand_speed: float,
        hand_to_bat_ratio: float,
        timing_cv: float,
        level: Optional[str] = None,
    ) -> PercentileReport:
        """Every percentile plus the weighted composite."""
        # Resolve once so an unknown level warns once
        group = self.get_benchmark(level).age_group

        bat = self.get_bat_speed_percentile(bat_speed, group)
        hand = self.get_hand_speed_percentile(hand_speed, group)
        ratio = self.get_ratio_percentile(hand_to_bat_ratio, group)
        timing = self.get_timing_consistency_percentile(timing_cv, group)

        w = self.weights
        composite = round_int(
            bat * w.bat_speed + hand * w.hand_speed + ratio * w.ratio + timing * w.timing
        )

        return PercentileReport(
            level=group,
            bat_speed_percentile=bat,
            hand_speed_percentile=hand,
            ratio_percentile=ratio,
            timing_percentile=timing,
            composite_percentile=composite,
        )

    # -------------------------------------------------------------------------
    # Mechanical Loss
    # -------------------------------------------------------------------------

    def get_expected_bat_speed(
        self,
        bat_score: float,
        brain_score: float,
        body_score: float,
        ball_score: float,
        coefficients: Optional[RegressionCoefficients] = None,
    ) -> float:
        c = coefficients or self.coefficients
        return (
            c.beta_0
            + c.beta_1 * bat_score
            + c.beta_2 * brain_score
            + c.beta_3 * body_score
            + c.beta_4 * ball_score
        )

    @staticmethod
    def calculate_mechanical_loss(actual_bat_speed: float, expected_bat_speed: float) -> float:
        return max(0.0, expected_bat_speed - actual_bat_speed)

    def estimate_mechanical_loss(
        self,
        actual_bat_speed: float,
        bat_score: float,
        brain_score: float,
        body_score: float,
        ball_score: float,
        coefficients: Optional[RegressionCoefficients] = None,
    ) -> MechanicalLoss:
        """Expected bat speed from the sub-scores and the gap to the actual."""
        expected = self.get_expected_bat_speed(
            bat_score, brain_score, body_score, ball_score, coefficients
        )
        return MechanicalLoss(
            expected_bat_speed=round_half_up(expected, 1),
            actual_bat_speed=actual_bat_speed,
            loss=round_half_up(self.calculate_mechanical_loss(actual_bat_speed, expected), 1),
        )
