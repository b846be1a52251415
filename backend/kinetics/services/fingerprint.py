"""
Fingerprint Aggregator Service

Aggregates a window of sensor swings into a Kinetic Fingerprint and maps it
onto a motor profile.
"""

import logging
import math
from typing import Callable, Optional, Sequence

import numpy as np

from ..domain.fingerprint import (
    ComfortZone,
    FingerprintComparison,
    FingerprintSwing,
    IntentMap,
    KineticFingerprintData,
    MotorProfile,
    PatternMetrics,
    TempoCategory,
    TimingSignature,
    ZoneBias,
)
from .signal import (
    clamp,
    coefficient_of_variation,
    is_finite_number,
    mean,
    population_std,
    round_half_up,
    round_int,
)

logger = logging.getLogger(__name__)


MotorProfileRule = tuple[Callable[[KineticFingerprintData], bool], MotorProfile]

# Evaluated in order, first match wins
MOTOR_PROFILE_RULES: list[MotorProfileRule] = [
    (
        lambda fp: fp.timing_signature.tempo_category == TempoCategory.QUICK
        and fp.pattern_metrics.tightness > 60,
        MotorProfile.SPINNER,
    ),
    (
        lambda fp: fp.timing_signature.tempo_category == TempoCategory.DELIBERATE
        and fp.pattern_metrics.zone_bias == ZoneBias.LOW,
        MotorProfile.SLINGSHOTTER,
    ),
    (
        lambda fp: fp.pattern_metrics.pull_bias < -10
        and fp.pattern_metrics.tightness > 50,
        MotorProfile.WHIPPER,
    ),
    (
        lambda fp: fp.timing_signature.timing_variance < 0.05
        and fp.pattern_metrics.tightness > 70,
        MotorProfile.TITAN,
    ),
]


class FingerprintAggregator:
    """
    Builds Kinetic Fingerprints from swing windows.

    A fingerprint is always recomputed from the full window. Swings with a
    non-finite attack angle, direction or timing are left out.

    Usage:
        aggregator = FingerprintAggregator()
        fp = aggregator.calculate(swings)
        profile = aggregator.classify_motor_profile(fp)
    """

    QUICK_TEMPO_MS = 350
    DELIBERATE_TEMPO_MS = 450

    # Trigger-to-impact mapped onto the 0-100 depth index
    DEPTH_RANGE_MS = (250, 550)

    LOW_ZONE_ANGLE = -5
    HIGH_ZONE_ANGLE = 15

    HEATMAP_SIZE = 10
    HEATMAP_DIRECTION_RANGE = (-30, 30)
    HEATMAP_ANGLE_RANGE = (-10, 40)

    # Changes smaller than this are left out of the comparison summary
    SUMMARY_THRESHOLD = 3
    IMPROVEMENT_THRESHOLD = 5

    def __init__(self, rules: Optional[Sequence[MotorProfileRule]] = None):
        self.rules = tuple(rules if rules is not None else MOTOR_PROFILE_RULES)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def calculate(self, swings: Sequence[FingerprintSwing]) -> KineticFingerprintData:
        """
        Aggregate a window of swings.

        Args:
            swings: Sensor swings, any order

        Returns:
            KineticFingerprintData; the neutral fingerprint for no swings
        """
        valid = [s for s in swings if self._is_valid_swing(s)]
        if len(valid) < len(swings):
            logger.debug("Dropped %d swing(s) with non-finite values", len(swings) - len(valid))
        if not valid:
            return self.empty_fingerprint()

        directions = [s.attack_direction for s in valid]
        angles = [s.attack_angle for s in valid]
        timings = [s.time_to_contact for s in valid]

        horizontal_mean = mean(directions)
        horizontal_std = population_std(directions)
        vertical_mean = mean(angles)
        vertical_std = population_std(angles)

        timing_mean = mean(timings)
        timing_cv = coefficient_of_variation(timings)

        depth_low, depth_high = self.DEPTH_RANGE_MS
        depth_index = clamp((timing_mean - depth_low) / (depth_high - depth_low) * 100, 0, 100)
        tightness = clamp(100 - 2 * (horizontal_std + vertical_std), 0, 100)

        intent_map = IntentMap(
            horizontal_mean=round_half_up(horizontal_mean, 1),
            horizontal_std_dev=round_half_up(horizontal_std, 1),
            vertical_mean=round_half_up(vertical_mean, 1),
            vertical_std_dev=round_half_up(vertical_std, 1),
            depth_index=round_int(depth_index),
            depth_consistency=round_int(100 - timing_cv * 100),
        )
        timing_signature = TimingSignature(
            trigger_to_impact_ms=round_int(timing_mean),
            timing_variance=round_half_up(timing_cv, 3),
            tempo_category=self.tempo_category(timing_mean),
        )
        pattern_metrics = PatternMetrics(
            tightness=round_int(tightness),
            pull_bias=round_half_up(horizontal_mean, 1),
            zone_bias=self.zone_bias(vertical_mean),
            comfort_zone=ComfortZone(
                horizontal=self._middle_80(directions),
                vertical=self._middle_80(angles),
            ),
        )

        return KineticFingerprintData(
            intent_map=intent_map,
            timing_signature=timing_signature,
            pattern_metrics=pattern_metrics,
            heatmap=self._heatmap(directions, angles),
            impact_center=self._impact_center(valid),
            swing_count=len(valid),
        )

    def empty_fingerprint(self) -> KineticFingerprintData:
        """Neutral fingerprint: depth 50, moderate tempo, middle zone."""
        return KineticFingerprintData(
            heatmap=self._empty_grid(),
            swing_count=0,
        )

    @classmethod
    def tempo_category(cls, trigger_to_impact_ms: float) -> TempoCategory:
        if trigger_to_impact_ms < cls.QUICK_TEMPO_MS:
            return TempoCategory.QUICK
        if trigger_to_impact_ms <= cls.DELIBERATE_TEMPO_MS:
            return TempoCategory.MODERATE
        return TempoCategory.DELIBERATE

    @classmethod
    def zone_bias(cls, vertical_mean: float) -> ZoneBias:
        if vertical_mean < cls.LOW_ZONE_ANGLE:
            return ZoneBias.LOW
        if vertical_mean > cls.HIGH_ZONE_ANGLE:
            return ZoneBias.HIGH
        return ZoneBias.MIDDLE

    # -------------------------------------------------------------------------
    # Classification & Comparison
    # -------------------------------------------------------------------------

    def classify_motor_profile(self, fingerprint: KineticFingerprintData) -> MotorProfile:
        for predicate, profile in self.rules:
            if predicate(fingerprint):
                return profile
        return MotorProfile.UNKNOWN

    def compare(
        self,
        older: KineticFingerprintData,
        newer: KineticFingerprintData,
    ) -> FingerprintComparison:
        """Track progression from an older window to a newer one."""
        tightness_change = newer.pattern_metrics.tightness - older.pattern_metrics.tightness
        consistency_change = newer.intent_map.depth_consistency - older.intent_map.depth_consistency

        return FingerprintComparison(
            tightness_change=tightness_change,
            consistency_change=consistency_change,
            improved=(
                tightness_change > self.IMPROVEMENT_THRESHOLD
                or consistency_change > self.IMPROVEMENT_THRESHOLD
            ),
            summary=self._comparison_summary(tightness_change, consistency_change),
        )

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_valid_swing(swing: FingerprintSwing) -> bool:
        return all(
            is_finite_number(v)
            for v in (swing.attack_angle, swing.attack_direction, swing.time_to_contact)
        )

    @staticmethod
    def _middle_80(values: list[float]) -> tuple[float, float]:
        """Values at the 10th and 90th percentile positions of the sorted list."""
        ordered = sorted(values)
        n = len(ordered)
        return (
            round_half_up(ordered[math.floor(n * 0.1)], 1),
            round_half_up(ordered[math.floor(n * 0.9)], 1),
        )

    def _empty_grid(self) -> tuple[tuple[int, ...], ...]:
        return tuple((0,) * self.HEATMAP_SIZE for _ in range(self.HEATMAP_SIZE))

    def _heatmap(self, directions: list[float], angles: list[float]) -> tuple[tuple[int, ...], ...]:
        """
        Share of swings per cell, in percent.

        Columns run pull to oppo, rows run from the highest attack angles
        (top) down. Values outside the grid land in the edge cells.
        """
        size = self.HEATMAP_SIZE
        h_min, h_max = self.HEATMAP_DIRECTION_RANGE
        v_min, v_max = self.HEATMAP_ANGLE_RANGE

        h = np.clip(np.asarray(directions, dtype=float), h_min, h_max - 0.01)
        v = np.clip(np.asarray(angles, dtype=float), v_min, v_max - 0.01)

        cols = np.floor((h - h_min) / ((h_max - h_min) / size)).astype(int)
        rows = (size - 1) - np.floor((v - v_min) / ((v_max - v_min) / size)).astype(int)

        grid = np.zeros((size, size), dtype=int)
        np.add.at(grid, (rows, cols), 1)

        total = len(directions)
        return tuple(
            tuple(round_int(count / total * 100) for count in row)
            for row in grid.tolist()
        )

    @staticmethod
    def _impact_center(swings: list[FingerprintSwing]) -> Optional[tuple[float, float]]:
        located = [
            (s.impact_loc_x, s.impact_loc_y)
            for s in swings
            if s.impact_loc_x is not None and s.impact_loc_y is not None
        ]
        if not located:
            return None
        return (
            round_half_up(mean([x for x, _ in located]), 2),
            round_half_up(mean([y for _, y in located]), 2),
        )

    def _comparison_summary(self, tightness_change: float, consistency_change: float) -> str:
        parts = []

        if abs(tightness_change) > self.SUMMARY_THRESHOLD:
            if tightness_change > 0:
                parts.append(f"Pattern tightened by {tightness_change:.0f}%")
            else:
                parts.append(f"Pattern loosened by {abs(tightness_change):.0f}%")

        if abs(consistency_change) > self.SUMMARY_THRESHOLD:
            if consistency_change > 0:
                parts.append(f"Timing tightened by {consistency_change:.0f}%")
            else:
                parts.append(f"Timing loosened by {abs(consistency_change):.0f}%")

        if not parts:
            return "No significant changes detected."
        return ". ".join(parts) + "."
