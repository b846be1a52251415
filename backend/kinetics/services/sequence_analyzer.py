"""
Sequence Analyzer Service

Compares the order in which body segments reach peak momentum against the
ideal body-to-bat kinetic chain and scores the deviation.

This is the main entry point for diagnosing a swing's kinematic sequence.
"""

import logging
import math
from typing import Mapping, Optional

from ..domain.pose import SwingPoseSequence
from ..domain.sequence import (
    IDEAL_SEQUENCE,
    SegmentMomentumData,
    SegmentName,
    SegmentState,
    SequenceError,
    SequencePlaybackState,
    SwingSequenceAnalysis,
)
from .momentum_extractor import MomentumExtractor
from .signal import clamp, coefficient_of_variation, round_int

logger = logging.getLogger(__name__)


class SequenceAnalyzer:
    """
    Diagnoses the kinematic sequence of a swing.

    This service:
    1. Sorts the six segments by peak time (actual order)
    2. Flags every segment that peaked early or late versus the ideal order
    3. Scores order accuracy (70%) and timing evenness (30%)
    4. Writes a templated summary

    It never raises: degenerate input scores 0 with an explanatory summary.

    Usage:
        analyzer = SequenceAnalyzer()

        # From raw pose frames
        result = analyzer.analyze_pose_sequence(sequence)

        # Or from pre-computed segment curves
        result = analyzer.analyze("swing-1", segments)
        print(f"Sequence score: {result.sequence_score}")
    """

    ORDER_WEIGHT = 0.7
    TIMING_WEIGHT = 0.3

    # Timing score loses this many points per unit of interval CV
    TIMING_CV_PENALTY = 50

    # ms before/after a peak during which a segment shows as "active"
    ACTIVATION_WINDOW_MS = 50

    def __init__(self, extractor: Optional[MomentumExtractor] = None):
        self.extractor = extractor or MomentumExtractor()

    # -------------------------------------------------------------------------
    # Main Analysis Methods
    # -------------------------------------------------------------------------

    def analyze_pose_sequence(self, sequence: SwingPoseSequence) -> SwingSequenceAnalysis:
        """Extract segment momentum from pose frames, then analyze it."""
        segments = self.extractor.compute_segment_momentum(sequence)
        return self.analyze(sequence.swing_id, segments)

    def analyze(
        self,
        swing_id: str,
        segments: Mapping[SegmentName, SegmentMomentumData],
    ) -> SwingSequenceAnalysis:
        """
        Analyze the momentum-peak order of a swing.

        Args:
            swing_id: Identifier carried into the result
            segments: Momentum data for the six segments

        Returns:
            Complete SwingSequenceAnalysis
        """
        if self._is_degenerate(segments):
            return self._degenerate_analysis(swing_id, segments)

        # Stable sort: segments peaking together keep their ideal order
        actual_order = tuple(
            sorted(IDEAL_SEQUENCE, key=lambda s: segments[s].peak_time_ms)
        )

        errors = []
        for expected_idx, segment in enumerate(IDEAL_SEQUENCE):
            actual_idx = actual_order.index(segment)
            if actual_idx != expected_idx:
                errors.append(SequenceError(
                    segment=segment,
                    expected_position=expected_idx + 1,
                    actual_position=actual_idx + 1,
                    description=self._error_description(segment, expected_idx, actual_idx),
                ))

        sequence_match = not errors

        return SwingSequenceAnalysis(
            swing_id=swing_id,
            frame_times=segments[IDEAL_SEQUENCE[0]].frame_times,
            segments=dict(segments),
            actual_order=actual_order,
            ideal_order=IDEAL_SEQUENCE,
            sequence_match=sequence_match,
            sequence_errors=tuple(errors),
            sequence_score=self.calculate_sequence_score(actual_order, segments),
            summary=self._generate_summary(sequence_match, actual_order, errors),
        )

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    @staticmethod
    def count_inversions(actual_order: tuple[SegmentName, ...]) -> int:
        """Pairs that appear in the opposite order to the ideal sequence."""
        ideal_positions = [IDEAL_SEQUENCE.index(s) for s in actual_order]
        inversions = 0
        for i in range(len(ideal_positions)):
            for j in range(i + 1, len(ideal_positions)):
                if ideal_positions[i] > ideal_positions[j]:
                    inversions += 1
        return inversions

    @classmethod
    def calculate_order_score(cls, actual_order: tuple[SegmentName, ...]) -> float:
        """100 x (1 - normalized Kendall-tau distance). 100 iff order is ideal."""
        n = len(actual_order)
        max_inversions = n * (n - 1) / 2
        if max_inversions == 0:
            return 100.0
        return (1 - cls.count_inversions(actual_order) / max_inversions) * 100

    @classmethod
    def calculate_timing_score(cls, peak_times: list[float]) -> Optional[float]:
        """
        Evenness of the gaps between consecutive peaks.

        Returns:
            max(0, 100 - 50 x CV of the intervals), or None when there are
            fewer than two intervals to compare
        """
        intervals = [b - a for a, b in zip(peak_times, peak_times[1:])]
        if len(intervals) < 2:
            return None
        cv = coefficient_of_variation(intervals)
        return max(0.0, 100 - cv * cls.TIMING_CV_PENALTY)

    def calculate_sequence_score(
        self,
        actual_order: tuple[SegmentName, ...],
        segments: Mapping[SegmentName, SegmentMomentumData],
    ) -> int:
        """Weighted order + timing score, rounded to an integer in [0, 100]."""
        order_score = self.calculate_order_score(actual_order)
        timing_score = self.calculate_timing_score(
            [segments[s].peak_time_ms for s in actual_order]
        )
        if timing_score is None:
            timing_score = order_score

        weighted = order_score * self.ORDER_WEIGHT + timing_score * self.TIMING_WEIGHT
        return round_int(clamp(weighted, 0, 100))

    # -------------------------------------------------------------------------
    # Playback
    # -------------------------------------------------------------------------

    def playback_state(
        self,
        analysis: SwingSequenceAnalysis,
        current_time_ms: float,
        activation_window_ms: float = ACTIVATION_WINDOW_MS,
    ) -> SequencePlaybackState:
        """
        Segment states at a moment of video playback.

        A segment is active within the activation window of its peak,
        peaked after it and pending before it.
        """
        states: dict[SegmentName, SegmentState] = {}
        peaked: list[SegmentName] = []
        next_segment: Optional[SegmentName] = None

        for segment in IDEAL_SEQUENCE:
            data = analysis.segments.get(segment)
            if data is None:
                states[segment] = SegmentState.INACTIVE
                continue

            time_to_peak = data.peak_time_ms - current_time_ms

            if current_time_ms >= data.peak_time_ms + activation_window_ms:
                states[segment] = SegmentState.PEAKED
                peaked.append(segment)
            elif abs(time_to_peak) <= activation_window_ms:
                states[segment] = SegmentState.ACTIVE
            elif time_to_peak > activation_window_ms:
                states[segment] = SegmentState.PENDING
                if next_segment is None:
                    next_segment = segment
            else:
                states[segment] = SegmentState.INACTIVE

        # Next to peak follows the actual firing order
        for segment in analysis.actual_order:
            if segment not in peaked and states.get(segment) != SegmentState.ACTIVE:
                next_segment = segment
                break

        return SequencePlaybackState(
            current_time_ms=current_time_ms,
            segment_states=states,
            peaked_segments=tuple(peaked),
            next_segment_to_peak=next_segment,
        )

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_degenerate(segments: Mapping[SegmentName, SegmentMomentumData]) -> bool:
        if any(s not in segments for s in IDEAL_SEQUENCE):
            return True
        if any(not math.isfinite(segments[s].peak_time_ms) for s in IDEAL_SEQUENCE):
            return True
        if all(len(segments[s].momentum_curve) == 0 for s in IDEAL_SEQUENCE):
            return True
        # No motion: every segment "peaks" on the same sample
        return len({segments[s].peak_time_ms for s in IDEAL_SEQUENCE}) == 1

    @staticmethod
    def _degenerate_analysis(
        swing_id: str,
        segments: Mapping[SegmentName, SegmentMomentumData],
    ) -> SwingSequenceAnalysis:
        logger.debug("Swing %s: degenerate segment data, scoring 0", swing_id)
        filled = {
            seg: segments.get(seg) or SegmentMomentumData(segment=seg)
            for seg in IDEAL_SEQUENCE
        }
        return SwingSequenceAnalysis(
            swing_id=swing_id,
            frame_times=filled[IDEAL_SEQUENCE[0]].frame_times,
            segments=filled,
            actual_order=IDEAL_SEQUENCE,
            ideal_order=IDEAL_SEQUENCE,
            sequence_match=False,
            sequence_errors=(),
            sequence_score=0,
            summary=(
                "Body-to-Bat sequence: not enough motion data to determine "
                "the firing order."
            ),
        )

    @staticmethod
    def _error_description(segment: SegmentName, expected_idx: int, actual_idx: int) -> str:
        timing = "early" if actual_idx < expected_idx else "late"
        return (
            f"{segment.display_name} fired {timing} "
            f"(position {actual_idx + 1} instead of {expected_idx + 1})"
        )

    @staticmethod
    def _generate_summary(
        sequence_match: bool,
        actual_order: tuple[SegmentName, ...],
        errors: list[SequenceError],
    ) -> str:
        """Generate a text summary of the diagnosis."""
        if sequence_match:
            order = " → ".join(s.display_name for s in actual_order)
            return f"Body-to-Bat sequence: in sequence ({order})."

        parts = []
        early = [e.segment.display_name for e in errors if e.is_early]
        late = [e.segment.display_name for e in errors if not e.is_early]
        if early:
            parts.append(f"{', '.join(early)} fired early")
        if late:
            parts.append(f"{', '.join(late)} fired late")

        return f"Body-to-Bat sequence: out of sequence. {'. '.join(parts)}."
