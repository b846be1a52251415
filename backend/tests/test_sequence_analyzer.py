import pytest

from conftest import build_pose_sequence
from kinetics.domain.sequence import IDEAL_SEQUENCE, SegmentMomentumData, SegmentName, SegmentState
from kinetics.services.sequence_analyzer import SequenceAnalyzer


@pytest.fixture
def analyzer():
    return SequenceAnalyzer()


def test_ideal_order_scores_100(analyzer, segments_factory, ideal_peak_times):
    result = analyzer.analyze("ideal", segments_factory(ideal_peak_times))

    assert result.sequence_match
    assert result.sequence_score == 100
    assert result.sequence_errors == ()
    assert result.actual_order == IDEAL_SEQUENCE
    assert result.summary.startswith("Body-to-Bat sequence: in sequence")


def test_late_torso_is_diagnosed(analyzer, segments_factory, ideal_peak_times):
    peaks = dict(ideal_peak_times)
    peaks[SegmentName.TORSO] = 450.0

    result = analyzer.analyze("late-torso", segments_factory(peaks))

    assert not result.sequence_match
    assert result.actual_order == (
        SegmentName.REAR_LEG,
        SegmentName.LEAD_LEG,
        SegmentName.BOTTOM_ARM,
        SegmentName.TOP_ARM,
        SegmentName.TORSO,
        SegmentName.BAT,
    )
    assert result.late_segments == [SegmentName.TORSO]
    assert result.early_segments == [SegmentName.BOTTOM_ARM, SegmentName.TOP_ARM]

    torso_error = next(e for e in result.sequence_errors if e.segment == SegmentName.TORSO)
    assert torso_error.expected_position == 3
    assert torso_error.actual_position == 5
    assert torso_error.description == "Torso fired late (position 5 instead of 3)"

    # Order: 2 of 15 pairs inverted; timing: intervals 100,100,100,50,50
    assert result.sequence_score == 86
    assert "Torso fired late" in result.summary
    assert "Bottom Arm, Top Arm fired early" in result.summary


def test_reversed_order_keeps_only_timing_credit(analyzer, segments_factory):
    peaks = {segment: (5 - i) * 100.0 for i, segment in enumerate(IDEAL_SEQUENCE)}
    result = analyzer.analyze("reversed", segments_factory(peaks))

    assert result.actual_order == tuple(reversed(IDEAL_SEQUENCE))
    assert SequenceAnalyzer.count_inversions(result.actual_order) == 15
    assert result.sequence_score == 30


def test_all_equal_peaks_are_degenerate(analyzer, segments_factory):
    peaks = {segment: 250.0 for segment in IDEAL_SEQUENCE}
    result = analyzer.analyze("equal", segments_factory(peaks))

    assert not result.sequence_match
    assert result.sequence_score == 0
    assert result.actual_order == IDEAL_SEQUENCE
    assert "not enough motion data" in result.summary


def test_motionless_swing_is_not_in_sequence(analyzer, pose_sequence_factory):
    # No burst ever starts, so every segment peaks on the first sample
    still = {segment: 100 for segment in IDEAL_SEQUENCE}
    result = analyzer.analyze_pose_sequence(pose_sequence_factory(peak_samples=still, n_frames=20))

    assert result.sequence_score == 0
    assert not result.sequence_match


def test_actual_order_is_always_a_permutation(analyzer, segments_factory):
    peaks = {segment: t for segment, t in zip(IDEAL_SEQUENCE, [300, 10, 10, 450, 0, 200])}
    result = analyzer.analyze("mixed", segments_factory(peaks))

    assert len(result.actual_order) == 6
    assert set(result.actual_order) == set(IDEAL_SEQUENCE)


def test_missing_segment_is_degenerate(analyzer, segments_factory, ideal_peak_times):
    segments = segments_factory(ideal_peak_times)
    del segments[SegmentName.BAT]

    result = analyzer.analyze("missing", segments)

    assert result.sequence_score == 0
    assert not result.sequence_match
    assert result.actual_order == IDEAL_SEQUENCE
    assert "not enough motion data" in result.summary
    assert SegmentName.BAT in result.segments


def test_empty_curves_are_degenerate(analyzer):
    segments = {s: SegmentMomentumData(segment=s) for s in IDEAL_SEQUENCE}
    result = analyzer.analyze("empty", segments)

    assert result.sequence_score == 0


def test_non_finite_peak_is_degenerate(analyzer, segments_factory, ideal_peak_times):
    peaks = dict(ideal_peak_times)
    peaks[SegmentName.TORSO] = float("nan")

    result = analyzer.analyze("nan", segments_factory(peaks))

    assert result.sequence_score == 0


def test_order_score_bounds():
    assert SequenceAnalyzer.calculate_order_score(IDEAL_SEQUENCE) == 100.0
    assert SequenceAnalyzer.calculate_order_score(tuple(reversed(IDEAL_SEQUENCE))) == 0.0


def test_timing_score_needs_two_intervals():
    assert SequenceAnalyzer.calculate_timing_score([0.0, 100.0]) is None
    assert SequenceAnalyzer.calculate_timing_score([0.0, 100.0, 200.0]) == pytest.approx(100.0)


def test_analysis_is_idempotent(analyzer, segments_factory, ideal_peak_times):
    peaks = dict(ideal_peak_times)
    peaks[SegmentName.LEAD_LEG] = 20.0
    segments = segments_factory(peaks)

    assert analyzer.analyze("a", segments) == analyzer.analyze("a", segments)


def test_pose_sequence_in_ideal_order(analyzer):
    result = analyzer.analyze_pose_sequence(build_pose_sequence(swing_id="pose"))

    assert result.swing_id == "pose"
    assert result.sequence_match
    assert result.sequence_score == 100


def test_pose_sequence_with_early_arms(analyzer):
    peaks = {
        SegmentName.REAR_LEG: 3,
        SegmentName.LEAD_LEG: 6,
        SegmentName.TORSO: 15,
        SegmentName.BOTTOM_ARM: 9,
        SegmentName.TOP_ARM: 12,
        SegmentName.BAT: 18,
    }
    result = analyzer.analyze_pose_sequence(build_pose_sequence(peaks))

    assert not result.sequence_match
    assert SegmentName.TORSO in result.late_segments


def test_too_few_frames_scores_zero(analyzer):
    sequence = build_pose_sequence(n_frames=1)
    result = analyzer.analyze_pose_sequence(sequence)

    assert result.sequence_score == 0


def test_playback_state(analyzer, segments_factory, ideal_peak_times):
    analysis = analyzer.analyze("play", segments_factory(ideal_peak_times))
    state = analyzer.playback_state(analysis, 250.0)

    assert state.segment_states[SegmentName.REAR_LEG] == SegmentState.PEAKED
    assert state.segment_states[SegmentName.TORSO] == SegmentState.PEAKED
    assert state.segment_states[SegmentName.BOTTOM_ARM] == SegmentState.ACTIVE
    assert state.segment_states[SegmentName.TOP_ARM] == SegmentState.PENDING
    assert state.peaked_segments == (SegmentName.REAR_LEG, SegmentName.LEAD_LEG, SegmentName.TORSO)
    assert state.next_segment_to_peak == SegmentName.TOP_ARM
