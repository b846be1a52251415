import numpy as np
import pytest

from kinetics.domain.contact import BattedBallEvent
from kinetics.domain.sequence import SegmentName
from kinetics.services.contact_scorer import ContactScorer
from kinetics.services.synthetic import (
    DISTRIBUTIONS,
    ELITE_POWER,
    HS_VARSITY,
    MLB_AVERAGE,
    StressTestScenario,
    SyntheticDataGenerator,
    mock_sequence_analysis,
)


class TestGenerator:
    def test_seed_reproduces_session(self):
        a = SyntheticDataGenerator(seed=42).generate_session(20, ELITE_POWER)
        b = SyntheticDataGenerator(seed=42).generate_session(20, ELITE_POWER)
        assert a == b

    def test_injected_rng(self):
        a = SyntheticDataGenerator(rng=np.random.default_rng(3)).generate_event()
        b = SyntheticDataGenerator(seed=3).generate_event()
        assert a == b

    @pytest.mark.parametrize("name", sorted(DISTRIBUTIONS))
    def test_events_respect_bounds(self, name):
        distribution = DISTRIBUTIONS[name]
        events = SyntheticDataGenerator(seed=1).generate_session(100, distribution)

        for e in events:
            assert distribution.ev.min <= e.exit_velocity <= distribution.ev.max
            assert distribution.la.min <= e.launch_angle <= distribution.la.max
            assert distribution.distance.min <= e.distance <= distribution.distance.max
            assert distribution.spray_angle.min <= e.event.spray_angle <= distribution.spray_angle.max

    def test_optional_fields_can_be_skipped(self):
        event = SyntheticDataGenerator(seed=5).generate_event(
            HS_VARSITY, include_distance=False, include_spray_angle=False
        )
        assert event.distance is None
        assert event.event.spray_angle is None

    def test_events_are_scored(self):
        for e in SyntheticDataGenerator(seed=9).generate_session(30):
            assert e == ContactScorer.score_batted_ball(e.event)


class TestStressScenarios:
    def test_scenarios_pass_validation(self):
        generator = SyntheticDataGenerator(seed=7)
        passed, failures = generator.validate_scenarios(generator.stress_test_scenarios())

        assert passed, failures

    def test_validation_reports_failures(self):
        scenario = StressTestScenario(
            name="Impossible",
            description="Soft contact expected to be all hard hits",
            events=[ContactScorer.score_batted_ball(BattedBallEvent(70, 10))],
            expected={"hard_hit_pct": (100, 100)},
        )
        passed, failures = SyntheticDataGenerator.validate_scenarios([scenario])

        assert not passed
        assert failures == ["Impossible: hard_hit_pct 0.0 not in [100, 100]"]

    def test_empty_scenario_fails(self):
        scenario = StressTestScenario(name="Empty", description="", events=[])
        passed, failures = SyntheticDataGenerator.validate_scenarios([scenario])

        assert not passed


class TestMockSequence:
    def test_ideal_mock_scores_100(self):
        analysis = mock_sequence_analysis("demo")

        assert analysis.sequence_match
        assert analysis.sequence_score == 100
        assert len(analysis.frame_times) == 30

    def test_peak_times_are_evenly_spaced(self):
        analysis = mock_sequence_analysis("demo", duration_ms=700)
        peaks = [analysis.segments[s].peak_time_ms for s in analysis.actual_order]
        assert peaks == pytest.approx([100, 200, 300, 400, 500, 600])

    def test_offset_breaks_sequence(self):
        analysis = mock_sequence_analysis("late-torso", {SegmentName.TORSO: 250})

        assert not analysis.sequence_match
        assert SegmentName.TORSO in analysis.late_segments

    def test_mock_is_deterministic(self):
        assert mock_sequence_analysis("x") == mock_sequence_analysis("x")
