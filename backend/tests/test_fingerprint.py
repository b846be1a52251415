import pytest

from kinetics.domain.fingerprint import FingerprintSwing, MotorProfile, TempoCategory, ZoneBias
from kinetics.services.fingerprint import MOTOR_PROFILE_RULES, FingerprintAggregator


@pytest.fixture
def aggregator():
    return FingerprintAggregator()


def swings(n, attack_angle=10.0, attack_direction=0.0, time_to_contact=400.0):
    return [FingerprintSwing(attack_angle, attack_direction, time_to_contact) for _ in range(n)]


class TestCalculate:
    def test_empty_window_is_neutral(self, aggregator):
        fp = aggregator.calculate([])

        assert fp.swing_count == 0
        assert fp.intent_map.depth_index == 50
        assert fp.timing_signature.tempo_category == TempoCategory.MODERATE
        assert fp.pattern_metrics.zone_bias == ZoneBias.MIDDLE
        assert fp.heatmap == tuple((0,) * 10 for _ in range(10))
        assert fp.impact_center is None
        assert aggregator.classify_motor_profile(fp) == MotorProfile.UNKNOWN

    def test_single_swing(self, aggregator):
        fp = aggregator.calculate([FingerprintSwing(10, -5, 300)])

        assert fp.swing_count == 1
        assert fp.intent_map.horizontal_mean == -5
        assert fp.intent_map.horizontal_std_dev == 0
        assert fp.intent_map.depth_index == 17
        assert fp.intent_map.depth_consistency == 100
        assert fp.timing_signature.trigger_to_impact_ms == 300
        assert fp.timing_signature.tempo_category == TempoCategory.QUICK
        assert fp.pattern_metrics.tightness == 100
        assert fp.pattern_metrics.comfort_zone.horizontal == (-5, -5)

    def test_statistics(self, aggregator):
        window = [
            FingerprintSwing(5, -10, 300),
            FingerprintSwing(15, 10, 500),
        ]
        fp = aggregator.calculate(window)

        assert fp.intent_map.horizontal_mean == 0
        assert fp.intent_map.horizontal_std_dev == 10
        assert fp.intent_map.vertical_mean == 10
        assert fp.intent_map.vertical_std_dev == 5
        assert fp.intent_map.depth_index == 50
        assert fp.timing_signature.timing_variance == pytest.approx(0.25)
        assert fp.intent_map.depth_consistency == 75
        assert fp.pattern_metrics.tightness == 70

    @pytest.mark.parametrize("ms, tempo", [
        (349.9, TempoCategory.QUICK),
        (350, TempoCategory.MODERATE),
        (450, TempoCategory.MODERATE),
        (450.1, TempoCategory.DELIBERATE),
    ])
    def test_tempo_boundaries(self, aggregator, ms, tempo):
        assert aggregator.tempo_category(ms) == tempo

    def test_depth_index_is_clamped(self, aggregator):
        assert aggregator.calculate(swings(3, time_to_contact=100)).intent_map.depth_index == 0
        assert aggregator.calculate(swings(3, time_to_contact=900)).intent_map.depth_index == 100

    def test_zone_bias(self, aggregator):
        assert aggregator.calculate(swings(2, attack_angle=-8)).pattern_metrics.zone_bias == ZoneBias.LOW
        assert aggregator.calculate(swings(2, attack_angle=20)).pattern_metrics.zone_bias == ZoneBias.HIGH

    def test_comfort_zone_middle_80(self, aggregator):
        window = [FingerprintSwing(float(i), float(i), 400) for i in range(10)]
        fp = aggregator.calculate(window)

        assert fp.pattern_metrics.comfort_zone.horizontal == (1.0, 9.0)
        assert fp.pattern_metrics.comfort_zone.vertical == (1.0, 9.0)

    def test_order_of_swings_does_not_matter(self, aggregator):
        window = [FingerprintSwing(float(i), float(-i), 300 + 10 * i) for i in range(8)]
        assert aggregator.calculate(window) == aggregator.calculate(list(reversed(window)))

    def test_non_finite_swings_are_dropped(self, aggregator):
        window = swings(3) + [FingerprintSwing(float("nan"), 0, 400)]
        assert aggregator.calculate(window).swing_count == 3

    def test_heatmap_places_high_angles_on_top(self, aggregator):
        fp = aggregator.calculate([FingerprintSwing(39, 29, 400)])

        assert fp.heatmap[0][9] == 100
        assert sum(sum(row) for row in fp.heatmap) == 100

    def test_heatmap_clamps_out_of_range_swings(self, aggregator):
        fp = aggregator.calculate([FingerprintSwing(-50, -80, 400), FingerprintSwing(90, 90, 400)])

        assert fp.heatmap[9][0] == 50
        assert fp.heatmap[0][9] == 50

    def test_impact_center(self, aggregator):
        window = [
            FingerprintSwing(10, 0, 400, impact_loc_x=1.0, impact_loc_y=2.0),
            FingerprintSwing(10, 0, 400, impact_loc_x=3.0, impact_loc_y=4.0),
            FingerprintSwing(10, 0, 400),
        ]
        assert aggregator.calculate(window).impact_center == (2.0, 3.0)


class TestMotorProfile:
    def test_spinner(self, aggregator):
        fp = aggregator.calculate(swings(5, time_to_contact=300))
        assert aggregator.classify_motor_profile(fp) == MotorProfile.SPINNER

    def test_slingshotter(self, aggregator):
        fp = aggregator.calculate(swings(5, attack_angle=-8, time_to_contact=500))
        assert aggregator.classify_motor_profile(fp) == MotorProfile.SLINGSHOTTER

    def test_whipper(self, aggregator):
        fp = aggregator.calculate(swings(5, attack_direction=-15))
        assert aggregator.classify_motor_profile(fp) == MotorProfile.WHIPPER

    def test_titan(self, aggregator):
        fp = aggregator.calculate(swings(5))
        assert aggregator.classify_motor_profile(fp) == MotorProfile.TITAN

    def test_scattered_pattern_is_unknown(self, aggregator):
        window = [
            FingerprintSwing(-10, -30, 400),
            FingerprintSwing(40, 30, 400),
        ]
        fp = aggregator.calculate(window)

        assert fp.pattern_metrics.tightness == 0
        assert aggregator.classify_motor_profile(fp) == MotorProfile.UNKNOWN

    def test_first_matching_rule_wins(self, aggregator):
        # Quick and tight also satisfies the Titan rule
        fp = aggregator.calculate(swings(5, attack_direction=-15, time_to_contact=300))
        assert aggregator.classify_motor_profile(fp) == MotorProfile.SPINNER

    def test_custom_rules(self):
        aggregator = FingerprintAggregator(rules=[(lambda fp: True, MotorProfile.TITAN)])
        assert aggregator.classify_motor_profile(aggregator.empty_fingerprint()) == MotorProfile.TITAN

    def test_rules_are_not_shared_between_aggregators(self):
        default_rules = list(MOTOR_PROFILE_RULES)
        custom_source = [(lambda fp: True, MotorProfile.TITAN)]
        custom = FingerprintAggregator(rules=custom_source)
        custom_source.clear()

        assert isinstance(FingerprintAggregator().rules, tuple)
        assert len(custom.rules) == 1
        assert MOTOR_PROFILE_RULES == default_rules


class TestCompare:
    def test_tighter_pattern_is_improvement(self, aggregator):
        older = aggregator.calculate([FingerprintSwing(0, -10, 400), FingerprintSwing(20, 10, 400)])
        newer = aggregator.calculate([FingerprintSwing(8, -2, 400), FingerprintSwing(12, 2, 400)])

        comparison = aggregator.compare(older, newer)

        # Tightness 60 -> 92
        assert comparison.tightness_change == 32
        assert comparison.improved
        assert comparison.summary == "Pattern tightened by 32%."

    def test_no_change(self, aggregator):
        fp = aggregator.calculate(swings(4))
        comparison = aggregator.compare(fp, fp)

        assert not comparison.improved
        assert comparison.summary == "No significant changes detected."

    def test_looser_timing(self, aggregator):
        older = aggregator.calculate(swings(4))
        newer = aggregator.calculate([FingerprintSwing(10, 0, 300), FingerprintSwing(10, 0, 500)])

        comparison = aggregator.compare(older, newer)

        assert comparison.consistency_change == -25
        assert not comparison.improved
        assert "Timing loosened by 25%" in comparison.summary
