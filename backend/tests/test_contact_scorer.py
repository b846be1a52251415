import math

import pytest

from kinetics.domain.contact import BattedBallEvent, BattedBallType, TrendDirection
from kinetics.services.contact_scorer import ContactScorer, score_batted_ball


class TestDefinitions:
    def test_hard_hit_threshold(self):
        assert ContactScorer.is_hard_hit(95)
        assert not ContactScorer.is_hard_hit(94.9)

    def test_sweet_spot_is_inclusive(self):
        assert ContactScorer.is_sweet_spot(8)
        assert ContactScorer.is_sweet_spot(32)
        assert not ContactScorer.is_sweet_spot(7.9)
        assert not ContactScorer.is_sweet_spot(32.1)

    @pytest.mark.parametrize("la, expected", [
        (-20, BattedBallType.GROUND_BALL),
        (9.99, BattedBallType.GROUND_BALL),
        (10, BattedBallType.LINE_DRIVE),
        (24.9, BattedBallType.LINE_DRIVE),
        (25, BattedBallType.FLY_BALL),
        (49.9, BattedBallType.FLY_BALL),
        (50, BattedBallType.POP_UP),
    ])
    def test_batted_ball_type(self, la, expected):
        assert ContactScorer.get_batted_ball_type(la) == expected


class TestBarrel:
    def test_window_at_98_mph(self):
        assert ContactScorer.barrel_window(98) == (26, 30)

    @pytest.mark.parametrize("ev, low, high", [
        (100, 23, 30 + 40 / 18),
        (102, 20, 30 + 80 / 18),
        (107, 12.5, 40),
        (110, 8, 30 + 240 / 18),
    ])
    def test_window_widens_with_exit_velocity(self, ev, low, high):
        assert ContactScorer.barrel_window(ev) == pytest.approx((low, high))

    def test_high_bound_saturates_only_at_116_mph(self):
        assert ContactScorer.barrel_window(115)[1] < 50
        assert ContactScorer.is_barrel(110, 43)
        assert not ContactScorer.is_barrel(110, 44)

    def test_edge_of_narrow_window(self):
        assert not ContactScorer.is_barrel(100, 22)
        assert ContactScorer.is_barrel(100, 23)
        assert not ContactScorer.is_barrel(100, 32.5)

    def test_window_fully_open_from_116_mph(self):
        assert ContactScorer.barrel_window(116) == (8, 50)
        assert ContactScorer.barrel_window(125) == (8, 50)

    def test_no_barrel_below_98_mph(self):
        assert ContactScorer.barrel_window(97.9) is None
        assert not ContactScorer.is_barrel(97.9, 28)

    def test_barrel_needs_launch_angle_in_window(self):
        assert ContactScorer.is_barrel(98, 28)
        assert not ContactScorer.is_barrel(98, 25)
        assert ContactScorer.is_barrel(102, 20)

    def test_barrel_implies_minimum_exit_velocity(self):
        for ev in range(60, 130):
            for la in range(-20, 70, 3):
                if ContactScorer.is_barrel(ev, la):
                    assert ev >= 98


class TestContactScore:
    def test_barreled_line_drive(self):
        scored = score_batted_ball(102, 20)

        assert scored.is_barrel
        assert scored.is_hard_hit
        assert scored.is_sweet_spot
        assert scored.bb_type == BattedBallType.LINE_DRIVE
        assert scored.contact_score >= 85

        breakdown = scored.score_breakdown
        assert breakdown.base_score == pytest.approx(53.5)
        assert breakdown.la_angle_bonus == 15
        assert breakdown.hard_hit_bonus == 10
        assert breakdown.sweet_spot_bonus == 0
        assert breakdown.barrel_bonus == 15
        assert breakdown.final_score == 93

    def test_weak_ground_ball(self):
        scored = score_batted_ball(70, 5)

        assert scored.bb_type == BattedBallType.GROUND_BALL
        assert not scored.is_hard_hit
        assert not scored.is_barrel
        assert scored.contact_score < 40
        assert scored.contact_score == 8

    def test_sweet_spot_bonus_without_barrel(self):
        breakdown = ContactScorer.calculate_contact_score(90, 20)
        assert breakdown.sweet_spot_bonus == 10
        assert breakdown.barrel_bonus == 0

    @pytest.mark.parametrize("la, bonus", [
        (20, 15), (12, 10), (28, 10), (8, 5), (32, 5),
        (0, -5), (40, -5), (50, -5), (60, -15), (-1, -10),
    ])
    def test_launch_angle_bonus_tiers(self, la, bonus):
        assert ContactScorer.launch_angle_bonus(la) == bonus

    def test_score_is_clamped(self):
        assert ContactScorer.get_contact_score(200, 20) == 100
        assert ContactScorer.get_contact_score(40, 80) == 0

    @pytest.mark.parametrize("la", [-20, 5, 20, 29, 40, 60])
    def test_score_is_monotonic_in_exit_velocity(self, la):
        scores = [ContactScorer.get_contact_score(ev, la) for ev in range(40, 131)]
        assert scores == sorted(scores)

    def test_scoring_is_idempotent(self):
        event = BattedBallEvent(99.3, 27.1)
        assert ContactScorer.score_batted_ball(event) == ContactScorer.score_batted_ball(event)


class TestInvalidContact:
    def test_no_contact_scores_zero(self):
        scored = score_batted_ball(0, 15)

        assert scored.contact_score == 0
        assert not (scored.is_hard_hit or scored.is_sweet_spot or scored.is_barrel)
        assert scored.score_breakdown.raw_score == 0.0

    def test_negative_exit_velocity(self):
        assert score_batted_ball(-5, 20).contact_score == 0

    def test_nan_exit_velocity(self):
        scored = score_batted_ball(float("nan"), 20)
        assert scored.contact_score == 0
        assert not scored.is_sweet_spot

    def test_nan_launch_angle_is_unknown_type(self):
        scored = score_batted_ball(100, float("nan"))
        assert scored.bb_type == BattedBallType.UNKNOWN
        assert scored.contact_score == 0


class TestSessionStats:
    def test_empty_session(self):
        stats = ContactScorer.calculate_session_stats([])
        assert stats.total_events == 0
        assert stats.avg_contact_score == 0.0
        assert stats.avg_distance is None

    def test_session_rollup(self):
        events = [
            score_batted_ball(102, 20, distance=400),
            score_batted_ball(70, 5),
            score_batted_ball(0, 10),
        ]
        stats = ContactScorer.calculate_session_stats(events)

        assert stats.total_events == 3
        assert stats.avg_ev == pytest.approx(86.0)
        assert stats.max_ev == pytest.approx(102.0)
        assert stats.min_ev == pytest.approx(70.0)
        assert stats.hard_hit_pct == pytest.approx(33.3)
        assert stats.barrel_pct == pytest.approx(33.3)
        assert stats.gb_pct == pytest.approx(33.3)
        assert stats.ld_pct == pytest.approx(66.7)
        assert stats.avg_contact_score == pytest.approx(33.7)
        assert stats.max_contact_score == 93
        assert stats.min_contact_score == 0
        assert stats.avg_distance == 400
        assert stats.max_distance == 400

    def test_percentages_of_types_sum_to_100(self):
        events = [score_batted_ball(90, la) for la in (-5, 15, 30, 60)]
        stats = ContactScorer.calculate_session_stats(events)
        total = stats.gb_pct + stats.ld_pct + stats.fb_pct + stats.pu_pct
        assert math.isclose(total, 100.0)


class TestLabels:
    def test_trend_direction(self):
        assert ContactScorer.get_trend_direction(60, 50) == TrendDirection.IMPROVING
        assert ContactScorer.get_trend_direction(50, 60) == TrendDirection.DECLINING
        assert ContactScorer.get_trend_direction(52, 50) == TrendDirection.STABLE

    @pytest.mark.parametrize("score, grade", [
        (95, "Elite"), (85, "Excellent"), (72, "Very Good"), (60, "Good"),
        (50, "Average"), (45, "Below Average"), (30, "Poor"), (10, "Very Poor"),
    ])
    def test_grade(self, score, grade):
        assert ContactScorer.get_contact_score_grade(score) == grade

    def test_explanation(self):
        assert "elite" in ContactScorer.explain_contact_score(93)
        assert ContactScorer.explain_contact_score(10).startswith("Needs work")
