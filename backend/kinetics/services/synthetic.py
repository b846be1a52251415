"""
Synthetic Data Generator

Batted-ball sessions drawn from public StatCast-style aggregate ranges, used
to stress-test the contact scorer, plus deterministic mock sequence analyses
for demos.

All randomness goes through one numpy Generator, so a seed reproduces a
session exactly.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ..domain.contact import BattedBallEvent, ScoredBattedBallEvent
from ..domain.sequence import IDEAL_SEQUENCE, SegmentMomentumData, SegmentName, SwingSequenceAnalysis
from .contact_scorer import ContactScorer
from .sequence_analyzer import SequenceAnalyzer
from .signal import find_peak_index, gaussian_curve, round_half_up, round_int

logger = logging.getLogger(__name__)


# =============================================================================
# DISTRIBUTIONS
# =============================================================================

@dataclass(frozen=True)
class Bounds:
    """Normal distribution truncated to [min, max]."""
    mean: float
    std_dev: float
    min: float
    max: float


@dataclass(frozen=True)
class DistributionParams:
    name: str
    description: str
    ev: Bounds
    la: Bounds
    distance: Optional[Bounds] = None
    spray_angle: Optional[Bounds] = None


MLB_AVERAGE = DistributionParams(
    name="MLB Average",
    description="League-average batted ball profile from public Statcast data",
    ev=Bounds(87.5, 8.5, 50, 120),
    la=Bounds(12.0, 18.0, -30, 80),
    distance=Bounds(220, 80, 50, 450),
    spray_angle=Bounds(0, 25, -45, 45),
)

HS_VARSITY = DistributionParams(
    name="HS Varsity",
    description="High school varsity batted ball profile (estimated)",
    ev=Bounds(75.0, 10.0, 40, 100),
    la=Bounds(10.0, 20.0, -25, 75),
    distance=Bounds(180, 70, 30, 380),
    spray_angle=Bounds(0, 28, -45, 45),
)

COLLEGE_D1 = DistributionParams(
    name="College D1",
    description="College D1 batted ball profile (estimated)",
    ev=Bounds(82.0, 9.0, 45, 110),
    la=Bounds(11.0, 18.0, -28, 78),
    distance=Bounds(200, 75, 40, 420),
    spray_angle=Bounds(0, 26, -45, 45),
)

ELITE_POWER = DistributionParams(
    name="Elite Power",
    description="Elite power hitter profile from public leaderboard data",
    ev=Bounds(93.0, 7.0, 60, 120),
    la=Bounds(14.0, 15.0, -20, 70),
    distance=Bounds(280, 90, 80, 480),
    spray_angle=Bounds(-5, 22, -45, 45),    # Pull-heavy
)

CONTACT_FIRST = DistributionParams(
    name="Contact First",
    description="Contact-oriented hitter profile",
    ev=Bounds(85.0, 7.5, 55, 110),
    la=Bounds(8.0, 14.0, -20, 60),
    distance=Bounds(200, 65, 50, 400),
    spray_angle=Bounds(2, 30, -45, 45),     # Slight opposite field
)

DISTRIBUTIONS = {
    "mlb_average": MLB_AVERAGE,
    "hs_varsity": HS_VARSITY,
    "college_d1": COLLEGE_D1,
    "elite_power": ELITE_POWER,
    "contact_first": CONTACT_FIRST,
}


@dataclass
class StressTestScenario:
    """
    A batch of scored events and the metric ranges it should land in.

    expected maps "avg_contact_score" / "hard_hit_pct" / "barrel_pct" to
    inclusive (min, max) bounds.
    """
    name: str
    description: str
    events: list[ScoredBattedBallEvent]
    expected: dict[str, tuple[float, float]] = field(default_factory=dict)


# =============================================================================
# GENERATOR
# =============================================================================

class SyntheticDataGenerator:
    """
    Seeded batted-ball generator.

    Usage:
        generator = SyntheticDataGenerator(seed=42)
        session = generator.generate_session(50, ELITE_POWER)
        passed, failures = generator.validate_scenarios(generator.stress_test_scenarios())
    """

    MAX_ATTEMPTS = 100

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def bounded_gaussian(self, bounds: Bounds, mean: Optional[float] = None) -> float:
        """Redraw until inside the bounds, clamping after MAX_ATTEMPTS."""
        center = bounds.mean if mean is None else mean
        value = center
        for _ in range(self.MAX_ATTEMPTS):
            value = float(self.rng.normal(center, bounds.std_dev))
            if bounds.min <= value <= bounds.max:
                return value
        return max(bounds.min, min(bounds.max, value))

    def generate_event(
        self,
        distribution: DistributionParams = MLB_AVERAGE,
        include_distance: bool = True,
        include_spray_angle: bool = True,
    ) -> ScoredBattedBallEvent:
        ev = self.bounded_gaussian(distribution.ev)
        la = self.bounded_gaussian(distribution.la)

        distance = None
        if include_distance and distribution.distance is not None:
            # Harder, higher balls carry further
            ev_factor = (ev - distribution.ev.mean) / distribution.ev.std_dev
            la_factor = math.sin(math.radians(la))
            adjusted_mean = distribution.distance.mean + ev_factor * 20 + la_factor * 30
            distance = round_int(self.bounded_gaussian(distribution.distance, adjusted_mean))

        spray_angle = None
        if include_spray_angle and distribution.spray_angle is not None:
            spray_angle = round_half_up(self.bounded_gaussian(distribution.spray_angle), 1)

        event = BattedBallEvent(
            exit_velocity=round_half_up(ev, 1),
            launch_angle=round_half_up(la, 1),
            distance=distance,
            spray_angle=spray_angle,
        )
        return ContactScorer.score_batted_ball(event)

    def generate_session(
        self,
        count: int,
        distribution: DistributionParams = MLB_AVERAGE,
        **options,
    ) -> list[ScoredBattedBallEvent]:
        return [self.generate_event(distribution, **options) for _ in range(count)]

    # -------------------------------------------------------------------------
    # Stress Testing
    # -------------------------------------------------------------------------

    def _uniform_session(self, count: int, ev_range, la_range) -> list[ScoredBattedBallEvent]:
        evs = self.rng.uniform(*ev_range, size=count)
        las = self.rng.uniform(*la_range, size=count)
        return [
            ContactScorer.score_batted_ball(BattedBallEvent(float(ev), float(la)))
            for ev, la in zip(evs, las)
        ]

    def stress_test_scenarios(self) -> list[StressTestScenario]:
        """Edge-case sessions with the metric ranges a sane scorer produces."""
        youth = DistributionParams(
            name="Youth",
            description="Youth batted ball profile",
            ev=Bounds(65, 8, 40, 85),
            la=HS_VARSITY.la,
            distance=HS_VARSITY.distance,
            spray_angle=HS_VARSITY.spray_angle,
        )

        return [
            StressTestScenario(
                name="All Hard Hits",
                description="Every ball hit 95+ mph",
                events=self._uniform_session(50, (95, 110), (-10, 50)),
                expected={"hard_hit_pct": (95, 100)},
            ),
            StressTestScenario(
                name="All Ground Balls",
                description="Every ball hit on the ground (LA < 10)",
                events=self._uniform_session(50, (75, 105), (-5, 5)),
                expected={"avg_contact_score": (20, 50)},
            ),
            StressTestScenario(
                name="All Pop Ups",
                description="Every ball hit straight up (LA > 50)",
                events=self._uniform_session(50, (60, 90), (55, 80)),
                expected={"avg_contact_score": (0, 35)},
            ),
            StressTestScenario(
                name="All Barrels",
                description="Hard, well-elevated contact inside the barrel window",
                events=self._uniform_session(50, (104, 114), (20, 30)),
                expected={"barrel_pct": (85, 100), "avg_contact_score": (75, 100)},
            ),
            StressTestScenario(
                name="Mixed Realistic Session",
                description="Mix of quality similar to game conditions",
                events=self.generate_session(100, MLB_AVERAGE),
                expected={"avg_contact_score": (25, 60), "hard_hit_pct": (10, 45)},
            ),
            StressTestScenario(
                name="Youth Player Profile",
                description="Lower velocities typical of youth players",
                events=self.generate_session(50, youth),
                expected={"avg_contact_score": (5, 40), "hard_hit_pct": (0, 10)},
            ),
        ]

    @staticmethod
    def validate_scenarios(scenarios: Sequence[StressTestScenario]) -> tuple[bool, list[str]]:
        """
        Check each scenario's metrics against its expected ranges.

        Returns:
            (passed, failure messages)
        """
        failures = []

        for scenario in scenarios:
            events = scenario.events
            if not events:
                failures.append(f"{scenario.name}: no events")
                continue

            total = len(events)
            actual = {
                "hard_hit_pct": sum(1 for e in events if e.is_hard_hit) / total * 100,
                "barrel_pct": sum(1 for e in events if e.is_barrel) / total * 100,
                "avg_contact_score": sum(e.contact_score for e in events) / total,
            }

            for metric, (low, high) in scenario.expected.items():
                value = actual[metric]
                if not low <= value <= high:
                    failures.append(f"{scenario.name}: {metric} {value:.1f} not in [{low}, {high}]")

        for failure in failures:
            logger.warning("Stress test failed - %s", failure)

        return not failures, failures


# =============================================================================
# MOCK SEQUENCES
# =============================================================================

def mock_sequence_analysis(
    swing_id: str,
    sequence_errors: Optional[dict[SegmentName, float]] = None,
    duration_ms: float = 500,
    fps: float = 60,
    analyzer: Optional[SequenceAnalyzer] = None,
) -> SwingSequenceAnalysis:
    """
    Analysis of an idealized swing built from Gaussian momentum curves.

    Peaks are evenly spaced in the ideal order; sequence_errors shifts
    individual segment peaks by the given ms. Deterministic.

    Usage:
        # Arms fire before the torso
        analysis = mock_sequence_analysis("demo", {SegmentName.TORSO: 150})
    """
    frame_count = round_int(duration_ms / 1000 * fps)
    frame_times = tuple(i / fps * 1000 for i in range(frame_count))

    interval = duration_ms / (len(IDEAL_SEQUENCE) + 1)
    peak_times = {seg: interval * (i + 1) for i, seg in enumerate(IDEAL_SEQUENCE)}
    for seg, offset in (sequence_errors or {}).items():
        peak_times[SegmentName(seg)] += offset

    segments = {}
    for seg in IDEAL_SEQUENCE:
        curve = gaussian_curve(frame_times, peak_times[seg], duration_ms / 10, 100)
        peak_idx = find_peak_index(curve)
        segments[seg] = SegmentMomentumData(
            segment=seg,
            momentum_curve=tuple(curve),
            frame_times=frame_times,
            peak_frame_index=peak_idx,
            peak_time_ms=peak_times[seg],
            peak_value=curve[peak_idx] if curve else 0.0,
        )

    return (analyzer or SequenceAnalyzer()).analyze(swing_id, segments)
