"""
Population Domain Models

Benchmark percentile anchors per age/level group and the results of ranking a
player against them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PercentileRange:
    """Empirical 10th / 50th / 90th percentile values of one metric."""
    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class PopulationBaseline:
    """
    Benchmarks for one age/level group.

    Static reference data: never mutated at runtime.
    """
    age_group: str
    bat_speed: PercentileRange
    hand_speed: PercentileRange
    hand_to_bat_ratio: PercentileRange
    timing_cv: PercentileRange


@dataclass(frozen=True)
class CompositeWeights:
    """Weights of the composite percentile. Must sum to 1.0."""
    bat_speed: float = 0.40
    hand_speed: float = 0.20
    ratio: float = 0.25
    timing: float = 0.15

    def __post_init__(self) -> None:
        total = self.bat_speed + self.hand_speed + self.ratio + self.timing
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Composite weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class PercentileReport:
    """All percentile ranks for one player, 1-99."""
    level: str
    bat_speed_percentile: int
    hand_speed_percentile: int
    ratio_percentile: int
    timing_percentile: int
    composite_percentile: int


@dataclass(frozen=True)
class RegressionCoefficients:
    """
    Linear model of expected bat speed from the four sub-scores.

    expected = beta_0 + beta_1*bat + beta_2*brain + beta_3*body + beta_4*ball
    """
    beta_0: float
    beta_1: float
    beta_2: float
    beta_3: float
    beta_4: float


@dataclass(frozen=True)
class MechanicalLoss:
    """Bat speed left on the table (mph), never negative."""
    expected_bat_speed: float
    actual_bat_speed: float
    loss: float
