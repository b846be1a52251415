"""
Population Benchmarks

Bat speed / hand speed in mph, hand-to-bat ratio unitless, timing CV as a
fraction. Age groups 10u-18u plus the level groups youth, high_school,
college, pro and mlb.
"""

from types import MappingProxyType

from ..domain.population import PercentileRange, PopulationBaseline


def _baseline(age_group: str, bat, hand, ratio, timing_cv) -> PopulationBaseline:
    return PopulationBaseline(
        age_group=age_group,
        bat_speed=PercentileRange(*bat),
        hand_speed=PercentileRange(*hand),
        hand_to_bat_ratio=PercentileRange(*ratio),
        timing_cv=PercentileRange(*timing_cv),
    )


_TABLE = [
    # Age groups
    _baseline("10u", (30, 38, 46), (12, 15, 18), (1.12, 1.18, 1.25), (0.08, 0.14, 0.22)),
    _baseline("11u", (33, 42, 50), (13, 16, 20), (1.13, 1.20, 1.27), (0.07, 0.12, 0.20)),
    _baseline("12u", (38, 48, 58), (15, 19, 23), (1.15, 1.22, 1.30), (0.06, 0.11, 0.18)),
    _baseline("13u", (45, 55, 65), (17, 21, 26), (1.16, 1.23, 1.31), (0.05, 0.10, 0.16)),
    _baseline("14u", (50, 60, 70), (19, 23, 28), (1.17, 1.24, 1.32), (0.045, 0.09, 0.15)),
    _baseline("15u", (53, 63, 73), (20, 24, 29), (1.18, 1.25, 1.32), (0.04, 0.085, 0.14)),
    _baseline("16u", (56, 66, 76), (21, 25, 30), (1.18, 1.26, 1.33), (0.038, 0.08, 0.13)),
    _baseline("17u", (58, 68, 78), (22, 26, 31), (1.19, 1.26, 1.33), (0.035, 0.075, 0.12)),
    _baseline("18u", (60, 70, 80), (23, 27, 32), (1.20, 1.27, 1.34), (0.032, 0.07, 0.11)),

    # Levels
    _baseline("youth", (38, 48, 58), (15, 19, 23), (1.15, 1.22, 1.30), (0.06, 0.11, 0.18)),
    _baseline("high_school", (55, 65, 75), (21, 25, 30), (1.18, 1.26, 1.33), (0.04, 0.08, 0.13)),
    _baseline("college", (63, 72, 80), (24, 28, 33), (1.21, 1.28, 1.35), (0.03, 0.06, 0.10)),
    _baseline("pro", (66, 74, 82), (25, 29, 34), (1.22, 1.29, 1.36), (0.025, 0.05, 0.09)),
    _baseline("mlb", (68, 75, 83), (26, 30, 35), (1.23, 1.30, 1.37), (0.02, 0.045, 0.08)),
]

# Read-only: shared by every engine instance
DEFAULT_BASELINES = MappingProxyType({b.age_group: b for b in _TABLE})
