"""
Engine Configuration

Empirical constants for the scoring engine, read once from the environment at
import time. Services receive these as settings objects so tests can swap them.
"""

import os
from dataclasses import dataclass

from .domain.population import RegressionCoefficients


API_VERSION = os.getenv("KINETICS_API_VERSION", "1.0.0")

# Comma-separated browser origins allowed to call the API
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "KINETICS_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

# Bat tip moves faster than the hands; used when no bat-end joint is tracked
BAT_SPEED_MULTIPLIER = float(os.getenv("KINETICS_BAT_SPEED_MULTIPLIER", "1.5"))
SMOOTHING_WINDOW = int(os.getenv("KINETICS_SMOOTHING_WINDOW", "3"))

DEFAULT_LEVEL = os.getenv("KINETICS_DEFAULT_LEVEL", "high_school")

# Default athlete model, used when no calibrated model exists
BETA_0 = float(os.getenv("KINETICS_BETA_0", "50"))
BETA_1 = float(os.getenv("KINETICS_BETA_1", "0.3"))
BETA_2 = float(os.getenv("KINETICS_BETA_2", "0.3"))
BETA_3 = float(os.getenv("KINETICS_BETA_3", "0.25"))
BETA_4 = float(os.getenv("KINETICS_BETA_4", "0.15"))


@dataclass(frozen=True)
class ExtractorSettings:
    """
    Tuning for the momentum extractor.

    Attributes:
        bat_speed_multiplier: Scale applied to wrist-midpoint speed when the
            bat end is not tracked. Approximation, not a kinematic derivation.
        smoothing_window: Centered moving-average window, in samples.
    """
    bat_speed_multiplier: float = BAT_SPEED_MULTIPLIER
    smoothing_window: int = SMOOTHING_WINDOW


def default_regression_coefficients() -> RegressionCoefficients:
    """Coefficients of the expected-bat-speed model from the environment."""
    return RegressionCoefficients(
        beta_0=BETA_0,
        beta_1=BETA_1,
        beta_2=BETA_2,
        beta_3=BETA_3,
        beta_4=BETA_4,
    )
