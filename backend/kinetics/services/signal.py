"""
Signal Utilities

Moving-average smoothing, peak location and the small statistics shared by
the analyzers. Pure numpy math, no state.

Rounding here is half-up (2.5 -> 3), not Python's banker's rounding, so a
score is the same whichever runtime computed it.
"""

import math
from typing import Sequence

import numpy as np


def smooth_curve(curve: Sequence[float], window: int = 3) -> list[float]:
    """
    Centered moving average, truncated at the edges.

    Edge samples average only the neighbours that exist. Curves shorter than
    the window are returned unchanged.

    Example:
        smooth_curve([0, 3, 0, 3]) -> [1.5, 1.0, 2.0, 1.5]
    """
    values = np.asarray(curve, dtype=float)
    if window <= 1 or values.size < window:
        return values.tolist()

    half = window // 2
    kernel = np.ones(2 * half + 1)
    sums = np.convolve(values, kernel, mode="same")
    counts = np.convolve(np.ones_like(values), kernel, mode="same")
    return (sums / counts).tolist()


def find_peak_index(curve: Sequence[float]) -> int:
    """Index of the maximum value, first occurrence on ties. 0 for empty curves."""
    if len(curve) == 0:
        return 0
    return int(np.argmax(np.asarray(curve, dtype=float)))


def gaussian_curve(
    times: Sequence[float],
    peak_time: float,
    sigma: float,
    amplitude: float,
) -> list[float]:
    """Bell curve sampled at the given times."""
    t = np.asarray(times, dtype=float)
    return (amplitude * np.exp(-0.5 * ((t - peak_time) / sigma) ** 2)).tolist()


# -------------------------------------------------------------------------
# Statistics
# -------------------------------------------------------------------------

def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(values))


def coefficient_of_variation(values: Sequence[float]) -> float:
    """std / mean; 0 when the mean is not positive."""
    m = mean(values)
    if m <= 0:
        return 0.0
    return population_std(values) / m


# -------------------------------------------------------------------------
# Rounding / clamping
# -------------------------------------------------------------------------

def round_half_up(value: float, decimals: int = 0) -> float:
    """Round half toward positive infinity."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def is_finite_number(value) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
