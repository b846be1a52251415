"""
Kinetic Fingerprint Domain Models

A statistical descriptor of a player's swing pattern over a window of swings:
where the barrel is aimed (intent map), how long the swing takes (timing
signature) and how tightly the pattern repeats (pattern metrics).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TempoCategory(str, Enum):
    QUICK = "quick"
    MODERATE = "moderate"
    DELIBERATE = "deliberate"


class ZoneBias(str, Enum):
    LOW = "low"
    MIDDLE = "middle"
    HIGH = "high"


class MotorProfile(str, Enum):
    """Characteristic swing-timing / pattern signature."""
    SPINNER = "Spinner"
    SLINGSHOTTER = "Slingshotter"
    WHIPPER = "Whipper"
    TITAN = "Titan"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class FingerprintSwing:
    """
    Per-swing inputs from a bat sensor.

    Attributes:
        attack_angle: Vertical attack angle (degrees)
        attack_direction: Horizontal direction, pull (-) to oppo (+) (degrees)
        time_to_contact: Trigger to impact (ms)
        impact_loc_x: Optional impact location on the barrel
        impact_loc_y: Optional impact location on the barrel
    """
    attack_angle: float
    attack_direction: float
    time_to_contact: float
    impact_loc_x: Optional[float] = None
    impact_loc_y: Optional[float] = None


@dataclass(frozen=True)
class IntentMap:
    horizontal_mean: float = 0.0
    horizontal_std_dev: float = 0.0
    vertical_mean: float = 0.0
    vertical_std_dev: float = 0.0
    depth_index: float = 50.0        # Timing: early (0) to late (100)
    depth_consistency: float = 0.0


@dataclass(frozen=True)
class TimingSignature:
    trigger_to_impact_ms: float = 0.0
    timing_variance: float = 0.0     # CV, lower = more consistent
    tempo_category: TempoCategory = TempoCategory.MODERATE


@dataclass(frozen=True)
class ComfortZone:
    horizontal: tuple[float, float] = (0.0, 0.0)
    vertical: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class PatternMetrics:
    tightness: float = 0.0           # 0-100, higher = tighter
    pull_bias: float = 0.0           # Negative = pull, positive = oppo
    zone_bias: ZoneBias = ZoneBias.MIDDLE
    comfort_zone: ComfortZone = field(default_factory=ComfortZone)


@dataclass(frozen=True)
class KineticFingerprintData:
    """
    Fingerprint of a finite window of swings.

    Recomputed whenever the window changes, never patched incrementally.
    The heatmap is a 10x10 grid of swing percentages, high attack angles in
    the top row.
    """
    intent_map: IntentMap = field(default_factory=IntentMap)
    timing_signature: TimingSignature = field(default_factory=TimingSignature)
    pattern_metrics: PatternMetrics = field(default_factory=PatternMetrics)
    heatmap: tuple[tuple[int, ...], ...] = ()
    impact_center: Optional[tuple[float, float]] = None
    swing_count: int = 0


@dataclass(frozen=True)
class FingerprintComparison:
    """Change between an older and a newer fingerprint."""
    tightness_change: float
    consistency_change: float
    improved: bool
    summary: str
