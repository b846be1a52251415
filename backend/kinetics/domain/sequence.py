"""
Kinematic Sequence Domain Models

Per-segment momentum curves and the firing-order diagnosis built from them.

IDEAL SEQUENCE (body to bat):
1. Rear Leg
2. Lead Leg
3. Torso
4. Bottom Arm
5. Top Arm
6. Bat
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class SegmentName(str, Enum):
    """The six body segments tracked through the kinetic chain."""
    REAR_LEG = "rear_leg"
    LEAD_LEG = "lead_leg"
    TORSO = "torso"
    BOTTOM_ARM = "bottom_arm"
    TOP_ARM = "top_arm"
    BAT = "bat"

    @property
    def display_name(self) -> str:
        return SEGMENT_DISPLAY_NAMES[self]


IDEAL_SEQUENCE: tuple[SegmentName, ...] = (
    SegmentName.REAR_LEG,
    SegmentName.LEAD_LEG,
    SegmentName.TORSO,
    SegmentName.BOTTOM_ARM,
    SegmentName.TOP_ARM,
    SegmentName.BAT,
)

SEGMENT_DISPLAY_NAMES: dict[SegmentName, str] = {
    SegmentName.REAR_LEG: "Rear Leg",
    SegmentName.LEAD_LEG: "Lead Leg",
    SegmentName.TORSO: "Torso",
    SegmentName.BOTTOM_ARM: "Bottom Arm",
    SegmentName.TOP_ARM: "Top Arm",
    SegmentName.BAT: "Bat",
}


class SegmentState(str, Enum):
    """Where a segment is relative to its peak during playback."""
    PENDING = "pending"
    ACTIVE = "active"
    PEAKED = "peaked"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class SegmentMomentumData:
    """
    Smoothed momentum proxy for one body segment.

    Attributes:
        segment: Which segment
        momentum_curve: Velocity magnitude per sample (px/s, torso in deg/s)
        frame_times: Time (ms) of each sample
        peak_frame_index: Index of the peak sample in momentum_curve
        peak_time_ms: Time of the peak
        peak_value: Curve value at the peak
    """
    segment: SegmentName
    momentum_curve: tuple[float, ...] = ()
    frame_times: tuple[float, ...] = ()
    peak_frame_index: int = 0
    peak_time_ms: float = 0.0
    peak_value: float = 0.0


@dataclass(frozen=True)
class SequenceError:
    """
    A segment that did not peak in its ideal slot.

    Positions are 1-based.
    """
    segment: SegmentName
    expected_position: int
    actual_position: int
    description: str

    @property
    def is_early(self) -> bool:
        return self.actual_position < self.expected_position


@dataclass(frozen=True)
class SwingSequenceAnalysis:
    """
    Complete firing-order diagnosis for one swing.

    actual_order is always a permutation of the six segment names.
    """
    swing_id: str
    frame_times: tuple[float, ...]
    segments: Mapping[SegmentName, SegmentMomentumData]
    actual_order: tuple[SegmentName, ...]
    ideal_order: tuple[SegmentName, ...] = IDEAL_SEQUENCE
    sequence_match: bool = False
    sequence_errors: tuple[SequenceError, ...] = ()
    sequence_score: int = 0
    summary: str = ""

    @property
    def early_segments(self) -> list[SegmentName]:
        return [e.segment for e in self.sequence_errors if e.is_early]

    @property
    def late_segments(self) -> list[SegmentName]:
        return [e.segment for e in self.sequence_errors if not e.is_early]


@dataclass(frozen=True)
class SequencePlaybackState:
    """Segment states at one instant of video playback."""
    current_time_ms: float
    segment_states: Mapping[SegmentName, SegmentState] = field(default_factory=dict)
    peaked_segments: tuple[SegmentName, ...] = ()
    next_segment_to_peak: Optional[SegmentName] = None
