"""
Pose Domain Models

Data structures for the 2D joint positions produced by an external pose
pipeline, one frame at a time, for a single swing.

Coordinates are in pixels; time is in milliseconds.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class Joint(str, Enum):
    """
    Named joints consumed by the momentum extractor.

    PELVIS, SPINE and BAT_END are optional; everything else is expected on
    every frame.
    """
    # Hips/Pelvis
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    PELVIS = "pelvis"

    # Legs
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"

    # Torso
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    SPINE = "spine"

    # Arms
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"

    # Bat (external tracker, when available)
    BAT_END = "bat_end"


OPTIONAL_JOINTS = frozenset({Joint.PELVIS, Joint.SPINE, Joint.BAT_END})
REQUIRED_JOINTS = tuple(j for j in Joint if j not in OPTIONAL_JOINTS)


class Handedness(str, Enum):
    """Batter handedness. A right-handed batter's lead side is the left side."""
    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class JointPosition:
    """
    A single joint position.

    Attributes:
        x: Horizontal position in pixels
        y: Vertical position in pixels (grows downward)
        confidence: Optional detector confidence (0.0 to 1.0)
    """
    x: float
    y: float
    confidence: Optional[float] = None

    def is_valid(self) -> bool:
        """False when either coordinate is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def distance_to(self, other: "JointPosition") -> float:
        """Euclidean distance to another joint."""
        return math.hypot(other.x - self.x, other.y - self.y)


def midpoint(*joints: Optional[JointPosition]) -> Optional[JointPosition]:
    """Average position of the valid joints given, or None if there are none."""
    valid = [j for j in joints if j is not None and j.is_valid()]
    if not valid:
        return None
    return JointPosition(
        x=sum(j.x for j in valid) / len(valid),
        y=sum(j.y for j in valid) / len(valid),
    )


@dataclass(frozen=True)
class FramePose:
    """
    Joint positions captured in one video / motion-capture frame.

    Attributes:
        frame_index: Sequential frame number
        time_ms: Capture time in milliseconds
        joints: Joint -> position mapping
    """
    frame_index: int
    time_ms: float
    joints: Mapping[Joint, JointPosition] = field(default_factory=dict)

    def get_joint(self, joint: Joint) -> Optional[JointPosition]:
        """Get a joint if present with finite coordinates."""
        position = self.joints.get(joint)
        if position is None or not position.is_valid():
            return None
        return position

    def missing_joints(self) -> list[Joint]:
        """Required joints absent from this frame."""
        return [j for j in REQUIRED_JOINTS if self.get_joint(j) is None]

    # -------------------------------------------------------------------------
    # Convenience points
    # -------------------------------------------------------------------------

    @property
    def pelvis(self) -> Optional[JointPosition]:
        """Tracked pelvis, else the hip midpoint."""
        return self.get_joint(Joint.PELVIS) or midpoint(
            self.get_joint(Joint.LEFT_HIP),
            self.get_joint(Joint.RIGHT_HIP),
        )

    @property
    def shoulder_midpoint(self) -> Optional[JointPosition]:
        return midpoint(
            self.get_joint(Joint.LEFT_SHOULDER),
            self.get_joint(Joint.RIGHT_SHOULDER),
        )

    @property
    def wrist_midpoint(self) -> Optional[JointPosition]:
        return midpoint(
            self.get_joint(Joint.LEFT_WRIST),
            self.get_joint(Joint.RIGHT_WRIST),
        )


@dataclass(frozen=True)
class SwingPoseSequence:
    """
    Ordered frames for one swing.

    Attributes:
        swing_id: Identifier assigned by the caller
        handedness: Batter handedness
        frames: Frames ordered by time
        load_frame_index: Optional marker for the load position
        contact_frame_index: Optional marker for ball contact
        finish_frame_index: Optional marker for the finish
    """
    swing_id: str
    handedness: Handedness
    frames: tuple[FramePose, ...] = ()
    load_frame_index: Optional[int] = None
    contact_frame_index: Optional[int] = None
    finish_frame_index: Optional[int] = None

    @property
    def is_right_handed(self) -> bool:
        return self.handedness == Handedness.RIGHT

    @property
    def frame_times(self) -> list[float]:
        return [f.time_ms for f in self.frames]

    def markers(self) -> dict[str, int]:
        """Named frame markers that point inside the frame list."""
        named = {
            "load": self.load_frame_index,
            "contact": self.contact_frame_index,
            "finish": self.finish_frame_index,
        }
        return {
            name: index
            for name, index in named.items()
            if index is not None and 0 <= index < len(self.frames)
        }
