"""
Momentum Extractor Service

Turns a sequence of 2D joint positions into one momentum curve per body
segment. Velocities are in pixels/second, torso rotation in degrees/second.

This is pure mathematics - no state beyond the injected settings.
"""

import logging
import math
from typing import Optional

from ..config import ExtractorSettings
from ..domain.pose import FramePose, Joint, JointPosition, SwingPoseSequence
from ..domain.sequence import IDEAL_SEQUENCE, SegmentMomentumData, SegmentName
from .signal import find_peak_index, smooth_curve

logger = logging.getLogger(__name__)


class MomentumExtractor:
    """
    Computes per-segment momentum proxies from pose frames.

    Segments:
    - Rear / lead leg: knee + ankle speed of the rear / lead side
    - Torso: angular velocity of the shoulder midpoint about the pelvis
    - Bottom / top arm: elbow + wrist speed of the lead / rear side
    - Bat: bat-end speed, or wrist-midpoint speed scaled up when the bat
      is not tracked

    Usage:
        extractor = MomentumExtractor()
        segments = extractor.compute_segment_momentum(sequence)
        print(segments[SegmentName.BAT].peak_time_ms)
    """

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings()

    # -------------------------------------------------------------------------
    # Core Velocity Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_velocity(
        p1: Optional[JointPosition],
        p2: Optional[JointPosition],
        delta_time_ms: float,
    ) -> Optional[float]:
        """
        Linear speed between two positions of the same joint.

        Returns:
            Pixels per second, 0.0 for a non-positive time delta, or None
            if either position is missing
        """
        if p1 is None or p2 is None:
            return None
        if delta_time_ms <= 0:
            return 0.0
        return p1.distance_to(p2) / (delta_time_ms / 1000)

    @staticmethod
    def calculate_angular_velocity(
        p1: Optional[JointPosition],
        p2: Optional[JointPosition],
        pivot: Optional[JointPosition],
        delta_time_ms: float,
    ) -> Optional[float]:
        """
        Rotation speed of a point about a pivot.

        The angle change is normalized to [-pi, pi] so a wrap across the
        +/-180 degree line is not read as a full turn.

        Returns:
            Absolute degrees per second, 0.0 for a non-positive time delta,
            or None if any point is missing
        """
        if p1 is None or p2 is None or pivot is None:
            return None
        if delta_time_ms <= 0:
            return 0.0

        angle1 = math.atan2(p1.y - pivot.y, p1.x - pivot.x)
        angle2 = math.atan2(p2.y - pivot.y, p2.x - pivot.x)

        delta = angle2 - angle1
        while delta > math.pi:
            delta -= 2 * math.pi
        while delta < -math.pi:
            delta += 2 * math.pi

        return math.degrees(abs(delta)) / (delta_time_ms / 1000)

    # -------------------------------------------------------------------------
    # Segment Definitions
    # -------------------------------------------------------------------------

    @staticmethod
    def segment_joints(is_right_handed: bool) -> dict[SegmentName, tuple[Joint, Joint]]:
        """
        Joint pairs for the four linear segments.

        A right-handed batter's rear side is the right side and the bottom
        hand is the left hand.
        """
        if is_right_handed:
            return {
                SegmentName.REAR_LEG: (Joint.RIGHT_KNEE, Joint.RIGHT_ANKLE),
                SegmentName.LEAD_LEG: (Joint.LEFT_KNEE, Joint.LEFT_ANKLE),
                SegmentName.BOTTOM_ARM: (Joint.LEFT_ELBOW, Joint.LEFT_WRIST),
                SegmentName.TOP_ARM: (Joint.RIGHT_ELBOW, Joint.RIGHT_WRIST),
            }
        return {
            SegmentName.REAR_LEG: (Joint.LEFT_KNEE, Joint.LEFT_ANKLE),
            SegmentName.LEAD_LEG: (Joint.RIGHT_KNEE, Joint.RIGHT_ANKLE),
            SegmentName.BOTTOM_ARM: (Joint.RIGHT_ELBOW, Joint.RIGHT_WRIST),
            SegmentName.TOP_ARM: (Joint.LEFT_ELBOW, Joint.LEFT_WRIST),
        }

    # -------------------------------------------------------------------------
    # Complete Sequence Analysis
    # -------------------------------------------------------------------------

    def compute_segment_momentum(
        self,
        sequence: SwingPoseSequence,
    ) -> dict[SegmentName, SegmentMomentumData]:
        """
        Compute the smoothed momentum curve and peak of every segment.

        Sample i describes the motion between frame i and frame i+1 and is
        stamped with the time of frame i+1.

        Args:
            sequence: Frames for one swing, ordered by time

        Returns:
            One SegmentMomentumData per segment. Fewer than two frames
            yields zero-filled entries rather than an error.
        """
        frames = sequence.frames
        if len(frames) < 2:
            logger.debug(
                "Swing %s has %d frame(s); returning empty momentum",
                sequence.swing_id, len(frames),
            )
            return {seg: SegmentMomentumData(segment=seg) for seg in IDEAL_SEQUENCE}

        incomplete = sum(1 for f in frames if f.missing_joints())
        if incomplete:
            logger.debug(
                "Swing %s: %d of %d frames missing required joints",
                sequence.swing_id, incomplete, len(frames),
            )

        joint_pairs = self.segment_joints(sequence.is_right_handed)
        curves: dict[SegmentName, list[float]] = {seg: [] for seg in IDEAL_SEQUENCE}

        for prev, curr in zip(frames, frames[1:]):
            dt = curr.time_ms - prev.time_ms

            for seg, joints in joint_pairs.items():
                curves[seg].append(self._joint_group_velocity(prev, curr, joints, dt))

            torso = self.calculate_angular_velocity(
                prev.shoulder_midpoint, curr.shoulder_midpoint, prev.pelvis, dt
            )
            curves[SegmentName.TORSO].append(0.0 if torso is None else torso)

            curves[SegmentName.BAT].append(self._bat_velocity(prev, curr, dt))

        sample_times = tuple(f.time_ms for f in frames[1:])
        window = self.settings.smoothing_window

        result = {}
        for seg in IDEAL_SEQUENCE:
            curve = smooth_curve(curves[seg], window)
            peak_idx = find_peak_index(curve)
            result[seg] = SegmentMomentumData(
                segment=seg,
                momentum_curve=tuple(curve),
                frame_times=sample_times,
                peak_frame_index=peak_idx,
                peak_time_ms=sample_times[peak_idx],
                peak_value=curve[peak_idx],
            )
        return result

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    def _joint_group_velocity(
        self,
        prev: FramePose,
        curr: FramePose,
        joints: tuple[Joint, ...],
        dt: float,
    ) -> float:
        """Average speed of the joints present in both frames (0.0 if none)."""
        speeds = [
            self.calculate_velocity(prev.get_joint(j), curr.get_joint(j), dt)
            for j in joints
        ]
        present = [s for s in speeds if s is not None]
        if not present:
            return 0.0
        return sum(present) / len(present)

    def _bat_velocity(self, prev: FramePose, curr: FramePose, dt: float) -> float:
        bat_speed = self.calculate_velocity(
            prev.get_joint(Joint.BAT_END), curr.get_joint(Joint.BAT_END), dt
        )
        if bat_speed is not None:
            return bat_speed

        # Approximation: bat tip outruns the hands by a fixed factor
        hand_speed = self.calculate_velocity(prev.wrist_midpoint, curr.wrist_midpoint, dt)
        if hand_speed is None:
            return 0.0
        return hand_speed * self.settings.bat_speed_multiplier
