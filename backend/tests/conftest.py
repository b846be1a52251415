import math

import pytest

from kinetics.domain.pose import FramePose, Handedness, Joint, JointPosition, SwingPoseSequence
from kinetics.domain.sequence import IDEAL_SEQUENCE, SegmentMomentumData, SegmentName
from kinetics.services.momentum_extractor import MomentumExtractor

FRAME_MS = 10.0

# Sample index at which each segment's motion burst is centred
IDEAL_PEAK_SAMPLES = {
    SegmentName.REAR_LEG: 3,
    SegmentName.LEAD_LEG: 6,
    SegmentName.TORSO: 9,
    SegmentName.BOTTOM_ARM: 12,
    SegmentName.TOP_ARM: 15,
    SegmentName.BAT: 18,
}

BASE_POSITIONS = {
    Joint.LEFT_HIP: (280.0, 400.0),
    Joint.RIGHT_HIP: (320.0, 400.0),
    Joint.LEFT_KNEE: (270.0, 500.0),
    Joint.RIGHT_KNEE: (330.0, 500.0),
    Joint.LEFT_ANKLE: (265.0, 600.0),
    Joint.RIGHT_ANKLE: (335.0, 600.0),
    Joint.LEFT_ELBOW: (250.0, 300.0),
    Joint.RIGHT_ELBOW: (350.0, 300.0),
    Joint.LEFT_WRIST: (260.0, 250.0),
    Joint.RIGHT_WRIST: (340.0, 250.0),
    Joint.BAT_END: (300.0, 150.0),
}

PELVIS = (300.0, 400.0)
SHOULDER_OFFSETS = {Joint.LEFT_SHOULDER: -20.0, Joint.RIGHT_SHOULDER: 20.0}


def _burst(sample: int, center: int) -> float:
    """Per-sample displacement: 3 units at the centre, 1 unit either side."""
    return {0: 3.0, 1: 1.0}.get(abs(sample - center), 0.0)


def _travel(frame: int, center: int) -> float:
    """Cumulative displacement reached at a frame."""
    return sum(_burst(k, center) for k in range(frame))


def build_pose_sequence(
    peak_samples=None,
    n_frames: int = 24,
    handedness: Handedness = Handedness.RIGHT,
    swing_id: str = "test-swing",
    with_bat: bool = True,
) -> SwingPoseSequence:
    """
    Synthetic swing in which each segment moves in one short burst.

    After smoothing, a segment whose burst is centred on sample c peaks at
    sample c, i.e. at time (c + 1) * FRAME_MS.
    """
    peaks = dict(IDEAL_PEAK_SAMPLES if peak_samples is None else peak_samples)
    pairs = MomentumExtractor.segment_joints(handedness == Handedness.RIGHT)

    frames = []
    for i in range(n_frames):
        joints = {}
        for joint, (x, y) in BASE_POSITIONS.items():
            if joint == Joint.BAT_END and not with_bat:
                continue
            joints[joint] = JointPosition(x, y, confidence=0.9)

        for segment, segment_joints in pairs.items():
            dx = 10.0 * _travel(i, peaks[segment])
            for joint in segment_joints:
                base = joints[joint]
                joints[joint] = JointPosition(base.x + dx, base.y, confidence=0.9)

        if with_bat:
            base = joints[Joint.BAT_END]
            joints[Joint.BAT_END] = JointPosition(
                base.x + 20.0 * _travel(i, peaks[SegmentName.BAT]), base.y
            )

        # Shoulders rotate about the fixed pelvis
        theta = math.radians(5.0 * _travel(i, peaks[SegmentName.TORSO]))
        for joint, offset in SHOULDER_OFFSETS.items():
            x0, y0 = offset, -100.0
            joints[joint] = JointPosition(
                PELVIS[0] + x0 * math.cos(theta) - y0 * math.sin(theta),
                PELVIS[1] + x0 * math.sin(theta) + y0 * math.cos(theta),
            )

        frames.append(FramePose(frame_index=i, time_ms=i * FRAME_MS, joints=joints))

    return SwingPoseSequence(swing_id=swing_id, handedness=handedness, frames=tuple(frames))


def build_segments(peak_times) -> dict:
    """Segment data with the given peak times and a token non-empty curve."""
    return {
        segment: SegmentMomentumData(
            segment=segment,
            momentum_curve=(1.0,),
            frame_times=(0.0,),
            peak_time_ms=float(peak_times[segment]),
        )
        for segment in peak_times
    }


@pytest.fixture
def pose_sequence_factory():
    return build_pose_sequence


@pytest.fixture
def segments_factory():
    return build_segments


@pytest.fixture
def ideal_peak_times():
    return {segment: i * 100.0 for i, segment in enumerate(IDEAL_SEQUENCE)}
