"""
Domain Models

Pure data structures for swing kinetics scoring.
Frozen dataclasses and enums only - computed once, never mutated.
"""

from .pose import Joint, JointPosition, FramePose, Handedness, SwingPoseSequence
from .sequence import (
    SegmentName,
    SegmentMomentumData,
    SequenceError,
    SwingSequenceAnalysis,
    IDEAL_SEQUENCE,
)
from .contact import (
    BattedBallEvent,
    BattedBallType,
    ContactScoreBreakdown,
    ScoredBattedBallEvent,
    ContactQualitySessionStats,
)
from .population import PercentileRange, PopulationBaseline, RegressionCoefficients
from .fingerprint import FingerprintSwing, KineticFingerprintData, MotorProfile
from .ball_flight import BiomechanicsInput, BallFlightPrediction, ConfidenceLevel

__all__ = [
    "Joint",
    "JointPosition",
    "FramePose",
    "Handedness",
    "SwingPoseSequence",
    "SegmentName",
    "SegmentMomentumData",
    "SequenceError",
    "SwingSequenceAnalysis",
    "IDEAL_SEQUENCE",
    "BattedBallEvent",
    "BattedBallType",
    "ContactScoreBreakdown",
    "ScoredBattedBallEvent",
    "ContactQualitySessionStats",
    "PercentileRange",
    "PopulationBaseline",
    "RegressionCoefficients",
    "FingerprintSwing",
    "KineticFingerprintData",
    "MotorProfile",
    "BiomechanicsInput",
    "BallFlightPrediction",
    "ConfidenceLevel",
]
