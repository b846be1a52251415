"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    JointEnum,
    HandednessEnum,
    JointPositionSchema,
    FramePoseSchema,
    SwingPoseSequenceSchema,
)

from .analysis import (
    SegmentNameEnum,
    SegmentMomentumSchema,
    SequenceErrorSchema,
    SequenceAnalysisResponse,
    FingerprintSwingSchema,
    FingerprintRequest,
    FingerprintCompareRequest,
    IntentMapSchema,
    TimingSignatureSchema,
    ComfortZoneSchema,
    PatternMetricsSchema,
    FingerprintResponse,
    FingerprintComparisonResponse,
    BiomechanicsInputSchema,
    BallFlightResponse,
    HealthResponse,
)

from .metrics import (
    BattedBallSchema,
    ContactScoreBreakdownSchema,
    ScoredBattedBallSchema,
    ContactSessionRequest,
    SessionStatsSchema,
    ContactSessionResponse,
    PercentileRequest,
    PercentileResponse,
    MechanicalLossRequest,
    MechanicalLossResponse,
)

__all__ = [
    # Pose schemas
    "JointEnum",
    "HandednessEnum",
    "JointPositionSchema",
    "FramePoseSchema",
    "SwingPoseSequenceSchema",
    # Analysis schemas
    "SegmentNameEnum",
    "SegmentMomentumSchema",
    "SequenceErrorSchema",
    "SequenceAnalysisResponse",
    "FingerprintSwingSchema",
    "FingerprintRequest",
    "FingerprintCompareRequest",
    "IntentMapSchema",
    "TimingSignatureSchema",
    "ComfortZoneSchema",
    "PatternMetricsSchema",
    "FingerprintResponse",
    "FingerprintComparisonResponse",
    "BiomechanicsInputSchema",
    "BallFlightResponse",
    "HealthResponse",
    # Metrics schemas
    "BattedBallSchema",
    "ContactScoreBreakdownSchema",
    "ScoredBattedBallSchema",
    "ContactSessionRequest",
    "SessionStatsSchema",
    "ContactSessionResponse",
    "PercentileRequest",
    "PercentileResponse",
    "MechanicalLossRequest",
    "MechanicalLossResponse",
]
