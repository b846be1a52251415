"""
Analysis API Schemas

Pydantic models for sequence, fingerprint and ball flight requests and
responses.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional, List, Tuple
from enum import Enum


# =============================================================================
# Kinematic Sequence
# =============================================================================

class SegmentNameEnum(str, Enum):
    """Body segments for API."""
    REAR_LEG = "rear_leg"
    LEAD_LEG = "lead_leg"
    TORSO = "torso"
    BOTTOM_ARM = "bottom_arm"
    TOP_ARM = "top_arm"
    BAT = "bat"


class SegmentMomentumSchema(BaseModel):
    """
    Momentum curve of one segment.
    """
    segment: SegmentNameEnum = Field(..., description="Body segment")
    momentum_curve: List[float] = Field(default_factory=list, description="Smoothed momentum per sample")
    frame_times: List[float] = Field(default_factory=list, description="Sample times (ms)")
    peak_frame_index: int = Field(0, ge=0, description="Index of the peak sample")
    peak_time_ms: float = Field(0.0, description="Time of the peak (ms)")
    peak_value: float = Field(0.0, description="Momentum at the peak")


class SequenceErrorSchema(BaseModel):
    """
    A segment that fired out of order.
    """
    segment: SegmentNameEnum = Field(..., description="Body segment")
    expected_position: int = Field(..., ge=1, le=6, description="Slot in the ideal order")
    actual_position: int = Field(..., ge=1, le=6, description="Slot it actually fired in")
    description: str = Field(..., description="Human-readable diagnosis")


class SequenceAnalysisResponse(BaseModel):
    """
    Complete kinematic sequence diagnosis.

    This is the main response from the sequence endpoints.
    """
    swing_id: str = Field(..., description="Swing ID")
    frame_times: List[float] = Field(default_factory=list, description="Sample times (ms)")
    segments: Dict[SegmentNameEnum, SegmentMomentumSchema] = Field(
        default_factory=dict, description="Segment -> momentum data"
    )
    actual_order: List[SegmentNameEnum] = Field(..., description="Segments sorted by peak time")
    ideal_order: List[SegmentNameEnum] = Field(..., description="Body-to-bat order")
    sequence_match: bool = Field(..., description="Actual order equals the ideal order")
    sequence_errors: List[SequenceErrorSchema] = Field(default_factory=list, description="Out-of-order segments")
    sequence_score: int = Field(..., ge=0, le=100, description="Sequence score")
    summary: str = Field(..., description="Text summary of the diagnosis")
    key_frames: Dict[str, int] = Field(default_factory=dict, description="Marker -> frame index")

    class Config:
        json_schema_extra = {
            "example": {
                "swing_id": "swing-001",
                "actual_order": ["rear_leg", "lead_leg", "torso", "bottom_arm", "top_arm", "bat"],
                "ideal_order": ["rear_leg", "lead_leg", "torso", "bottom_arm", "top_arm", "bat"],
                "sequence_match": True,
                "sequence_errors": [],
                "sequence_score": 100,
                "summary": "Body-to-Bat sequence: in sequence (Rear Leg → Lead Leg → Torso → Bottom Arm → Top Arm → Bat)."
            }
        }


# =============================================================================
# Kinetic Fingerprint
# =============================================================================

class FingerprintSwingSchema(BaseModel):
    """
    One sensor swing.
    """
    attack_angle: float = Field(..., description="Vertical attack angle (degrees)")
    attack_direction: float = Field(..., description="Pull (-) to oppo (+) (degrees)")
    time_to_contact: float = Field(..., ge=0.0, description="Trigger to impact (ms)")
    impact_loc_x: Optional[float] = Field(None, description="Impact location on the barrel (x)")
    impact_loc_y: Optional[float] = Field(None, description="Impact location on the barrel (y)")

    class Config:
        json_schema_extra = {
            "example": {
                "attack_angle": 9.5,
                "attack_direction": -4.0,
                "time_to_contact": 148.0
            }
        }


class FingerprintRequest(BaseModel):
    swings: List[FingerprintSwingSchema] = Field(..., description="Swing window")


class FingerprintCompareRequest(BaseModel):
    """
    Two swing windows, e.g. last month and this week.
    """
    older: List[FingerprintSwingSchema] = Field(..., description="Earlier swing window")
    newer: List[FingerprintSwingSchema] = Field(..., description="Later swing window")


class IntentMapSchema(BaseModel):
    horizontal_mean: float = Field(..., description="Mean attack direction (degrees)")
    horizontal_std_dev: float = Field(..., description="Attack direction spread")
    vertical_mean: float = Field(..., description="Mean attack angle (degrees)")
    vertical_std_dev: float = Field(..., description="Attack angle spread")
    depth_index: float = Field(..., ge=0, le=100, description="Early (0) to late (100)")
    depth_consistency: float = Field(..., description="100 - timing CV x 100")


class TimingSignatureSchema(BaseModel):
    trigger_to_impact_ms: float = Field(..., description="Mean trigger to impact (ms)")
    timing_variance: float = Field(..., description="Timing CV, lower is more consistent")
    tempo_category: str = Field(..., description="quick | moderate | deliberate")


class ComfortZoneSchema(BaseModel):
    horizontal: Tuple[float, float] = Field(..., description="Attack direction (10th, 90th)")
    vertical: Tuple[float, float] = Field(..., description="Attack angle (10th, 90th)")


class PatternMetricsSchema(BaseModel):
    tightness: float = Field(..., ge=0, le=100, description="Pattern tightness")
    pull_bias: float = Field(..., description="Negative = pull, positive = oppo")
    zone_bias: str = Field(..., description="low | middle | high")
    comfort_zone: ComfortZoneSchema = Field(..., description="Middle 80% of swings")


class FingerprintResponse(BaseModel):
    """
    Kinetic Fingerprint of a swing window plus its motor profile.
    """
    intent_map: IntentMapSchema
    timing_signature: TimingSignatureSchema
    pattern_metrics: PatternMetricsSchema
    heatmap: List[List[int]] = Field(default_factory=list, description="10x10 grid of swing percentages")
    impact_center: Optional[Tuple[float, float]] = Field(None, description="Mean impact location")
    swing_count: int = Field(..., ge=0, description="Swings aggregated")
    motor_profile: str = Field(..., description="Spinner | Slingshotter | Whipper | Titan | Unknown")


class FingerprintComparisonResponse(BaseModel):
    """
    Progression between two swing windows.
    """
    tightness_change: float = Field(..., description="Newer minus older tightness")
    consistency_change: float = Field(..., description="Newer minus older depth consistency")
    improved: bool = Field(..., description="Either change exceeds 5")
    summary: str = Field(..., description="Text summary of the change")
    older_profile: str = Field(..., description="Motor profile of the older window")
    newer_profile: str = Field(..., description="Motor profile of the newer window")

    class Config:
        json_schema_extra = {
            "example": {
                "tightness_change": 8,
                "consistency_change": 2,
                "improved": True,
                "summary": "Pattern tightened by 8%.",
                "older_profile": "Unknown",
                "newer_profile": "Spinner"
            }
        }


# =============================================================================
# Ball Flight
# =============================================================================

class BiomechanicsInputSchema(BaseModel):
    """
    Biomechanics snapshot. Every field is optional.
    """
    bat_ke: Optional[float] = Field(None, description="Bat kinetic energy (J)")
    pelvis_velocity: Optional[float] = Field(None, description="Peak pelvis rotation (deg/s)")
    torso_velocity: Optional[float] = Field(None, description="Peak torso rotation (deg/s)")
    transfer_efficiency: Optional[float] = Field(None, description="Energy transfer efficiency (%)")
    x_factor: Optional[float] = Field(None, description="Hip-shoulder separation (degrees)")
    brain_score: Optional[float] = Field(None, description="Sequencing score (20-80)")
    body_score: Optional[float] = Field(None, description="Body score (20-80)")
    motor_profile: Optional[str] = Field(None, description="Motor profile label")

    class Config:
        json_schema_extra = {
            "example": {
                "bat_ke": 180,
                "transfer_efficiency": 80,
                "brain_score": 65,
                "torso_velocity": 1100,
                "motor_profile": "Spinner"
            }
        }


class BallFlightResponse(BaseModel):
    exit_velocity: Optional[float] = Field(None, description="Predicted exit velocity (mph)")
    launch_angle: Optional[int] = Field(None, description="Predicted launch angle (degrees)")
    kinetic_potential: Optional[int] = Field(None, ge=20, le=80, description="20-80 grade")
    confidence: str = Field(..., description="high | medium | low")
    confidence_label: str = Field(..., description="Display label for the confidence")


# =============================================================================
# Health
# =============================================================================

class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
