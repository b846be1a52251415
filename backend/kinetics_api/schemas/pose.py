"""
Pose API Schemas

Pydantic models for the pose frames a client sends for sequence analysis.
These define the JSON structure produced by the upstream pose pipeline.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional, List
from enum import Enum


class JointEnum(str, Enum):
    """Joint names accepted in a frame. Unknown names are rejected (422)."""
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    PELVIS = "pelvis"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    SPINE = "spine"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    BAT_END = "bat_end"


class HandednessEnum(str, Enum):
    LEFT = "L"
    RIGHT = "R"


class JointPositionSchema(BaseModel):
    """
    Single joint position.

    Coordinates are in pixels, y growing downward.
    """
    x: float = Field(..., description="Horizontal position (px)")
    y: float = Field(..., description="Vertical position (px)")
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0, description="Detection confidence")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 412.5,
                "y": 288.0,
                "confidence": 0.94
            }
        }


class FramePoseSchema(BaseModel):
    """
    Joint positions for one frame.

    Joints missing from the mapping are treated as not detected.
    """
    frame_index: int = Field(..., ge=0, description="Sequential frame number")
    time_ms: float = Field(..., ge=0.0, description="Capture time in milliseconds")
    joints: Dict[JointEnum, JointPositionSchema] = Field(
        default_factory=dict, description="Joint name -> position"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "frame_index": 12,
                "time_ms": 200.0,
                "joints": {
                    "right_knee": {"x": 402.0, "y": 510.0},
                    "right_ankle": {"x": 398.0, "y": 640.0}
                }
            }
        }


class SwingPoseSequenceSchema(BaseModel):
    """
    Request to analyze the kinematic sequence of one swing.
    """
    swing_id: str = Field(..., min_length=1, description="Caller-assigned swing ID")
    handedness: HandednessEnum = Field(HandednessEnum.RIGHT, description="Batter handedness")
    frames: List[FramePoseSchema] = Field(..., description="Frames ordered by time")
    load_frame_index: Optional[int] = Field(None, ge=0, description="Load position marker")
    contact_frame_index: Optional[int] = Field(None, ge=0, description="Contact marker")
    finish_frame_index: Optional[int] = Field(None, ge=0, description="Finish marker")

    class Config:
        json_schema_extra = {
            "example": {
                "swing_id": "swing-001",
                "handedness": "R",
                "frames": [],
                "contact_frame_index": 24
            }
        }
