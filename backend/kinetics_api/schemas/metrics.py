"""
Metrics API Schemas

Pydantic models for contact quality and population percentile requests and
responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


# =============================================================================
# Contact Quality
# =============================================================================

class BattedBallSchema(BaseModel):
    """
    One batted ball from a launch monitor.
    """
    exit_velocity: float = Field(..., description="Exit velocity (mph)")
    launch_angle: float = Field(..., description="Launch angle (degrees)")
    distance: Optional[float] = Field(None, ge=0.0, description="Carry distance (ft)")
    spray_angle: Optional[float] = Field(None, description="Spray angle, 0 = center (degrees)")
    hang_time: Optional[float] = Field(None, ge=0.0, description="Hang time (s)")
    result: Optional[str] = Field(None, description="Play result")
    hit_type: Optional[str] = Field(None, description="Reported hit type")

    class Config:
        json_schema_extra = {
            "example": {
                "exit_velocity": 102.0,
                "launch_angle": 20.0,
                "distance": 385
            }
        }


class ContactScoreBreakdownSchema(BaseModel):
    base_score: float = Field(..., description="0-70 from exit velocity")
    la_angle_bonus: int = Field(..., description="-15 to +15 by launch angle")
    hard_hit_bonus: int = Field(..., description="+10 if hard hit")
    sweet_spot_bonus: int = Field(..., description="+10 if sweet spot and not barrel")
    barrel_bonus: int = Field(..., description="+15 if barrel")
    raw_score: float = Field(..., description="Sum before clamping")
    final_score: int = Field(..., ge=0, le=100, description="Contact Quality Score")


class ScoredBattedBallSchema(BaseModel):
    """
    A batted ball with its StatCast classification and score.
    """
    exit_velocity: float = Field(..., description="Exit velocity (mph)")
    launch_angle: float = Field(..., description="Launch angle (degrees)")
    distance: Optional[float] = Field(None, description="Carry distance (ft)")
    spray_angle: Optional[float] = Field(None, description="Spray angle (degrees)")
    is_hard_hit: bool = Field(..., description="EV >= 95 mph")
    is_sweet_spot: bool = Field(..., description="8 <= LA <= 32")
    is_barrel: bool = Field(..., description="Inside the barrel window")
    bb_type: str = Field(..., description="GB | LD | FB | PU | UNK")
    contact_score: int = Field(..., ge=0, le=100, description="Contact Quality Score")
    grade: str = Field(..., description="Score grade, e.g. 'Elite'")
    score_breakdown: ContactScoreBreakdownSchema

    class Config:
        json_schema_extra = {
            "example": {
                "exit_velocity": 102.0,
                "launch_angle": 20.0,
                "is_hard_hit": True,
                "is_sweet_spot": True,
                "is_barrel": True,
                "bb_type": "LD",
                "contact_score": 93,
                "grade": "Elite"
            }
        }


class ContactSessionRequest(BaseModel):
    """
    Batted balls for one session.
    """
    events: List[BattedBallSchema] = Field(..., description="Session batted balls")
    previous_avg_score: Optional[float] = Field(
        None, ge=0, le=100, description="Previous session average, for the trend"
    )


class SessionStatsSchema(BaseModel):
    total_events: int
    avg_ev: float
    max_ev: float
    min_ev: float
    avg_la: float
    max_la: float
    min_la: float
    hard_hit_pct: float
    sweet_spot_pct: float
    barrel_pct: float
    gb_pct: float
    ld_pct: float
    fb_pct: float
    pu_pct: float
    avg_contact_score: float
    max_contact_score: int
    min_contact_score: int
    avg_distance: Optional[int] = None
    max_distance: Optional[int] = None


class ContactSessionResponse(BaseModel):
    """
    Scored events and session rollup.
    """
    events: List[ScoredBattedBallSchema] = Field(default_factory=list, description="Scored events")
    stats: SessionStatsSchema = Field(..., description="Session statistics")
    grade: str = Field(..., description="Grade of the average score")
    explanation: str = Field(..., description="One-sentence explanation")
    trend: Optional[str] = Field(None, description="improving | stable | declining")


# =============================================================================
# Population Percentiles
# =============================================================================

class PercentileRequest(BaseModel):
    """
    Player metrics to rank against a population.
    """
    bat_speed: float = Field(..., description="Bat speed (mph)")
    hand_speed: float = Field(..., description="Hand speed (mph)")
    hand_to_bat_ratio: float = Field(..., description="Bat speed / hand speed")
    timing_cv: float = Field(..., ge=0.0, description="Timing coefficient of variation")
    level: Optional[str] = Field(None, description="Age/level group, e.g. 'high_school' or '14u'")

    class Config:
        json_schema_extra = {
            "example": {
                "bat_speed": 68.0,
                "hand_speed": 25.0,
                "hand_to_bat_ratio": 1.27,
                "timing_cv": 0.07,
                "level": "High School"
            }
        }


class PercentileResponse(BaseModel):
    level: str = Field(..., description="Benchmark group used")
    bat_speed_percentile: int = Field(..., ge=1, le=99)
    hand_speed_percentile: int = Field(..., ge=1, le=99)
    ratio_percentile: int = Field(..., ge=1, le=99)
    timing_percentile: int = Field(..., ge=1, le=99)
    composite_percentile: int = Field(..., ge=1, le=99)


class MechanicalLossRequest(BaseModel):
    """
    Sub-scores and measured bat speed.
    """
    actual_bat_speed: float = Field(..., description="Measured bat speed (mph)")
    bat_score: float = Field(..., description="Bat sub-score")
    brain_score: float = Field(..., description="Brain sub-score")
    body_score: float = Field(..., description="Body sub-score")
    ball_score: float = Field(..., description="Ball sub-score")


class MechanicalLossResponse(BaseModel):
    expected_bat_speed: float = Field(..., description="Model bat speed (mph)")
    actual_bat_speed: float = Field(..., description="Measured bat speed (mph)")
    loss: float = Field(..., ge=0.0, description="mph left on the table")
