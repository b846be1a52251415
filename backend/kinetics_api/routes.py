"""
REST API Routes

FastAPI routes for swing kinetics scoring.
Handles HTTP requests and converts between API schemas and domain models.
"""

import logging
from dataclasses import asdict
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query

from .schemas import (
    SwingPoseSequenceSchema,
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
from kinetics.config import API_VERSION
from kinetics.domain.ball_flight import BiomechanicsInput
from kinetics.domain.contact import BattedBallEvent, ScoredBattedBallEvent
from kinetics.domain.fingerprint import FingerprintSwing, KineticFingerprintData
from kinetics.domain.pose import FramePose, Handedness, Joint, JointPosition, SwingPoseSequence
from kinetics.domain.sequence import SegmentName, SwingSequenceAnalysis
from kinetics.services import (
    BallFlightPredictor,
    ContactScorer,
    FingerprintAggregator,
    PercentileEngine,
    SequenceAnalyzer,
    mock_sequence_analysis,
)

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

# Stateless services, shared across requests
sequence_analyzer = SequenceAnalyzer()
percentile_engine = PercentileEngine()
fingerprint_aggregator = FingerprintAggregator()
ball_flight_predictor = BallFlightPredictor()

# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running.

    Returns:
        Health status and version information
    """
    return HealthResponse(status="healthy", version=API_VERSION)


# =============================================================================
# Kinematic Sequence
# =============================================================================

@router.post(
    "/sequence/analyze",
    response_model=SequenceAnalysisResponse,
    tags=["Kinematic Sequence"],
    summary="Analyze the kinematic sequence of a swing"
)
async def analyze_sequence(request: SwingPoseSequenceSchema) -> SequenceAnalysisResponse:
    """
    Diagnose the body-to-bat firing order from pose frames.

    The frames will be:
    1. Reduced to one momentum curve per body segment
    2. Smoothed, with each segment's peak located
    3. Compared against the ideal order and scored

    Fewer than two frames is not an error: the swing scores 0 with an
    explanatory summary.

    Args:
        request: Swing ID, handedness and pose frames

    Returns:
        Complete sequence analysis
    """
    try:
        sequence = _convert_pose_sequence(request)
        result = sequence_analyzer.analyze_pose_sequence(sequence)
        return _convert_sequence_to_response(result, key_frames=sequence.markers())

    except Exception as e:
        logger.error(f"Sequence analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get(
    "/sequence/demo",
    response_model=SequenceAnalysisResponse,
    tags=["Kinematic Sequence"],
    summary="Demo analysis from a synthetic swing"
)
async def sequence_demo(
    swing_id: str = Query("demo", description="Swing ID for the result"),
    segment: Optional[SegmentNameEnum] = Query(None, description="Segment to shift"),
    offset_ms: float = Query(0.0, ge=-500, le=500, description="Peak shift for that segment"),
) -> SequenceAnalysisResponse:
    """
    Deterministic demo analysis without pose data.

    Shift one segment's peak to see how an out-of-sequence swing is
    diagnosed. Useful for frontend development and testing.
    """
    errors = {SegmentName(segment.value): offset_ms} if segment is not None else None
    result = mock_sequence_analysis(swing_id, errors, analyzer=sequence_analyzer)
    return _convert_sequence_to_response(result)


# =============================================================================
# Contact Quality
# =============================================================================

@router.post(
    "/contact/score",
    response_model=ScoredBattedBallSchema,
    tags=["Contact Quality"],
    summary="Score a single batted ball"
)
async def score_contact(request: BattedBallSchema) -> ScoredBattedBallSchema:
    """
    Classify a batted ball (hard hit, sweet spot, barrel, type) and compute
    its 0-100 Contact Quality Score.
    """
    try:
        scored = ContactScorer.score_batted_ball(_convert_batted_ball(request))
        return _convert_scored_event(scored)

    except Exception as e:
        logger.error(f"Contact scoring failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/contact/session",
    response_model=ContactSessionResponse,
    tags=["Contact Quality"],
    summary="Score a session of batted balls"
)
async def score_session(request: ContactSessionRequest) -> ContactSessionResponse:
    """
    Score every batted ball in a session and roll them up.

    Pass previous_avg_score to get a trend against the last session.
    """
    try:
        scored = [
            ContactScorer.score_batted_ball(_convert_batted_ball(event))
            for event in request.events
        ]
        stats = ContactScorer.calculate_session_stats(scored)

        trend = None
        if request.previous_avg_score is not None:
            trend = ContactScorer.get_trend_direction(
                stats.avg_contact_score, request.previous_avg_score
            ).value

        return ContactSessionResponse(
            events=[_convert_scored_event(e) for e in scored],
            stats=SessionStatsSchema(**asdict(stats)),
            grade=ContactScorer.get_contact_score_grade(stats.avg_contact_score),
            explanation=ContactScorer.explain_contact_score(stats.avg_contact_score),
            trend=trend,
        )

    except Exception as e:
        logger.error(f"Session scoring failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# Population Percentiles
# =============================================================================

@router.post(
    "/population/percentiles",
    response_model=PercentileResponse,
    tags=["Population"],
    summary="Rank player metrics against an age/level group"
)
async def population_percentiles(request: PercentileRequest) -> PercentileResponse:
    """
    Percentile ranks (1-99) for bat speed, hand speed, hand-to-bat ratio and
    timing consistency, plus the weighted composite.

    Unknown levels fall back to the default group.
    """
    try:
        report = percentile_engine.get_all_percentiles(
            bat_speed=request.bat_speed,
            hand_speed=request.hand_speed,
            hand_to_bat_ratio=request.hand_to_bat_ratio,
            timing_cv=request.timing_cv,
            level=request.level,
        )
        return PercentileResponse(**asdict(report))

    except Exception as e:
        logger.error(f"Percentile calculation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/population/mechanical-loss",
    response_model=MechanicalLossResponse,
    tags=["Population"],
    summary="Estimate bat speed left on the table"
)
async def mechanical_loss(request: MechanicalLossRequest) -> MechanicalLossResponse:
    """
    Expected bat speed from the four sub-scores, and how far the measured
    bat speed falls short of it.
    """
    try:
        loss = percentile_engine.estimate_mechanical_loss(
            actual_bat_speed=request.actual_bat_speed,
            bat_score=request.bat_score,
            brain_score=request.brain_score,
            body_score=request.body_score,
            ball_score=request.ball_score,
        )
        return MechanicalLossResponse(**asdict(loss))

    except Exception as e:
        logger.error(f"Mechanical loss estimate failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# Kinetic Fingerprint
# =============================================================================

@router.post(
    "/fingerprint",
    response_model=FingerprintResponse,
    tags=["Kinetic Fingerprint"],
    summary="Build a Kinetic Fingerprint from a swing window"
)
async def build_fingerprint(request: FingerprintRequest) -> FingerprintResponse:
    """
    Aggregate sensor swings into intent map, timing signature and pattern
    metrics, and classify the motor profile.

    An empty window returns the neutral fingerprint.
    """
    try:
        fingerprint = fingerprint_aggregator.calculate(_convert_swings(request.swings))
        return _convert_fingerprint_to_response(fingerprint)

    except Exception as e:
        logger.error(f"Fingerprint calculation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/fingerprint/compare",
    response_model=FingerprintComparisonResponse,
    tags=["Kinetic Fingerprint"],
    summary="Compare two swing windows"
)
async def compare_fingerprints(request: FingerprintCompareRequest) -> FingerprintComparisonResponse:
    """
    Track progression from an older swing window to a newer one.
    """
    try:
        older = fingerprint_aggregator.calculate(_convert_swings(request.older))
        newer = fingerprint_aggregator.calculate(_convert_swings(request.newer))
        comparison = fingerprint_aggregator.compare(older, newer)

        return FingerprintComparisonResponse(
            tightness_change=comparison.tightness_change,
            consistency_change=comparison.consistency_change,
            improved=comparison.improved,
            summary=comparison.summary,
            older_profile=fingerprint_aggregator.classify_motor_profile(older).value,
            newer_profile=fingerprint_aggregator.classify_motor_profile(newer).value,
        )

    except Exception as e:
        logger.error(f"Fingerprint comparison failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# Ball Flight
# =============================================================================

@router.post(
    "/ball-flight/predict",
    response_model=BallFlightResponse,
    tags=["Ball Flight"],
    summary="Predict ball flight from biomechanics"
)
async def predict_ball_flight(request: BiomechanicsInputSchema) -> BallFlightResponse:
    """
    Predict exit velocity, launch angle and kinetic potential without a
    launch monitor. Works with any subset of inputs; confidence reflects
    how many were provided.
    """
    try:
        prediction = ball_flight_predictor.predict(BiomechanicsInput(**request.model_dump()))
        return BallFlightResponse(
            exit_velocity=prediction.exit_velocity,
            launch_angle=prediction.launch_angle,
            kinetic_potential=prediction.kinetic_potential,
            confidence=prediction.confidence.value,
            confidence_label=ball_flight_predictor.confidence_label(prediction.confidence),
        )

    except Exception as e:
        logger.error(f"Ball flight prediction failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# Helper Functions
# =============================================================================

def _convert_pose_sequence(request: SwingPoseSequenceSchema) -> SwingPoseSequence:
    """Convert API pose sequence to the domain model, ordered by time."""
    frames = tuple(
        FramePose(
            frame_index=frame.frame_index,
            time_ms=frame.time_ms,
            joints={
                Joint(name.value): JointPosition(x=p.x, y=p.y, confidence=p.confidence)
                for name, p in frame.joints.items()
            },
        )
        for frame in sorted(request.frames, key=lambda f: f.time_ms)
    )
    return SwingPoseSequence(
        swing_id=request.swing_id,
        handedness=Handedness(request.handedness.value),
        frames=frames,
        load_frame_index=request.load_frame_index,
        contact_frame_index=request.contact_frame_index,
        finish_frame_index=request.finish_frame_index,
    )


def _convert_sequence_to_response(
    result: SwingSequenceAnalysis,
    key_frames: Optional[dict] = None,
) -> SequenceAnalysisResponse:
    """Convert domain SwingSequenceAnalysis to API response schema."""
    segments = {
        SegmentNameEnum(name.value): SegmentMomentumSchema(
            segment=SegmentNameEnum(data.segment.value),
            momentum_curve=list(data.momentum_curve),
            frame_times=list(data.frame_times),
            peak_frame_index=data.peak_frame_index,
            peak_time_ms=data.peak_time_ms,
            peak_value=data.peak_value,
        )
        for name, data in result.segments.items()
    }

    errors = [
        SequenceErrorSchema(
            segment=SegmentNameEnum(err.segment.value),
            expected_position=err.expected_position,
            actual_position=err.actual_position,
            description=err.description,
        )
        for err in result.sequence_errors
    ]

    return SequenceAnalysisResponse(
        swing_id=result.swing_id,
        frame_times=list(result.frame_times),
        segments=segments,
        actual_order=[SegmentNameEnum(s.value) for s in result.actual_order],
        ideal_order=[SegmentNameEnum(s.value) for s in result.ideal_order],
        sequence_match=result.sequence_match,
        sequence_errors=errors,
        sequence_score=result.sequence_score,
        summary=result.summary,
        key_frames=key_frames or {},
    )


def _convert_batted_ball(event: BattedBallSchema) -> BattedBallEvent:
    return BattedBallEvent(**event.model_dump())


def _convert_scored_event(scored: ScoredBattedBallEvent) -> ScoredBattedBallSchema:
    """Convert domain ScoredBattedBallEvent to API schema."""
    return ScoredBattedBallSchema(
        exit_velocity=scored.exit_velocity,
        launch_angle=scored.launch_angle,
        distance=scored.distance,
        spray_angle=scored.event.spray_angle,
        is_hard_hit=scored.is_hard_hit,
        is_sweet_spot=scored.is_sweet_spot,
        is_barrel=scored.is_barrel,
        bb_type=scored.bb_type.value,
        contact_score=scored.contact_score,
        grade=ContactScorer.get_contact_score_grade(scored.contact_score),
        score_breakdown=ContactScoreBreakdownSchema(**asdict(scored.score_breakdown)),
    )


def _convert_swings(swings: List[FingerprintSwingSchema]) -> List[FingerprintSwing]:
    return [FingerprintSwing(**swing.model_dump()) for swing in swings]


def _convert_fingerprint_to_response(fp: KineticFingerprintData) -> FingerprintResponse:
    """Convert domain KineticFingerprintData to API response schema."""
    timing = fp.timing_signature
    pattern = fp.pattern_metrics

    return FingerprintResponse(
        intent_map=IntentMapSchema(**asdict(fp.intent_map)),
        timing_signature=TimingSignatureSchema(
            trigger_to_impact_ms=timing.trigger_to_impact_ms,
            timing_variance=timing.timing_variance,
            tempo_category=timing.tempo_category.value,
        ),
        pattern_metrics=PatternMetricsSchema(
            tightness=pattern.tightness,
            pull_bias=pattern.pull_bias,
            zone_bias=pattern.zone_bias.value,
            comfort_zone=ComfortZoneSchema(
                horizontal=pattern.comfort_zone.horizontal,
                vertical=pattern.comfort_zone.vertical,
            ),
        ),
        heatmap=[list(row) for row in fp.heatmap],
        impact_center=fp.impact_center,
        swing_count=fp.swing_count,
        motor_profile=fingerprint_aggregator.classify_motor_profile(fp).value,
    )
