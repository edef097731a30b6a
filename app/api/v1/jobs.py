from fastapi import APIRouter, HTTPException, Query, Request, status

from app.analytics import db as analytics_db
from app.core.rate_limit import rate_limit
from app.core.config import settings
from app.matching import MatchingConfig, SubstringSkillMatcher, calculate_skills_match, identify_skill_gaps
from app.schemas.analysis import BlockerResult, JobAnalysisResult, ScoreInterpretation
from app.schemas.requests import (
    AnalyzeJobRequest,
    BlockersRequest,
    FeedbackRequest,
    RankRequest,
    RecalculateRequest,
    RecalculateResponse,
    SkillsMatchRequest,
    SkillsMatchResponse,
)
from app.scoring import ScoringConfig, apply_hard_blockers, interpret_score, recalculate_with_dismissals
from app.services.insights import FallbackConfig
from app.services.job_analysis import ValidationError, analyze_job
from app.services.job_ranking import RankedJob, filter_and_rank

router = APIRouter()


@router.post("/jobs/analyze", response_model=JobAnalysisResult)
@rate_limit(settings.analyze_rate_limit)
def jobs_analyze(request: Request, payload: AnalyzeJobRequest):
    _ = request
    try:
        return analyze_job(
            payload.job_offer,
            payload.preferences,
            payload.user_profile,
            matching_config=MatchingConfig.from_scoring_config(),
            scoring_config=ScoringConfig.from_scoring_config(),
            fallback_config=FallbackConfig.from_scoring_config(),
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/jobs/skills-match", response_model=SkillsMatchResponse)
@rate_limit()
def jobs_skills_match(request: Request, payload: SkillsMatchRequest):
    _ = request
    config = MatchingConfig.from_scoring_config()
    match = calculate_skills_match(
        payload.required_skills,
        payload.user_profile,
        matcher=SubstringSkillMatcher(config),
    )
    gaps = identify_skill_gaps(payload.required_skills, payload.user_profile.skills, config)
    return SkillsMatchResponse(
        match_percent=match.match_percent,
        matched_skills=match.matched_skills,
        missing_skills=match.missing_skills,
        critical_gaps=gaps.critical,
        recommended_gaps=gaps.recommended,
    )


@router.post("/jobs/blockers", response_model=BlockerResult)
@rate_limit()
def jobs_blockers(request: Request, payload: BlockersRequest):
    _ = request
    return apply_hard_blockers(payload.job_offer, payload.preferences)


@router.get("/jobs/score-band", response_model=ScoreInterpretation)
def jobs_score_band(score: float = Query(ge=0, le=100)):
    return interpret_score(score, ScoringConfig.from_scoring_config())


@router.post("/jobs/recalculate", response_model=RecalculateResponse)
def jobs_recalculate(payload: RecalculateRequest):
    score = recalculate_with_dismissals(
        payload.base_score,
        payload.red_flags,
        payload.dismissed_flags,
        payload.salary_below_min,
        ScoringConfig.from_scoring_config(),
    )
    return RecalculateResponse(overall_score=score)


@router.post("/jobs/rank", response_model=list[RankedJob])
def jobs_rank(payload: RankRequest):
    return filter_and_rank(payload.jobs, payload.filters)


@router.post("/jobs/feedback", status_code=status.HTTP_202_ACCEPTED)
@rate_limit()
def jobs_feedback(request: Request, payload: FeedbackRequest):
    _ = request
    analytics_db.log_feedback(
        job_id=payload.job_id,
        feedback_type=payload.feedback_type,
        user_action=payload.user_action,
        notes=payload.notes,
    )
    return {"status": "accepted"}
