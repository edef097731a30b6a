"""Job analysis pipeline.

Runs the deterministic matching and scoring steps in a fixed order, then asks
an insight generator for the narrative part of the result. The LLM-backed
generator is the default; whenever it fails the deterministic fallback fills
in, so a valid input always produces a complete result.
"""

from __future__ import annotations

import logging
import time
import uuid

from app.analytics.db import log_analysis_run
from app.matching import (
    MatchingConfig,
    SubstringSkillMatcher,
    calculate_perks_match,
    calculate_skills_match,
    combined_job_skills,
)
from app.schemas.analysis import InsightsSource, JobAnalysisResult, MatchData
from app.schemas.job import JobOffer, JobPreferences
from app.schemas.profile import UserProfile
from app.scoring import (
    ScoreWeights,
    ScoringConfig,
    apply_hard_blockers,
    calculate_overall_score,
    salary_adequacy,
)

from .insights import (
    FallbackConfig,
    InsightGenerator,
    generate_ai_insights,
    generate_fallback_insights,
)
from .insights_llm import model_name

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a required top-level input is missing."""


def build_match_data(
    job: JobOffer,
    preferences: JobPreferences,
    profile: UserProfile,
    *,
    matching_config: MatchingConfig | None = None,
    scoring_config: ScoringConfig | None = None,
) -> MatchData:
    blocker_result = apply_hard_blockers(job, preferences)
    skills = calculate_skills_match(
        combined_job_skills(job),
        profile,
        matcher=SubstringSkillMatcher(matching_config),
    )
    perks_count = calculate_perks_match(job.perks, preferences.preferred_perks)
    has_salary_info, meets_min_salary = salary_adequacy(job, preferences)
    overall_score = calculate_overall_score(
        skills.match_percent,
        perks_count,
        len(preferences.preferred_perks),
        has_salary_info,
        meets_min_salary,
        ScoreWeights.from_preferences(preferences),
        scoring_config,
    )
    return MatchData(
        skills_match_percent=skills.match_percent,
        matched_skills=skills.matched_skills,
        missing_skills=skills.missing_skills,
        perks_match_count=perks_count,
        overall_score=overall_score,
        blocker_result=blocker_result,
    )


def analyze_job(
    job: JobOffer | None,
    preferences: JobPreferences | None,
    profile: UserProfile | None,
    insight_generator: InsightGenerator | None = None,
    matching_config: MatchingConfig | None = None,
    scoring_config: ScoringConfig | None = None,
    fallback_config: FallbackConfig | None = None,
) -> JobAnalysisResult:
    if job is None:
        raise ValidationError("Job offer is required.")
    if preferences is None:
        raise ValidationError("Job preferences are required.")
    if profile is None:
        raise ValidationError("User profile is required.")

    started = time.perf_counter()
    match_data = build_match_data(
        job,
        preferences,
        profile,
        matching_config=matching_config,
        scoring_config=scoring_config,
    )

    generator = insight_generator or generate_ai_insights
    source: InsightsSource = "ai"
    try:
        insights = generator(job, profile, match_data)
    except Exception as exc:  # noqa: BLE001 - any insight failure degrades to the fallback
        logger.warning(
            "job_insights_fallback job_id=%s error=%s: %s",
            job.id,
            getattr(exc, "code", type(exc).__name__),
            exc,
        )
        insights = generate_fallback_insights(match_data, fallback_config)
        source = "fallback"

    result = JobAnalysisResult(
        is_blocked=match_data.blocker_result.blocked,
        block_reasons=list(match_data.blocker_result.reasons),
        skills_match_percent=match_data.skills_match_percent,
        perks_match_count=match_data.perks_match_count,
        overall_score=match_data.overall_score,
        ai_insights=insights,
        matched_skills=list(match_data.matched_skills),
        missing_skills=list(match_data.missing_skills),
        insights_source=source,
    )

    latency_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "job_analyzed job_id=%s score=%s blocked=%s source=%s latency_ms=%s",
        job.id,
        result.overall_score,
        result.is_blocked,
        source,
        latency_ms,
    )
    try:
        log_analysis_run(
            run_id=uuid.uuid4().hex,
            job_title=job.title,
            company=job.company,
            overall_score=result.overall_score,
            blocked=result.is_blocked,
            insights_source=source,
            model=model_name() if source == "ai" else None,
            latency_ms=latency_ms,
        )
    except Exception as exc:  # noqa: BLE001 - analytics must not fail the analysis
        logger.warning("analysis_run_log_failed job_id=%s: %s", job.id, exc)

    return result
