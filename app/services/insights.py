from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence

from app.core.config.scoring import get_scoring_value
from app.schemas.analysis import AIInsights, MatchData
from app.schemas.job import JobOffer
from app.schemas.profile import Language, UserProfile, WorkExperience

from .insights_llm import json_completion

logger = logging.getLogger(__name__)

STRATEGIC_ADVICE_FALLBACK = (
    "Review the skill gaps and consider how your experience demonstrates related capabilities."
)
SUMMARY_EXCELLENT = "This is an excellent match for your profile. Consider applying with confidence."
SUMMARY_GOOD = "Good alignment with some gaps. Highlight transferable skills in your application."
SUMMARY_GAPS = "Significant gaps exist. Consider if this role aligns with your career goals."

_LANGUAGE_LEVELS = {
    "native": "Native",
    "bilingual": "Bilingual",
    "professional": "Professional",
    "conversational": "Conversational",
    "basic": "Basic",
}

_SYSTEM_PROMPT = (
    "You are a career advisor. Be specific, concise and grounded in the data you are given. "
    "Return strict JSON only."
)


class InsightGenerator(Protocol):
    def __call__(self, job: JobOffer, profile: UserProfile, match_data: MatchData) -> AIInsights: ...


@dataclass(frozen=True)
class FallbackConfig:
    strong_skills_percent: int = 70
    moderate_skills_percent: int = 50
    excellent_overall_score: int = 80
    good_overall_score: int = 60
    max_listed_skills: int = 3

    @classmethod
    def from_scoring_config(cls) -> "FallbackConfig":
        return cls(
            strong_skills_percent=int(get_scoring_value("insights.fallback.strong_skills_percent", 70)),
            moderate_skills_percent=int(get_scoring_value("insights.fallback.moderate_skills_percent", 50)),
            excellent_overall_score=int(get_scoring_value("insights.fallback.excellent_overall_score", 80)),
            good_overall_score=int(get_scoring_value("insights.fallback.good_overall_score", 60)),
            max_listed_skills=int(get_scoring_value("insights.fallback.max_listed_skills", 3)),
        )


def parse_profile_date(value: str | None) -> datetime | None:
    """Parse dd-mm-yyyy, falling back to ISO dates."""
    if not value:
        return None
    text = value.strip()
    parts = text.split("-")
    try:
        if len(parts) == 3 and len(parts[0]) == 2:
            return datetime(int(parts[2]), int(parts[1]), int(parts[0]))
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def years_of_experience(work_experience: Sequence[WorkExperience], now: datetime | None = None) -> int:
    reference = now or datetime.now()
    starts = [parsed for parsed in (parse_profile_date(exp.start_date) for exp in work_experience) if parsed]
    if not starts:
        return 0
    earliest = min(starts)
    return max(0, int((reference - earliest).days // 365.25))


def format_languages(languages: Sequence[Language]) -> str:
    return ", ".join(
        f"{lang.language} ({_LANGUAGE_LEVELS.get(lang.proficiency, lang.proficiency)})"
        for lang in languages
    )


def _join(items: Sequence[str], empty: str) -> str:
    return ", ".join(items) if items else empty


def _salary_line(job: JobOffer) -> str:
    if job.salary_min is not None and job.salary_max is not None:
        return f"{job.salary_min:g} - {job.salary_max:g} {job.salary_currency or 'EUR'}"
    return "Not specified"


def _experience_block(work_experience: Sequence[WorkExperience]) -> str:
    if not work_experience:
        return "None specified"
    lines = []
    for exp in work_experience:
        end = exp.end_date or "Present"
        achievements = "; ".join(exp.achievements) if exp.achievements else "None listed"
        lines.append(f"- {exp.title} at {exp.company} ({exp.start_date} - {end})\n  Achievements: {achievements}")
    return "\n".join(lines)


def build_insights_prompt(job: JobOffer, profile: UserProfile, match_data: MatchData) -> str:
    current_title = profile.work_experience[0].title if profile.work_experience else "Not specified"
    education = profile.education[0] if profile.education else None
    blockers = ""
    if match_data.blocker_result.blocked:
        blockers = f"- BLOCKERS: {'; '.join(match_data.blocker_result.reasons)}\n"

    return (
        "You are analyzing a job opportunity for a candidate. Provide personalized insights based on the analysis below.\n\n"
        "## JOB INFORMATION\n"
        f"- Title: {job.title or 'Not specified'}\n"
        f"- Company: {job.company or 'Not specified'}\n"
        f"- Location: {job.location or 'Not specified'}\n"
        f"- Salary: {_salary_line(job)}\n"
        f"- Work Mode: {job.presence_type or 'Not specified'}\n"
        f"- Required Skills: {_join(job.required_skills, 'None specified')}\n"
        f"- Nice to Have: {_join(job.nice_to_have_skills, 'None specified')}\n"
        f"- Perks: {_join(job.perks, 'None specified')}\n\n"
        "## CANDIDATE PROFILE\n"
        f"- Current Title: {current_title or 'Not specified'}\n"
        f"- Years of Experience: {years_of_experience(profile.work_experience)}\n"
        f"- Skills: {_join([skill.name for skill in profile.skills], 'None specified')}\n"
        f"- Languages: {format_languages(profile.languages) or 'None specified'}\n"
        f"- Education: {(education.degree if education else '') or 'Not specified'} "
        f"in {(education.field if education else '') or 'Not specified'}\n\n"
        "## WORK EXPERIENCE\n"
        f"{_experience_block(profile.work_experience)}\n\n"
        "## MATCH ANALYSIS\n"
        f"- Skills Match: {match_data.skills_match_percent}%\n"
        f"- Matched Skills: {_join(match_data.matched_skills, 'None')}\n"
        f"- Missing Skills: {_join(match_data.missing_skills, 'None')}\n"
        f"- Perks Match: {match_data.perks_match_count} matched\n"
        f"- Overall Score: {match_data.overall_score}/100\n"
        f"{blockers}\n"
        "Return JSON with keys: strengths (array of strings), skillGaps (array of strings), "
        "strategicAdvice (2-3 sentences), cultureFit (1 sentence or null), growthPotential (1 sentence or null), "
        "redFlags (array of strings), matchSummary (1-2 sentences).\n\n"
        "Rules:\n"
        "- Reference actual skills and experience from the profile; do not invent information.\n"
        "- Keep each point to one sentence.\n"
        "- If there are blockers, acknowledge them in matchSummary.\n"
        "- The profile may be written in a different language than the job posting. Treat descriptions in any "
        "language as equivalent when they describe the same skill (e.g. \"encaissement\" = \"cash handling\").\n"
        "- Treat work experience achievements as direct evidence of skills, even when the skill is not listed."
    )


def generate_ai_insights(job: JobOffer, profile: UserProfile, match_data: MatchData) -> AIInsights:
    """Ask the LLM for insights; raises UpstreamInsightError when it cannot answer."""
    prompt = build_insights_prompt(job, profile, match_data)
    logger.debug("job_insights_request job_id=%s prompt_len=%s", job.id, len(prompt))
    payload = json_completion(prompt=prompt, system_prompt=_SYSTEM_PROMPT)
    insights = AIInsights.from_payload(payload)
    if not insights.match_summary:
        logger.warning("job_insights_empty_summary job_id=%s keys=%s", job.id, sorted(payload))
    return insights


def generate_fallback_insights(match_data: MatchData, config: FallbackConfig | None = None) -> AIInsights:
    cfg = config or FallbackConfig()
    strengths: list[str] = []
    percent = match_data.skills_match_percent
    if percent >= cfg.strong_skills_percent:
        strengths.append(f"Strong skills alignment at {percent}%")
    elif percent >= cfg.moderate_skills_percent:
        strengths.append(f"Moderate skills alignment at {percent}%")

    if match_data.matched_skills:
        strengths.append(
            f"Key matching skills: {', '.join(match_data.matched_skills[: cfg.max_listed_skills])}"
        )

    skill_gaps = [f"Missing: {skill}" for skill in match_data.missing_skills[: cfg.max_listed_skills]]

    red_flags: list[str] = []
    if match_data.blocker_result.blocked:
        red_flags.extend(match_data.blocker_result.reasons)

    if match_data.overall_score >= cfg.excellent_overall_score:
        summary = SUMMARY_EXCELLENT
    elif match_data.overall_score >= cfg.good_overall_score:
        summary = SUMMARY_GOOD
    else:
        summary = SUMMARY_GAPS

    return AIInsights(
        strengths=strengths,
        skill_gaps=skill_gaps,
        strategic_advice=STRATEGIC_ADVICE_FALLBACK,
        culture_fit=None,
        growth_potential=None,
        red_flags=red_flags,
        match_summary=summary,
    )
