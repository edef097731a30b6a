from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from app.core.numbers import round_half_up
from app.schemas.job import JobOffer
from app.schemas.profile import Skill, UserProfile

from .skill_core import (
    MatchingConfig,
    SkillMatcher,
    SubstringSkillMatcher,
    build_profile_texts,
    normalize_skill_text,
)


@dataclass(frozen=True)
class SkillMatchResult:
    match_percent: int
    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SkillGaps:
    critical: list[str] = field(default_factory=list)
    recommended: list[str] = field(default_factory=list)


def combined_job_skills(job: JobOffer) -> list[str]:
    """Required skills followed by nice-to-have skills.

    Duplicates are kept on purpose: a skill listed in both sections is
    evaluated twice, which weights it higher in the match percentage.
    """
    return [*job.required_skills, *job.nice_to_have_skills]


def calculate_skills_match(
    job_skills: Sequence[str],
    profile: UserProfile,
    matcher: SkillMatcher | None = None,
) -> SkillMatchResult:
    if not job_skills:
        # No explicit requirements counts as a perfect match.
        return SkillMatchResult(match_percent=100)

    active_matcher = matcher or SubstringSkillMatcher()
    profile_texts = build_profile_texts(profile.skills, profile.work_experience)

    matched: list[str] = []
    missing: list[str] = []
    for skill in job_skills:
        if active_matcher.is_match(skill, profile_texts):
            matched.append(skill)
        else:
            missing.append(skill)

    return SkillMatchResult(
        match_percent=round_half_up(len(matched) / len(job_skills) * 100),
        matched_skills=matched,
        missing_skills=missing,
    )


def identify_skill_gaps(
    required_skills: Sequence[str],
    user_skills: Sequence[Skill],
    config: MatchingConfig | None = None,
) -> SkillGaps:
    """Split unmatched required skills into critical and recommended gaps.

    Only the explicit skill list is consulted here, not work experience.
    """
    cfg = config or MatchingConfig()
    names = [name for name in (normalize_skill_text(skill.name) for skill in user_skills) if name]

    missing: list[str] = []
    for skill in required_skills:
        normalized = normalize_skill_text(skill)
        if not normalized:
            continue
        if not any(name in normalized or normalized in name for name in names):
            missing.append(skill)

    limit = max(0, cfg.critical_skill_gaps_limit)
    return SkillGaps(critical=missing[:limit], recommended=missing[limit:])
