from .aggregator import (
    SkillGaps,
    SkillMatchResult,
    calculate_skills_match,
    combined_job_skills,
    identify_skill_gaps,
)
from .perks import calculate_perks_match
from .skill_core import (
    MatchingConfig,
    ProfileTexts,
    SkillMatcher,
    SubstringSkillMatcher,
    build_profile_texts,
    is_skill_fragment_matched,
    is_skill_matched,
    normalize_skill_text,
    split_compound_skill,
)

__all__ = [
    "MatchingConfig",
    "ProfileTexts",
    "SkillGaps",
    "SkillMatchResult",
    "SkillMatcher",
    "SubstringSkillMatcher",
    "build_profile_texts",
    "calculate_perks_match",
    "calculate_skills_match",
    "combined_job_skills",
    "identify_skill_gaps",
    "is_skill_fragment_matched",
    "is_skill_matched",
    "normalize_skill_text",
    "split_compound_skill",
]
