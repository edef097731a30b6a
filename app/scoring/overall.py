from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from app.core.config.scoring import get_scoring_value
from app.core.numbers import clamp, round_half_up
from app.schemas.job import JobOffer, JobPreferences

logger = logging.getLogger(__name__)

_SALARY_MARKERS = ("salary", "salaire", "income", "rémunération", "reduction")
_SKILL_MARKERS = ("skill", "compétence", "gap", "experience", "expérience")
_CAREER_MARKERS = ("career", "carrière", "change", "transition")


@dataclass(frozen=True)
class ScoreWeights:
    salary: float
    skills: float
    perks: float

    @classmethod
    def from_preferences(cls, prefs: JobPreferences) -> "ScoreWeights":
        return cls(salary=prefs.weight_salary, skills=prefs.weight_skills, perks=prefs.weight_perks)

    def normalized(self) -> "ScoreWeights":
        total = self.salary + self.skills + self.perks
        if total <= 0:
            logger.debug("score_weights_zero_sum falling back to equal thirds")
            third = 1 / 3
            return ScoreWeights(salary=third, skills=third, perks=third)
        return ScoreWeights(
            salary=self.salary / total,
            skills=self.skills / total,
            perks=self.perks / total,
        )


@dataclass(frozen=True)
class ScoringConfig:
    unknown_salary_sub_score: float = 50
    meets_minimum_sub_score: float = 100
    below_minimum_sub_score: float = 0
    excellent_threshold: int = 85
    good_threshold: int = 70
    moderate_threshold: int = 55
    dismissal_salary_bonus: int = 15
    dismissal_skill_bonus: int = 5
    dismissal_career_bonus: int = 5
    dismissal_other_bonus: int = 3
    max_score: int = 100

    @classmethod
    def from_scoring_config(cls) -> "ScoringConfig":
        return cls(
            unknown_salary_sub_score=float(get_scoring_value("scoring.salary.unknown_sub_score", 50)),
            meets_minimum_sub_score=float(get_scoring_value("scoring.salary.meets_minimum_sub_score", 100)),
            below_minimum_sub_score=float(get_scoring_value("scoring.salary.below_minimum_sub_score", 0)),
            excellent_threshold=int(get_scoring_value("scoring.bands.excellent", 85)),
            good_threshold=int(get_scoring_value("scoring.bands.good", 70)),
            moderate_threshold=int(get_scoring_value("scoring.bands.moderate", 55)),
            dismissal_salary_bonus=int(get_scoring_value("dismissals.salary_bonus", 15)),
            dismissal_skill_bonus=int(get_scoring_value("dismissals.skill_gap_bonus", 5)),
            dismissal_career_bonus=int(get_scoring_value("dismissals.career_change_bonus", 5)),
            dismissal_other_bonus=int(get_scoring_value("dismissals.other_bonus", 3)),
            max_score=int(get_scoring_value("dismissals.max_score", 100)),
        )


def salary_adequacy(job: JobOffer, prefs: JobPreferences) -> tuple[bool, bool]:
    """Return (has_salary_info, meets_min_salary) for the overall score.

    The offer is compared with the floor for its pay basis: hourly and daily
    offers with the matching rate floor, annual and monthly offers with the
    annual floor (monthly figures annualized). No floor set means the minimum
    is met. The top of the range is used, or the bottom when only that is known.
    """
    has_salary_info = job.salary_min is not None or job.salary_max is not None
    amount = job.salary_max if job.salary_max is not None else job.salary_min
    rate_type = job.salary_rate_type or "annual"

    if rate_type == "hourly":
        floor = prefs.min_hourly_rate
    elif rate_type == "daily":
        floor = prefs.min_daily_rate
    else:
        floor = prefs.min_salary
        if amount is not None and rate_type == "monthly":
            amount = amount * 12

    if not floor:
        return has_salary_info, True
    return has_salary_info, amount is not None and amount >= floor


def salary_sub_score(has_salary_info: bool, meets_min_salary: bool, config: ScoringConfig | None = None) -> float:
    cfg = config or ScoringConfig()
    if not has_salary_info:
        return cfg.unknown_salary_sub_score
    return cfg.meets_minimum_sub_score if meets_min_salary else cfg.below_minimum_sub_score


def perks_sub_score(perks_match_count: int, total_preferred_perks: int) -> float:
    return min(100.0, perks_match_count / max(total_preferred_perks, 1) * 100)


def calculate_overall_score(
    skills_match_percent: float,
    perks_match_count: int,
    total_preferred_perks: int,
    has_salary_info: bool,
    meets_min_salary: bool,
    weights: ScoreWeights,
    config: ScoringConfig | None = None,
) -> int:
    normalized = weights.normalized()
    score = (
        normalized.salary * salary_sub_score(has_salary_info, meets_min_salary, config)
        + normalized.skills * clamp(skills_match_percent, 0, 100)
        + normalized.perks * perks_sub_score(perks_match_count, total_preferred_perks)
    )
    return int(clamp(round_half_up(score), 0, 100))


def recalculate_with_dismissals(
    base_score: int,
    red_flags: Sequence[str],
    dismissed_flags: Sequence[str],
    salary_below_min: bool,
    config: ScoringConfig | None = None,
) -> int:
    """Raise a stored score after the user dismisses red flags they accept.

    Dismissed flags that are no longer among the red flags are ignored.
    """
    cfg = config or ScoringConfig()
    active = set(red_flags)
    bonus = 0
    for flag in dismissed_flags:
        if flag not in active:
            continue
        lower = flag.lower()
        if any(marker in lower for marker in _SALARY_MARKERS):
            if salary_below_min:
                bonus += cfg.dismissal_salary_bonus
        elif any(marker in lower for marker in _SKILL_MARKERS):
            bonus += cfg.dismissal_skill_bonus
        elif any(marker in lower for marker in _CAREER_MARKERS):
            bonus += cfg.dismissal_career_bonus
        else:
            bonus += cfg.dismissal_other_bonus
    return min(cfg.max_score, base_score + bonus)
