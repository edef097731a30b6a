from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.services.job_ranking import JobOfferFilters, RankedJob

from .job import JobOffer, JobPreferences
from .profile import UserProfile

FeedbackType = Literal["helpful", "not_helpful", "wrong_score", "good_match", "bad_match"]
UserAction = Literal["saved", "applied", "dismissed", "ignored"]


class AnalyzeJobRequest(BaseModel):
    # Optional here so a missing part reaches the orchestrator's own validation.
    job_offer: JobOffer | None = None
    preferences: JobPreferences | None = None
    user_profile: UserProfile | None = None


class SkillsMatchRequest(BaseModel):
    required_skills: list[str] = Field(default_factory=list)
    user_profile: UserProfile = Field(default_factory=UserProfile)


class SkillsMatchResponse(BaseModel):
    match_percent: int
    matched_skills: list[str]
    missing_skills: list[str]
    critical_gaps: list[str] = Field(default_factory=list)
    recommended_gaps: list[str] = Field(default_factory=list)


class BlockersRequest(BaseModel):
    job_offer: JobOffer
    preferences: JobPreferences


class RecalculateRequest(BaseModel):
    base_score: int = Field(ge=0, le=100)
    red_flags: list[str] = Field(default_factory=list)
    dismissed_flags: list[str] = Field(default_factory=list)
    salary_below_min: bool = False


class RecalculateResponse(BaseModel):
    overall_score: int


class RankRequest(BaseModel):
    jobs: list[RankedJob] = Field(default_factory=list, max_length=500)
    filters: JobOfferFilters = Field(default_factory=JobOfferFilters)


class FeedbackRequest(BaseModel):
    job_id: str = Field(min_length=1, max_length=128)
    feedback_type: FeedbackType
    user_action: UserAction | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("notes")
    @classmethod
    def _strip_notes(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None
