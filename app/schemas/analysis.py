from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

ScoreBand = Literal["excellent", "good", "moderate", "poor"]
InsightsSource = Literal["ai", "fallback"]

_INSIGHT_LIST_FIELDS = {
    "strengths": ("strengths",),
    "skill_gaps": ("skill_gaps", "skillGaps"),
    "red_flags": ("red_flags", "redFlags"),
}
_INSIGHT_TEXT_FIELDS = {
    "strategic_advice": ("strategic_advice", "strategicAdvice"),
    "match_summary": ("match_summary", "matchSummary"),
}
_INSIGHT_OPTIONAL_TEXT_FIELDS = {
    "culture_fit": ("culture_fit", "cultureFit"),
    "growth_potential": ("growth_potential", "growthPotential"),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _first_present(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


class BlockerResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    blocked: bool = False
    reasons: list[str] = Field(default_factory=list)


class MatchData(BaseModel):
    model_config = ConfigDict(frozen=True)

    skills_match_percent: int
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    perks_match_count: int = 0
    overall_score: int
    blocker_result: BlockerResult = Field(default_factory=BlockerResult)


class AIInsights(BaseModel):
    """Insight summary for one analyzed job.

    Built either from the LLM response or by the deterministic fallback. The
    before-validator coerces whatever the model sent back into the documented
    shape, so parsing an upstream payload never fails on shape mismatch.
    """

    strengths: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("skill_gaps", "skillGaps")
    )
    strategic_advice: str = Field(
        default="", validation_alias=AliasChoices("strategic_advice", "strategicAdvice")
    )
    culture_fit: str | None = Field(
        default=None, validation_alias=AliasChoices("culture_fit", "cultureFit")
    )
    growth_potential: str | None = Field(
        default=None, validation_alias=AliasChoices("growth_potential", "growthPotential")
    )
    red_flags: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("red_flags", "redFlags")
    )
    match_summary: str = Field(
        default="", validation_alias=AliasChoices("match_summary", "matchSummary")
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_upstream_shape(cls, raw: Any) -> Any:
        if isinstance(raw, BaseModel):
            return raw
        if not isinstance(raw, dict):
            return {}

        coerced: dict[str, Any] = {}
        for name, keys in _INSIGHT_LIST_FIELDS.items():
            value = _first_present(raw, keys)
            if isinstance(value, list):
                coerced[name] = [item.strip() for item in value if isinstance(item, str) and item.strip()]
            else:
                coerced[name] = []
        for name, keys in _INSIGHT_TEXT_FIELDS.items():
            value = _first_present(raw, keys)
            coerced[name] = value.strip() if isinstance(value, str) else ""
        for name, keys in _INSIGHT_OPTIONAL_TEXT_FIELDS.items():
            value = _first_present(raw, keys)
            coerced[name] = value.strip() if isinstance(value, str) and value.strip() else None
        return coerced

    @classmethod
    def from_payload(cls, raw: Any) -> "AIInsights":
        return cls.model_validate(raw)


class JobAnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_blocked: bool
    block_reasons: list[str] = Field(default_factory=list)
    skills_match_percent: int
    perks_match_count: int
    overall_score: int
    ai_insights: AIInsights
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    insights_source: InsightsSource = "ai"
    generated_at: datetime = Field(default_factory=_utc_now)


class ScoreInterpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    band: ScoreBand
    label: str
    description: str
    color: str
