from __future__ import annotations

from app.schemas.analysis import ScoreInterpretation

from .overall import ScoringConfig

BAND_ORDER: tuple[str, ...] = ("poor", "moderate", "good", "excellent")

_EXCELLENT = ScoreInterpretation(
    band="excellent",
    label="Excellent match",
    description="This job is a great fit for your profile",
    color="green",
)
_GOOD = ScoreInterpretation(
    band="good",
    label="Good match",
    description="Strong alignment with your skills and preferences",
    color="blue",
)
_MODERATE = ScoreInterpretation(
    band="moderate",
    label="Moderate match",
    description="Some alignment, but there are gaps to consider",
    color="yellow",
)
_POOR = ScoreInterpretation(
    band="poor",
    label="Poor match",
    description="Significant gaps between this job and your profile",
    color="red",
)


def interpret_score(score: float, config: ScoringConfig | None = None) -> ScoreInterpretation:
    cfg = config or ScoringConfig()
    if score >= cfg.excellent_threshold:
        return _EXCELLENT
    if score >= cfg.good_threshold:
        return _GOOD
    if score >= cfg.moderate_threshold:
        return _MODERATE
    return _POOR


def band_rank(interpretation: ScoreInterpretation) -> int:
    return BAND_ORDER.index(interpretation.band)
