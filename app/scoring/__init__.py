from .blockers import apply_hard_blockers
from .interpret import band_rank, interpret_score
from .overall import (
    ScoreWeights,
    ScoringConfig,
    calculate_overall_score,
    recalculate_with_dismissals,
    salary_adequacy,
)

__all__ = [
    "ScoreWeights",
    "ScoringConfig",
    "apply_hard_blockers",
    "band_rank",
    "calculate_overall_score",
    "interpret_score",
    "recalculate_with_dismissals",
    "salary_adequacy",
]
