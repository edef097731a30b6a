from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, Field

from app.schemas.analysis import JobAnalysisResult
from app.schemas.job import JobOffer


class JobOfferFilters(BaseModel):
    min_score: int | None = Field(default=None, ge=0, le=100)
    is_blocked: bool | None = None
    search: str | None = None
    sort_by: Literal["score", "date", "company"] = "date"
    sort_order: Literal["asc", "desc"] = "desc"


class RankedJob(BaseModel):
    job_offer: JobOffer
    result: JobAnalysisResult | None = None


def _passes(entry: RankedJob, filters: JobOfferFilters) -> bool:
    result = entry.result
    if filters.min_score is not None:
        if result is None or result.overall_score < filters.min_score:
            return False
    if filters.is_blocked is not None:
        if result is None or result.is_blocked != filters.is_blocked:
            return False
    if filters.search:
        needle = filters.search.strip().lower()
        haystack = f"{entry.job_offer.title} {entry.job_offer.company}".lower()
        if needle and needle not in haystack:
            return False
    return True


def filter_and_rank(entries: Sequence[RankedJob], filters: JobOfferFilters | None = None) -> list[RankedJob]:
    """Filter analyzed jobs and sort them for display.

    Entries without an analysis result never pass a score or blocked filter,
    and always sort after scored entries when sorting by score.
    """
    active = filters or JobOfferFilters()
    kept = [entry for entry in entries if _passes(entry, active)]
    reverse = active.sort_order == "desc"

    if active.sort_by == "score":
        scored = [entry for entry in kept if entry.result is not None]
        unscored = [entry for entry in kept if entry.result is None]
        scored.sort(key=lambda entry: entry.result.overall_score, reverse=reverse)
        return scored + unscored
    if active.sort_by == "company":
        return sorted(kept, key=lambda entry: entry.job_offer.company.lower(), reverse=reverse)
    return sorted(kept, key=lambda entry: entry.job_offer.created_at, reverse=reverse)
