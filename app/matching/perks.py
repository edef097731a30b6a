from __future__ import annotations

from typing import Iterable


def calculate_perks_match(job_perks: Iterable[str], preferred_perks: Iterable[str]) -> int:
    """Count perks both offered and preferred.

    Perk identifiers come from a closed vocabulary, so the comparison is an
    exact, case-sensitive set intersection.
    """
    return len(set(job_perks) & set(preferred_perks))
