"""Hard disqualification rules for a job/preferences pair.

Every rule is evaluated so the user sees all reasons at once. A rule only
fires on an explicit contradicting value: unknown job data never blocks, and
an empty allow-list means "no restriction".
"""

from __future__ import annotations

from typing import Sequence

from app.schemas.analysis import BlockerResult
from app.schemas.job import PRESENCE_LABELS, JobOffer, JobPreferences

_DEFAULT_CURRENCY = "EUR"


def format_amount(amount: float, currency: str | None) -> str:
    return f"{amount:,.0f} {currency or _DEFAULT_CURRENCY}"


def _format_hours(hours: float) -> str:
    return f"{hours:g}h"


def _salary_reason(job: JobOffer, prefs: JobPreferences) -> str | None:
    if job.salary_max is None:
        return None

    offered = format_amount(job.salary_max, job.salary_currency)
    rate_type = job.salary_rate_type or "annual"

    if rate_type == "hourly":
        if prefs.min_hourly_rate and job.salary_max < prefs.min_hourly_rate:
            required = format_amount(prefs.min_hourly_rate, prefs.salary_currency)
            return f"Hourly rate below minimum (max offered: {offered}/h, min required: {required}/h)"
        return None

    if rate_type == "daily":
        if prefs.min_daily_rate and job.salary_max < prefs.min_daily_rate:
            required = format_amount(prefs.min_daily_rate, prefs.salary_currency)
            return f"Daily rate below minimum (max offered: {offered}/day, min required: {required}/day)"
        return None

    if not prefs.min_salary:
        return None
    required = format_amount(prefs.min_salary, prefs.salary_currency)

    if rate_type == "monthly":
        annualized = job.salary_max * 12
        if annualized < prefs.min_salary:
            yearly = format_amount(annualized, job.salary_currency)
            return (
                f"Monthly salary below minimum (offered: {offered}/month = {yearly}/year, "
                f"min required: {required}/year)"
            )
        return None

    if job.salary_max < prefs.min_salary:
        return f"Salary below minimum (max offered: {offered}, min required: {required})"
    return None


def _matches_allowed(value: str, allowed: Sequence[str]) -> bool:
    needle = value.strip().lower()
    for entry in allowed:
        candidate = entry.strip().lower()
        if not candidate:
            continue
        if candidate in needle or needle in candidate:
            return True
    return False


def _location_reasons(job: JobOffer, prefs: JobPreferences) -> list[str]:
    reasons: list[str] = []
    if prefs.allowed_countries and job.country and job.country.strip():
        if not _matches_allowed(job.country, prefs.allowed_countries):
            reasons.append(f'Country "{job.country}" not in allowed countries')
    if prefs.allowed_cities and job.city and job.city.strip():
        if not _matches_allowed(job.city, prefs.allowed_cities):
            reasons.append(f'Location "{job.city}" not in allowed cities')
    return reasons


def _remote_reason(job: JobOffer, prefs: JobPreferences) -> str | None:
    if prefs.remote_preference == "any" or job.presence_type is None:
        return None
    if prefs.remote_preference == job.presence_type:
        return None
    return (
        f"Work mode mismatch (job: {PRESENCE_LABELS[job.presence_type]}, "
        f"wanted: {PRESENCE_LABELS[prefs.remote_preference]})"
    )


def _hours_reasons(job: JobOffer, prefs: JobPreferences) -> list[str]:
    hours = job.hours_per_week
    if not hours:
        return []
    reasons: list[str] = []
    if prefs.min_hours_per_week is not None and hours < prefs.min_hours_per_week:
        reasons.append(
            f"Hours below minimum ({_format_hours(hours)} < {_format_hours(prefs.min_hours_per_week)})"
        )
    if prefs.max_hours_per_week is not None and hours > prefs.max_hours_per_week:
        reasons.append(
            f"Hours above maximum ({_format_hours(hours)} > {_format_hours(prefs.max_hours_per_week)})"
        )
    return reasons


def apply_hard_blockers(job: JobOffer, prefs: JobPreferences) -> BlockerResult:
    reasons: list[str] = []

    salary = _salary_reason(job, prefs)
    if salary:
        reasons.append(salary)

    reasons.extend(_location_reasons(job, prefs))

    remote = _remote_reason(job, prefs)
    if remote:
        reasons.append(remote)

    reasons.extend(_hours_reasons(job, prefs))

    return BlockerResult(blocked=bool(reasons), reasons=reasons)
