from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

PresenceType = Literal["full_remote", "hybrid", "on_site"]
RemotePreference = Literal["full_remote", "hybrid", "on_site", "any"]
SalaryRateType = Literal["annual", "monthly", "hourly", "daily"]

COMMON_PERKS: tuple[str, ...] = (
    "meal_vouchers",
    "health_insurance",
    "dental_insurance",
    "gym_membership",
    "remote_budget",
    "training_budget",
    "stock_options",
    "bonus",
    "flexible_hours",
    "unlimited_pto",
    "parental_leave",
    "commute_allowance",
    "company_car",
    "phone_allowance",
    "retirement_plan",
)

PERK_LABELS: dict[str, str] = {
    "meal_vouchers": "Meal Vouchers",
    "health_insurance": "Health Insurance",
    "dental_insurance": "Dental Insurance",
    "gym_membership": "Gym Membership",
    "remote_budget": "Remote Work Budget",
    "training_budget": "Training Budget",
    "stock_options": "Stock Options",
    "bonus": "Performance Bonus",
    "flexible_hours": "Flexible Hours",
    "unlimited_pto": "Unlimited PTO",
    "parental_leave": "Parental Leave",
    "commute_allowance": "Commute Allowance",
    "company_car": "Company Car",
    "phone_allowance": "Phone Allowance",
    "retirement_plan": "Retirement Plan",
}

PRESENCE_LABELS: dict[str, str] = {
    "full_remote": "Full Remote",
    "hybrid": "Hybrid",
    "on_site": "On-site",
    "any": "Any",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobOffer(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = ""
    company: str = ""
    location: str | None = None
    country: str | None = None
    city: str | None = None

    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    salary_rate_type: SalaryRateType | None = None

    hours_per_week: float | None = None
    presence_type: PresenceType | None = None
    contract_type: str | None = None

    description: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)
    perks: list[str] = Field(default_factory=list)

    source_url: str | None = None
    created_at: datetime = Field(default_factory=_utc_now)


class JobPreferences(BaseModel):
    allowed_countries: list[str] = Field(default_factory=list)
    allowed_cities: list[str] = Field(default_factory=list)

    min_salary: float | None = None
    salary_currency: str = "EUR"
    min_hourly_rate: float | None = None
    min_daily_rate: float | None = None

    min_hours_per_week: float | None = 35
    max_hours_per_week: float | None = 45

    remote_preference: RemotePreference = "any"
    preferred_perks: list[str] = Field(default_factory=list)

    weight_salary: float = Field(default=30, ge=0, le=100)
    weight_skills: float = Field(default=50, ge=0, le=100)
    weight_perks: float = Field(default=20, ge=0, le=100)

    min_skills_match_percent: float = Field(default=65, ge=0, le=100)
