from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, Field

SkillCategory = Literal["technical", "soft", "language", "tool"]
SkillProficiency = Literal["beginner", "intermediate", "advanced", "expert"]
LanguageProficiency = Literal["basic", "conversational", "professional", "native", "bilingual"]


def _new_id() -> str:
    return uuid.uuid4().hex


class Skill(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    category: SkillCategory = "technical"
    proficiency: SkillProficiency | None = None


class WorkExperience(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str = ""
    company: str = ""
    location: str | None = None
    # dd-mm-yyyy, e.g. "01-09-2020"
    start_date: str = ""
    end_date: str | None = None
    current: bool = False
    achievements: list[str] = Field(default_factory=list)


class Language(BaseModel):
    id: str = Field(default_factory=_new_id)
    language: str
    proficiency: LanguageProficiency = "professional"


class Education(BaseModel):
    id: str = Field(default_factory=_new_id)
    degree: str = ""
    institution: str = ""
    field: str = ""
    start_year: int | None = None
    end_year: int | None = None
    current: bool = False


class UserProfile(BaseModel):
    id: str = Field(default_factory=_new_id)
    full_name: str = ""
    city: str | None = None
    country: str | None = None
    professional_summary: str | None = None
    skills: list[Skill] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
