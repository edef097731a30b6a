"""Fuzzy matching of one free-text job skill against a structured profile.

Job postings describe skills as prose ("cash handling and cocktail
preparation") while profiles list atomic names, so a skill is split into
fragments and each fragment is looked up with bidirectional substring
containment, then with a small table of cross-language equivalences.
Work-experience titles and achievement bullets count as skill evidence.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from app.core.config.scoring import get_scoring_value
from app.schemas.profile import Skill, WorkExperience

_SPLIT_PATTERN = re.compile(r"[/&,;]|\s+(?:and|et)\s+", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s+")

_RAW_EQUIVALENCES: dict[str, tuple[str, ...]] = {
    # Tech
    "javascript": ("js", "ecmascript", "es6", "es2015"),
    "typescript": ("ts",),
    "react": ("reactjs", "react.js"),
    "vue": ("vuejs", "vue.js"),
    "angular": ("angularjs", "angular.js"),
    "node": ("nodejs", "node.js"),
    "python": ("py",),
    "postgres": ("postgresql", "psql"),
    "mongo": ("mongodb",),
    "aws": ("amazon web services",),
    "gcp": ("google cloud", "google cloud platform"),
    "azure": ("microsoft azure",),
    "docker": ("containerization",),
    "kubernetes": ("k8s",),
    "ci": ("continuous integration",),
    "cd": ("continuous deployment", "continuous delivery"),
    "agile": ("scrum", "kanban"),
    "sql": ("mysql", "postgresql", "sqlite"),
    # Hospitality / service, FR <-> EN
    "barman": ("bartender", "mixologue", "mixologist", "bar service", "service au bar", "service de bar"),
    "serveur": ("server", "waiter", "waitress", "service en salle", "table service"),
    "caisse": ("cashier", "encaissement", "cash handling", "caissier", "tenue de caisse"),
    "cocktails": ("mixologie", "cocktail preparation", "préparation de cocktails", "préparation de boissons"),
    "accueil": ("reception", "customer welcome", "accueil des clients", "greeting"),
    "vente": ("sales", "selling", "commercial"),
    "cuisine": ("cooking", "chef", "cuisinier", "préparation culinaire"),
    "nettoyage": ("cleaning", "entretien", "housekeeping", "hygiène"),
    "commande": ("order", "prise de commande", "order taking", "préparation de commande"),
    "stock": ("inventory", "gestion des stocks", "stock management", "approvisionnement"),
    # General, FR <-> EN
    "management": ("gestion", "encadrement", "supervision", "responsable"),
    "communication": ("relation client", "customer relations", "interpersonal"),
    "teamwork": ("travail en équipe", "esprit d'équipe", "team spirit", "collaboration"),
}


def normalize_skill_text(text: str | None) -> str:
    """Lower-case, strip diacritics and collapse whitespace."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE_PATTERN.sub(" ", without_marks).strip().lower()


SKILL_EQUIVALENCES: tuple[tuple[str, ...], ...] = tuple(
    tuple(normalize_skill_text(term) for term in (key, *aliases))
    for key, aliases in _RAW_EQUIVALENCES.items()
)


@dataclass(frozen=True)
class MatchingConfig:
    min_skill_fragment_length: int = 2
    min_experience_match_length: int = 4
    critical_skill_gaps_limit: int = 3

    @classmethod
    def from_scoring_config(cls) -> "MatchingConfig":
        return cls(
            min_skill_fragment_length=int(get_scoring_value("matching.min_skill_fragment_length", 2)),
            min_experience_match_length=int(get_scoring_value("matching.min_experience_match_length", 4)),
            critical_skill_gaps_limit=int(get_scoring_value("matching.critical_skill_gaps_limit", 3)),
        )


@dataclass(frozen=True)
class ProfileTexts:
    skill_names: tuple[str, ...]
    experience_texts: tuple[str, ...]


def split_compound_skill(skill: str, config: MatchingConfig | None = None) -> list[str]:
    """Return the whole skill followed by its usable fragments.

    A compound skill is satisfied when any returned fragment matches. Parts
    shorter than the minimum length are dropped; when nothing usable is left,
    only the whole string is returned.
    """
    cfg = config or MatchingConfig()
    whole = normalize_skill_text(skill)
    if not whole:
        return []
    parts = [normalize_skill_text(part) for part in _SPLIT_PATTERN.split(whole)]
    if len(parts) <= 1:
        return [whole]
    usable = [part for part in parts if len(part) >= cfg.min_skill_fragment_length]
    if not usable:
        return [whole]
    return [whole, *usable]


def build_profile_texts(
    skills: Iterable[Skill],
    work_experience: Iterable[WorkExperience] | None = None,
) -> ProfileTexts:
    skill_names = [normalize_skill_text(skill.name) for skill in skills]
    experience_texts: list[str] = []
    for experience in work_experience or ():
        experience_texts.append(normalize_skill_text(experience.title))
        experience_texts.extend(normalize_skill_text(item) for item in experience.achievements)
    return ProfileTexts(
        skill_names=tuple(name for name in skill_names if name),
        experience_texts=tuple(text for text in experience_texts if text),
    )


def _contains_either_way(fragment: str, texts: Sequence[str], min_length: int) -> bool:
    return any(
        fragment in text or text in fragment
        for text in texts
        if len(text) >= min_length
    )


def check_semantic_similarity(fragment: str, texts: Sequence[str]) -> bool:
    """Match through the first equivalence group that mentions the fragment."""
    for group in SKILL_EQUIVALENCES:
        if any(term in fragment or fragment in term for term in group):
            return any(term in text for text in texts for term in group)
    return False


def is_skill_fragment_matched(
    fragment: str,
    skill_names: Sequence[str],
    experience_texts: Sequence[str],
    config: MatchingConfig | None = None,
) -> bool:
    cfg = config or MatchingConfig()
    fragment = normalize_skill_text(fragment)
    if len(fragment) < cfg.min_skill_fragment_length:
        return False

    if fragment in skill_names:
        return True
    if _contains_either_way(fragment, skill_names, cfg.min_skill_fragment_length):
        return True
    if check_semantic_similarity(fragment, skill_names):
        return True
    # Free text is noisier than a curated skill list, so require a longer fragment.
    if len(fragment) >= cfg.min_experience_match_length and _contains_either_way(
        fragment, experience_texts, cfg.min_experience_match_length
    ):
        return True
    return check_semantic_similarity(fragment, experience_texts)


def is_skill_matched(
    skill: str,
    profile_texts: ProfileTexts,
    config: MatchingConfig | None = None,
) -> bool:
    return any(
        is_skill_fragment_matched(
            fragment,
            profile_texts.skill_names,
            profile_texts.experience_texts,
            config,
        )
        for fragment in split_compound_skill(skill, config)
    )


class SkillMatcher(Protocol):
    def is_match(self, skill: str, profile_texts: ProfileTexts) -> bool:
        """Return True when the profile satisfies the job skill."""


class SubstringSkillMatcher(SkillMatcher):
    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or MatchingConfig()

    def is_match(self, skill: str, profile_texts: ProfileTexts) -> bool:
        return is_skill_matched(skill, profile_texts, self.config)
