"""
CRS (Comprehensive Ranking System) score engine.

Single source of truth for the portal's CRS points: the API persistence path
and the live-preview endpoint both call `score()`.

The engine is total over its input. Missing fields, unknown education values
and absent spouse data all contribute zero points instead of raising, so a
half-filled form can be scored on every change.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

MAX_SCORE = 1200


class Education(str, Enum):
    SECONDARY = "secondary"
    CERTIFICATE = "certificate"
    DIPLOMA = "diploma"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Education":
        """Exact, case-sensitive lookup; anything else is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


# --- Point tables ---
# Age bands are disjoint inclusive ranges; ages outside every band score 0.
AGE_BANDS: tuple[tuple[int, int, int], ...] = (
    (20, 29, 110),
    (30, 31, 105),
    (32, 35, 100),
    (36, 39, 90),
    (40, 45, 80),
    (46, 47, 70),
)

EDUCATION_POINTS = MappingProxyType({
    Education.SECONDARY: 30,
    Education.CERTIFICATE: 90,
    Education.DIPLOMA: 98,
    Education.BACHELOR: 120,
    Education.MASTER: 135,
    Education.PHD: 150,
    Education.UNKNOWN: 0,
})

SPOUSE_EDUCATION_POINTS = MappingProxyType({
    Education.SECONDARY: 2,
    Education.CERTIFICATE: 6,
    Education.DIPLOMA: 7,
    Education.BACHELOR: 8,
    Education.MASTER: 10,
    Education.PHD: 10,
    Education.UNKNOWN: 0,
})

# (minimum CLB, points), highest threshold first
LANGUAGE_BANDS: tuple[tuple[int, int], ...] = (
    (9, 136), (8, 124), (7, 110), (6, 88), (5, 68), (4, 32),
)
SPOUSE_LANGUAGE_BANDS: tuple[tuple[int, int], ...] = ((9, 20), (7, 16), (5, 8))

# (minimum years, points)
WORK_EXPERIENCE_BANDS: tuple[tuple[int, int], ...] = ((6, 80), (4, 70), (2, 60), (1, 40))
SPOUSE_WORK_EXPERIENCE_BANDS: tuple[tuple[int, int], ...] = ((5, 10), (3, 8), (1, 5))

JOB_OFFER_POINTS = 50
PROVINCIAL_NOMINATION_POINTS = 600
SIBLING_POINTS = 15


@dataclass
class ApplicantProfile:
    """Flat CRS form. Every field is optional; absence scores zero."""

    age: float | None = None
    education: Education = Education.UNKNOWN
    work_experience: float | None = None
    english_listening: float | None = None
    english_reading: float | None = None
    english_writing: float | None = None
    english_speaking: float | None = None
    has_spouse: bool = False
    spouse_education: Education | None = None
    spouse_work_experience: float | None = None
    spouse_english_listening: float | None = None
    spouse_english_reading: float | None = None
    spouse_english_writing: float | None = None
    spouse_english_speaking: float | None = None
    job_offer: bool = False
    provincial_nomination: bool = False
    sibling_in_canada: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ApplicantProfile":
        """
        Build a profile from a camelCase (wire) or snake_case mapping.

        Numeric strings are accepted; values that cannot be read as numbers
        become None. Never raises.
        """
        data = data or {}

        def _get(snake: str, camel: str) -> Any:
            value = data.get(camel)
            return data.get(snake) if value is None else value

        def _num(v: Any) -> float | None:
            if v is None or isinstance(v, bool):
                return None
            if isinstance(v, (int, float)):
                return v if math.isfinite(v) else None
            try:
                parsed = float(str(v).strip())
            except (TypeError, ValueError):
                return None
            return parsed if math.isfinite(parsed) else None

        def _bool(v: Any) -> bool:
            if v is None:
                return False
            if isinstance(v, bool):
                return v
            return str(v).strip().lower() in ("1", "true", "yes", "y")

        spouse_edu = _get("spouse_education", "spouseEducation")

        return cls(
            age=_num(_get("age", "age")),
            education=Education.parse(_get("education", "education")),
            work_experience=_num(_get("work_experience", "workExperience")),
            english_listening=_num(_get("english_listening", "englishListening")),
            english_reading=_num(_get("english_reading", "englishReading")),
            english_writing=_num(_get("english_writing", "englishWriting")),
            english_speaking=_num(_get("english_speaking", "englishSpeaking")),
            has_spouse=_bool(_get("has_spouse", "hasSpouse")),
            spouse_education=Education.parse(spouse_edu) if spouse_edu else None,
            spouse_work_experience=_num(_get("spouse_work_experience", "spouseWorkExperience")),
            spouse_english_listening=_num(_get("spouse_english_listening", "spouseEnglishListening")),
            spouse_english_reading=_num(_get("spouse_english_reading", "spouseEnglishReading")),
            spouse_english_writing=_num(_get("spouse_english_writing", "spouseEnglishWriting")),
            spouse_english_speaking=_num(_get("spouse_english_speaking", "spouseEnglishSpeaking")),
            job_offer=_bool(_get("job_offer", "jobOffer")),
            provincial_nomination=_bool(_get("provincial_nomination", "provincialNomination")),
            sibling_in_canada=_bool(_get("sibling_in_canada", "siblingInCanada")),
        )


@dataclass
class ScoreBreakdown:
    """Category totals are unclamped; only `total` is capped at MAX_SCORE."""

    core_factors: int = 0
    spouse_factors: int = 0
    additional_points: int = 0
    total: int = 0
    factors: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, int]:
        return {
            "coreFactors": self.core_factors,
            "spouseFactors": self.spouse_factors,
            "additionalPoints": self.additional_points,
            "total": self.total,
        }


def _band(value: float | None, bands: tuple[tuple[int, int], ...]) -> int:
    if value is None:
        return 0
    for threshold, points in bands:
        if value >= threshold:
            return points
    return 0


def clb_level(*scores: float | None) -> int:
    """Floor each skill score (missing or non-finite counts as 0), then take the weakest."""
    if not scores:
        return 0
    return min(math.floor(s) if s and math.isfinite(s) else 0 for s in scores)


def age_points(age: float | None) -> int:
    if age is None:
        return 0
    for low, high, points in AGE_BANDS:
        if low <= age <= high:
            return points
    return 0


def education_points(level: Any) -> int:
    return EDUCATION_POINTS[Education.parse(level)]


def language_points(listening, reading, writing, speaking) -> int:
    return _band(clb_level(listening, reading, writing, speaking), LANGUAGE_BANDS)


def work_experience_points(years: float | None) -> int:
    return _band(years, WORK_EXPERIENCE_BANDS)


def spouse_education_points(level: Any) -> int:
    if not level:
        return 0
    return SPOUSE_EDUCATION_POINTS[Education.parse(level)]


def spouse_language_points(listening, reading, writing, speaking) -> int:
    # All four skills or nothing
    if not (listening and reading and writing and speaking):
        return 0
    return _band(clb_level(listening, reading, writing, speaking), SPOUSE_LANGUAGE_BANDS)


def spouse_work_experience_points(years: float | None) -> int:
    # 0 years and "not provided" are the same thing here
    if not years:
        return 0
    return _band(years, SPOUSE_WORK_EXPERIENCE_BANDS)


def additional_points(job_offer: bool, provincial_nomination: bool, sibling_in_canada: bool) -> int:
    points = 0
    if job_offer:
        points += JOB_OFFER_POINTS
    if provincial_nomination:
        points += PROVINCIAL_NOMINATION_POINTS
    if sibling_in_canada:
        points += SIBLING_POINTS
    return points


def score(profile: ApplicantProfile | Mapping[str, Any] | None) -> ScoreBreakdown:
    """
    Compute the CRS total and its category breakdown.

    Accepts an ApplicantProfile or a raw form mapping. Pure: no I/O, no shared
    state, same input always gives the same breakdown.
    """
    if not isinstance(profile, ApplicantProfile):
        profile = ApplicantProfile.from_dict(profile)
    p = profile

    factors = {
        "age": age_points(p.age),
        "education": education_points(p.education),
        "language": language_points(
            p.english_listening, p.english_reading, p.english_writing, p.english_speaking,
        ),
        "work_experience": work_experience_points(p.work_experience),
        "spouse_education": 0,
        "spouse_language": 0,
        "spouse_work_experience": 0,
        "job_offer": JOB_OFFER_POINTS if p.job_offer else 0,
        "provincial_nomination": PROVINCIAL_NOMINATION_POINTS if p.provincial_nomination else 0,
        "sibling_in_canada": SIBLING_POINTS if p.sibling_in_canada else 0,
    }

    # spouse points need a spouse education level, as the legacy calculator did
    if p.has_spouse is True and p.spouse_education:
        factors["spouse_education"] = spouse_education_points(p.spouse_education)
        factors["spouse_language"] = spouse_language_points(
            p.spouse_english_listening, p.spouse_english_reading,
            p.spouse_english_writing, p.spouse_english_speaking,
        )
        factors["spouse_work_experience"] = spouse_work_experience_points(p.spouse_work_experience)

    core = factors["age"] + factors["education"] + factors["language"] + factors["work_experience"]
    spouse = factors["spouse_education"] + factors["spouse_language"] + factors["spouse_work_experience"]
    add = additional_points(p.job_offer, p.provincial_nomination, p.sibling_in_canada)

    total = max(0, min(core + spouse + add, MAX_SCORE))

    return ScoreBreakdown(
        core_factors=core,
        spouse_factors=spouse,
        additional_points=add,
        total=total,
        factors=factors,
    )
