"""
Utility to determine whether a CRS form carries the fields the API requires.
"""

from typing import Any, Dict, List, Mapping

REQUIRED_FIELDS_MESSAGE = "Age, education, and work experience are required"


class CRSFieldRequirement:
    """Represents a field requirement for CRS calculation"""
    def __init__(
        self,
        field_name: str,
        field_type: str,  # "required" or "optional"
        description: str,
        is_present: bool = False,
    ):
        self.field_name = field_name
        self.field_type = field_type
        self.description = description
        self.is_present = is_present

    def as_dict(self) -> Dict[str, Any]:
        return {
            "field_name": self.field_name,
            "field_type": self.field_type,
            "description": self.description,
            "is_present": self.is_present,
        }


def _value(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    value = data.get(camel)
    return data.get(snake) if value is None else value


_ENGLISH_SKILLS = [
    ("englishListening", "english_listening"),
    ("englishReading", "english_reading"),
    ("englishWriting", "english_writing"),
    ("englishSpeaking", "english_speaking"),
]

_SPOUSE_FIELDS = [
    ("spouseEducation", "spouse_education", "Spouse education level - adds spouse points"),
    ("spouseWorkExperience", "spouse_work_experience", "Spouse work experience years - adds spouse points"),
    ("spouseEnglishListening", "spouse_english_listening", "Spouse listening score - all four needed for spouse language points"),
    ("spouseEnglishReading", "spouse_english_reading", "Spouse reading score - all four needed for spouse language points"),
    ("spouseEnglishWriting", "spouse_english_writing", "Spouse writing score - all four needed for spouse language points"),
    ("spouseEnglishSpeaking", "spouse_english_speaking", "Spouse speaking score - all four needed for spouse language points"),
]


def analyze_crs_requirements(form_data: Mapping[str, Any] | None) -> Dict[str, Any]:
    """
    Analyze a CRS form to determine what's available and what's missing.

    Returns a dictionary with:
    - can_calculate: whether the required fields are present
    - is_complete: whether every required and optional field is present
    - available_fields / missing_required / missing_optional: field names (camelCase)
    - requirements: detailed list of all field requirements

    Required fields follow the API rule: age and education must be truthy,
    work experience only has to be present (0 years is a valid answer).
    """
    data = form_data or {}

    required_fields = [
        CRSFieldRequirement(
            "age",
            "required",
            "Age in years - needed for age points",
            bool(_value(data, "age", "age")),
        ),
        CRSFieldRequirement(
            "education",
            "required",
            "Highest education level - needed for education points",
            bool(_value(data, "education", "education")),
        ),
        CRSFieldRequirement(
            "workExperience",
            "required",
            "Years of work experience - needed for work experience points",
            _value(data, "workExperience", "work_experience") is not None,
        ),
    ]

    optional_fields = [
        CRSFieldRequirement(
            camel,
            "optional",
            "English test score - the weakest skill sets the language points",
            _value(data, camel, snake) is not None,
        )
        for camel, snake in _ENGLISH_SKILLS
    ]
    optional_fields += [
        CRSFieldRequirement(
            "jobOffer",
            "optional",
            "Valid job offer - adds 50 points",
            bool(_value(data, "jobOffer", "job_offer")),
        ),
        CRSFieldRequirement(
            "provincialNomination",
            "optional",
            "Provincial nomination certificate - adds 600 points",
            bool(_value(data, "provincialNomination", "provincial_nomination")),
        ),
        CRSFieldRequirement(
            "siblingInCanada",
            "optional",
            "Sibling in Canada - adds 15 points",
            bool(_value(data, "siblingInCanada", "sibling_in_canada")),
        ),
    ]

    if _value(data, "hasSpouse", "has_spouse"):
        optional_fields += [
            CRSFieldRequirement(camel, "optional", description, bool(_value(data, camel, snake)))
            for camel, snake, description in _SPOUSE_FIELDS
        ]

    available_fields: List[str] = []
    missing_required: List[str] = []
    missing_optional: List[str] = []

    for req in required_fields:
        if req.is_present:
            available_fields.append(req.field_name)
        else:
            missing_required.append(req.field_name)

    for req in optional_fields:
        if req.is_present:
            available_fields.append(req.field_name)
        else:
            missing_optional.append(req.field_name)

    can_calculate = len(missing_required) == 0
    is_complete = can_calculate and len(missing_optional) == 0

    return {
        "can_calculate": can_calculate,
        "is_complete": is_complete,
        "available_fields": available_fields,
        "missing_required": missing_required,
        "missing_optional": missing_optional,
        "requirements": [req.as_dict() for req in required_fields + optional_fields],
    }
