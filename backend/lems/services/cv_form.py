"""
Core-values incident form: blank form construction, validation and severity.

A form records who observed an incident, who demonstrated the behaviour,
and which behaviour categories apply. Each category has two checkbox groups
(the team or student involved, anyone else) plus a free-text "other".
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

CV_FORM_SUBJECTS = ("team", "student", "anyone-else")

STANDARD_SEVERITY = "standardExpectations"

# Least to most severe; the most severe checked category decides the form severity
SEVERITY_ORDER = (
    "aboveExpectations",
    "exceedsExpectations",
    "possibleConcern",
    "belowExpectations",
    "inappropriate",
)


@dataclass(frozen=True)
class CVFormCategorySchema:
    id: str
    title: str
    team_or_student: List[str]
    anyone_else: List[str]


CV_FORM_SCHEMA: List[CVFormCategorySchema] = [
    CVFormCategorySchema(
        id="standardExpectations",
        title="Standard expectations",
        team_or_student=["Shows respect for others", "Follows event rules"],
        anyone_else=["Behaves politely toward participants"],
    ),
    CVFormCategorySchema(
        id="aboveExpectations",
        title="Above expectations",
        team_or_student=["Helps another team", "Shares knowledge or equipment"],
        anyone_else=["Volunteers help beyond their role"],
    ),
    CVFormCategorySchema(
        id="exceedsExpectations",
        title="Exceeds expectations",
        team_or_student=["Inspires others through outstanding gracious professionalism"],
        anyone_else=["Goes far beyond expectations to support participants"],
    ),
    CVFormCategorySchema(
        id="possibleConcern",
        title="Possible concern",
        team_or_student=["Adult appears to do the work for the team", "Disregards feedback"],
        anyone_else=["Pressures the team from outside the competition area"],
    ),
    CVFormCategorySchema(
        id="belowExpectations",
        title="Below expectations",
        team_or_student=["Disrespectful toward others", "Ignores event rules"],
        anyone_else=["Behaves disrespectfully toward participants"],
    ),
    CVFormCategorySchema(
        id="inappropriate",
        title="Inappropriate",
        team_or_student=["Verbal abuse", "Deliberate damage or sabotage"],
        anyone_else=["Verbal abuse", "Threatening behaviour"],
    ),
]

CATEGORY_IDS = [category.id for category in CV_FORM_SCHEMA]


class CVFormValidationError(Exception):
    """Raised when a submitted form fails validation. Carries field -> message errors."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def _empty_group(fields: List[str]) -> Dict[str, Any]:
    return {"fields": [False for _ in fields], "other": ""}


def empty_cv_form(event_id: int) -> Dict[str, Any]:
    """A blank form: nothing selected, every checkbox off."""
    return {
        "event_id": event_id,
        "observers": [],
        "observer_affiliation": "",
        "demonstrators": [],
        "demonstrator_affiliation": "",
        "data": {
            category.id: {
                "team_or_student": _empty_group(category.team_or_student),
                "anyone_else": _empty_group(category.anyone_else),
            }
            for category in CV_FORM_SCHEMA
        },
        "details": "",
        "completed_by": {"name": "", "phone": "", "affiliation": ""},
        "actions_taken": None,
    }


def _category_groups(category: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [category.get("team_or_student") or {}, category.get("anyone_else") or {}]


def _category_fields(category: Dict[str, Any]) -> List[bool]:
    fields: List[bool] = []
    for group in _category_groups(category):
        fields.extend(bool(x) for x in group.get("fields", []))
    return fields


def _category_marked(category: Dict[str, Any]) -> bool:
    if any(_category_fields(category)):
        return True
    return any(group.get("other") for group in _category_groups(category))


def _data_error(data: Dict[str, Any]) -> Optional[str]:
    unknown = sorted(set(data) - set(CATEGORY_IDS))
    if unknown:
        return f"Unknown categories: {', '.join(unknown)}"

    for schema in CV_FORM_SCHEMA:
        category = data.get(schema.id)
        if category is None:
            continue
        for group_key, labels in (("team_or_student", schema.team_or_student), ("anyone_else", schema.anyone_else)):
            group = category.get(group_key) or {}
            if len(group.get("fields", [])) != len(labels):
                return f"{schema.id}.{group_key} must have {len(labels)} fields"

    if not any(field for category in data.values() for field in _category_fields(category)):
        return "Please mark at least one field"
    return None


def validate_cv_form(values: Dict[str, Any]) -> Dict[str, str]:
    """Return field -> error message; an empty dict means the form is valid."""
    errors: Dict[str, str] = {}

    for subjects_key, affiliation_key in (
        ("observers", "observer_affiliation"),
        ("demonstrators", "demonstrator_affiliation"),
    ):
        subjects = values.get(subjects_key) or []
        if len(subjects) == 0:
            errors[subjects_key] = "Required field"
        elif any(subject not in CV_FORM_SUBJECTS for subject in subjects):
            errors[subjects_key] = f"Must be one of {', '.join(CV_FORM_SUBJECTS)}"
        elif "team" in subjects and not values.get(affiliation_key):
            errors[affiliation_key] = "Please enter a team number"

    data_error = _data_error(values.get("data") or {})
    if data_error:
        errors["data"] = data_error

    if not values.get("details"):
        errors["details"] = "Please describe the incident"

    completed_by = values.get("completed_by") or {}
    if not all(completed_by.get(key) for key in ("name", "phone", "affiliation")):
        errors["completed_by"] = "Please fill in the details of whoever completed the form"

    return errors


def form_severity(values: Dict[str, Any]) -> str:
    """Most severe category with any checkbox or free text; standard expectations otherwise."""
    data = values.get("data") or {}
    severity = STANDARD_SEVERITY
    for category_id in SEVERITY_ORDER:
        category = data.get(category_id)
        if category and _category_marked(category):
            severity = category_id
    return severity


def prepare_cv_form(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a submission and stamp its severity. Raises CVFormValidationError."""
    errors = validate_cv_form(values)
    if errors:
        logger.info("Rejected core values form: %s", sorted(errors))
        raise CVFormValidationError(errors)
    return {**values, "severity": form_severity(values)}
