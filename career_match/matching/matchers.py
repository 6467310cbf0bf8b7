"""Ordinal scales and matching utilities for eligibility and match scoring."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from career_match.matching.models import Transcript

# Letter grades, lowest first. Unknown letters rank as F.
GRADE_ORDER: dict[str, int] = {"F": 0, "E": 1, "D": 2, "C": 3, "B": 4, "A": 5}

# Education levels, lowest first. Unknown levels rank as high-school.
EDUCATION_ORDER: dict[str, int] = {
    "high-school": 0,
    "certificate": 1,
    "diploma": 2,
    "bachelor": 3,
    "master": 4,
    "phd": 5,
}

_EDUCATION_ALIASES: dict[str, str] = {
    "highschool": "high-school",
    "secondary": "high-school",
    "bachelors": "bachelor",
    "bachelor's": "bachelor",
    "undergraduate": "bachelor",
    "masters": "master",
    "master's": "master",
    "doctorate": "phd",
    "ph.d": "phd",
    "ph.d.": "phd",
}

_NUMBER_PATTERN = re.compile(r"\d+")


def grade_rank(grade: str | None) -> int:
    """Return the ordinal rank of a letter grade (F=0 ... A=5).

    Letters are compared exactly as written; anything outside the table,
    including lowercase letters, ranks as F.
    """
    if not grade:
        return 0
    return GRADE_ORDER.get(grade.strip(), 0)


def normalize_education_level(level: str) -> str:
    """Normalize an education level for comparison.

    Lowercases, collapses whitespace and underscores into hyphens, and maps
    common spellings ("Bachelors", "High School") onto the canonical names.
    Unknown values are returned normalized but otherwise unchanged.
    """
    value = level.strip().lower()
    value = re.sub(r"[\s_]+", "-", value)
    return _EDUCATION_ALIASES.get(value, value)


def education_rank(level: str | None) -> int:
    """Return the ordinal rank of an education level (high-school=0 ... phd=5)."""
    if not level:
        return 0
    return EDUCATION_ORDER.get(normalize_education_level(level), 0)


def skills_match(required: str, available: str) -> bool:
    """Return True if either skill label contains the other, ignoring case."""
    required_value = required.strip().lower()
    available_value = available.strip().lower()
    # An empty label is a substring of every skill; it matches nothing.
    if not required_value or not available_value:
        return False
    return required_value in available_value or available_value in required_value


def find_matching_skills(
    required: list[str], available: list[str]
) -> tuple[list[str], list[str]]:
    """Return the subset of required skills that match, and those missing."""
    matched: list[str] = []
    missing: list[str] = []

    for requirement in required:
        if any(skills_match(requirement, skill) for skill in available):
            matched.append(requirement)
        else:
            missing.append(requirement)

    return matched, missing


def min_years_required(requirement: str | None) -> int:
    """Extract the binding number of years from an experience requirement.

    "2-4 years" requires 2; text without any number requires 0.
    """
    if not requirement:
        return 0
    numbers = [int(n) for n in _NUMBER_PATTERN.findall(requirement)]
    return min(numbers) if numbers else 0


def average_verified_gpa(
    transcripts: Iterable[Transcript], from_courses: bool = False
) -> float | None:
    """Mean GPA over verified transcripts that carry a GPA, or None.

    With `from_courses`, a verified transcript without a GPA contributes the
    credit-weighted GPA of its graded courses instead, if it has any.
    """
    values: list[float] = []
    for transcript in transcripts:
        if not transcript.verified:
            continue
        gpa = transcript.gpa
        if gpa is None and from_courses:
            gpa = transcript.calculate_gpa()
        if gpa is not None:
            values.append(gpa)
    if not values:
        return None
    return sum(values) / len(values)


def round_score(value: float) -> float:
    """Round to two decimals, rounding halves up on the scaled value."""
    return math.floor(value * 100 + 0.5) / 100


def format_number(value: float) -> str:
    """Render whole numbers without a trailing '.0' for messages."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
