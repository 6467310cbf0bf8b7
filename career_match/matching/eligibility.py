"""Course eligibility evaluation."""

from __future__ import annotations

from typing import NamedTuple

from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matchers import format_number, grade_rank
from career_match.matching.models import (
    CourseRequirements,
    EligibilityVerdict,
    RequirementCheck,
    StudentGrades,
    StudentProfile,
)
from career_match.utils.logging import get_logger

logger = get_logger(__name__)

SUGGESTIONS: tuple[str, ...] = (
    "Consider improving your grades in the required subjects",
    "Explore alternative courses with lower requirements",
    "Contact the institution for special consideration",
)
BRIDGING_SUGGESTION = "Look for bridging programs or foundation courses"

NOT_SPECIFIED = "Not specified"
NO_SUBJECTS = "No subjects specified"


class _Outcome(NamedTuple):
    passed: bool
    message: str


class EligibilityEvaluator:
    """Decide whether a student's grades satisfy a course's requirements."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_matching_config()

    def _check_grade(
        self, grades: StudentGrades, requirements: CourseRequirements
    ) -> _Outcome | None:
        min_grade = requirements.min_grade
        if min_grade is None:
            return None

        student_grade = grades.overall or "F"
        if grade_rank(student_grade) >= grade_rank(min_grade):
            return _Outcome(True, f"Meets minimum grade requirement ({min_grade})")
        return _Outcome(
            False,
            f"Minimum grade of {min_grade} required (your grade: {student_grade})",
        )

    def _check_subjects(
        self, grades: StudentGrades, requirements: CourseRequirements
    ) -> _Outcome | None:
        if not requirements.subjects:
            return None

        missing = [s for s in requirements.subjects if not grades.subjects.get(s)]
        if not missing:
            return _Outcome(True, "Meets all subject requirements")
        return _Outcome(False, f"Missing required subjects: {', '.join(missing)}")

    def _check_certificates(
        self, grades: StudentGrades, requirements: CourseRequirements
    ) -> _Outcome | None:
        if not requirements.certificates:
            return None

        held = set(grades.certificates)
        missing = [c for c in requirements.certificates if c not in held]
        if not missing:
            return _Outcome(True, "Meets all certificate requirements")
        return _Outcome(
            False, f"Missing required certificates: {', '.join(missing)}"
        )

    def _check_points(
        self, grades: StudentGrades, requirements: CourseRequirements
    ) -> _Outcome | None:
        min_points = requirements.min_points
        if not min_points:
            return None

        points = grades.points or 0
        if points >= min_points:
            return _Outcome(
                True,
                f"Meets minimum points requirement ({format_number(min_points)})",
            )
        return _Outcome(
            False,
            f"Minimum of {format_number(min_points)} points required "
            f"(your points: {format_number(points)})",
        )

    def evaluate(
        self, grades: StudentGrades | None, requirements: CourseRequirements
    ) -> EligibilityVerdict:
        """Evaluate grades against course requirements.

        Checks run in a fixed order (grade, subjects, certificates, points);
        the order of messages in the verdict follows it. Absent requirements
        are skipped and contribute no message.
        """
        if requirements is None:
            raise ValueError("course requirements are required")
        grades = grades or StudentGrades()

        outcomes = [
            outcome
            for outcome in (
                self._check_grade(grades, requirements),
                self._check_subjects(grades, requirements),
                self._check_certificates(grades, requirements),
                self._check_points(grades, requirements),
            )
            if outcome is not None
        ]

        met = tuple(o.message for o in outcomes if o.passed)
        missing = tuple(o.message for o in outcomes if not o.passed)
        is_eligible = not missing

        suggestions: tuple[str, ...] = ()
        if not is_eligible:
            suggestions = SUGGESTIONS
            if self.config.include_bridging_suggestion:
                suggestions = suggestions + (BRIDGING_SUGGESTION,)

        logger.debug(
            "Eligibility evaluated: eligible=%s met=%d missing=%d",
            is_eligible,
            len(met),
            len(missing),
        )
        return EligibilityVerdict(
            is_eligible=is_eligible,
            met_requirements=met,
            missing_requirements=missing,
            suggestions=suggestions,
        )

    def evaluate_student(
        self, student: StudentProfile, requirements: CourseRequirements
    ) -> EligibilityVerdict:
        """Evaluate a full profile, counting profile-level certificates too."""
        if student is None:
            raise ValueError("student profile is required")
        return self.evaluate(_merged_grades(student), requirements)

    def breakdown_student(
        self, student: StudentProfile, requirements: CourseRequirements
    ) -> list[RequirementCheck]:
        """Return the display rows for a full profile, as `evaluate_student` sees it."""
        if student is None:
            raise ValueError("student profile is required")
        return self.breakdown(_merged_grades(student), requirements)

    def breakdown(
        self, grades: StudentGrades | None, requirements: CourseRequirements
    ) -> list[RequirementCheck]:
        """Return one display row per present requirement."""
        if requirements is None:
            raise ValueError("course requirements are required")
        grades = grades or StudentGrades()
        rows: list[RequirementCheck] = []

        if requirements.min_grade is not None:
            rows.append(
                RequirementCheck(
                    requirement=f"Minimum Grade: {requirements.min_grade}",
                    student_value=grades.overall or NOT_SPECIFIED,
                    meets=grade_rank(grades.overall) >= grade_rank(requirements.min_grade),
                )
            )

        if requirements.min_points:
            points = grades.points or 0
            rows.append(
                RequirementCheck(
                    requirement=f"Minimum Points: {format_number(requirements.min_points)}",
                    student_value=format_number(points) if points > 0 else NOT_SPECIFIED,
                    meets=points >= requirements.min_points,
                )
            )

        if requirements.subjects:
            listed = list(grades.subjects)
            rows.append(
                RequirementCheck(
                    requirement=f"Required Subjects: {', '.join(requirements.subjects)}",
                    student_value=", ".join(listed) if listed else NO_SUBJECTS,
                    # A listed subject without a grade is not held.
                    meets=all(grades.subjects.get(s) for s in requirements.subjects),
                )
            )

        if requirements.certificates:
            rows.append(
                RequirementCheck(
                    requirement=(
                        f"Required Certificates: {', '.join(requirements.certificates)}"
                    ),
                    student_value=(
                        ", ".join(grades.certificates)
                        if grades.certificates
                        else NOT_SPECIFIED
                    ),
                    meets=all(
                        c in grades.certificates for c in requirements.certificates
                    ),
                )
            )

        return rows


def _merged_grades(student: StudentProfile) -> StudentGrades:
    grades = student.grades or StudentGrades()
    certificates = list(grades.certificates)
    certificates.extend(c for c in student.certificates if c not in certificates)
    return grades.model_copy(update={"certificates": certificates})
