"""Data models for the matching engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from career_match.matching.matchers import normalize_education_level

# Stored documents use camelCase keys; Python callers use field names.
RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)

# Credit-weighted grade points used by Transcript.calculate_gpa().
TRANSCRIPT_GRADE_POINTS: dict[str, float] = {
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "F": 0.0,
}


def _none_to_empty_list(value: Any) -> Any:
    return [] if value is None else value


class EducationLevel(str, Enum):
    """Closed, ordered set of education levels (lowest first)."""

    HIGH_SCHOOL = "high-school"
    CERTIFICATE = "certificate"
    DIPLOMA = "diploma"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"


class Dimension(str, Enum):
    """Weighted scoring axes of a job match."""

    EDUCATION = "education"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    ACADEMIC_PERFORMANCE = "academic_performance"


class StudentGrades(BaseModel):
    """Academic record used for course eligibility."""

    model_config = RECORD_CONFIG

    overall: str | None = Field(default=None, description="Overall letter grade (A-F)")
    points: float | None = Field(default=None, ge=0, description="Aggregate points")
    subjects: dict[str, str] = Field(
        default_factory=dict, description="Subject name to letter grade"
    )
    certificates: list[str] = Field(
        default_factory=list, description="Certificates held"
    )

    @field_validator("subjects", mode="before")
    @classmethod
    def default_missing_subjects(cls, v: Any) -> Any:
        """Treat a null subject mapping as empty."""
        return {} if v is None else v

    @field_validator("certificates", mode="before")
    @classmethod
    def default_missing_certificates(cls, v: Any) -> Any:
        return _none_to_empty_list(v)


class StudentProfile(BaseModel):
    """Student profile used for eligibility and job matching."""

    model_config = RECORD_CONFIG

    id: str | None = Field(default=None, description="Student identifier")
    education_level: str | None = Field(
        default=None, description="Highest education level attained"
    )
    skills: list[str] = Field(default_factory=list, description="Skill labels")
    experience_years: float = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(
            "experience_years", "experienceYears", "experience"
        ),
        description="Years of work experience",
    )
    grades: StudentGrades | None = Field(default=None, description="Academic record")
    certificates: list[str] = Field(
        default_factory=list, description="Certificates held"
    )

    @field_validator("skills", "certificates", mode="before")
    @classmethod
    def default_missing_lists(cls, v: Any) -> Any:
        return _none_to_empty_list(v)

    @field_validator("experience_years", mode="before")
    @classmethod
    def default_missing_experience(cls, v: Any) -> Any:
        """Treat a null experience value as zero years."""
        return 0 if v is None else v

    @field_validator("education_level", mode="before")
    @classmethod
    def normalize_education(cls, v: Any) -> str | None:
        """Map spelling variants onto the canonical education levels."""
        if v is None:
            return None
        if isinstance(v, EducationLevel):
            return v.value
        return normalize_education_level(str(v)) or None

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> StudentProfile:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class TranscriptCourse(BaseModel):
    """A graded course line on a transcript."""

    model_config = RECORD_CONFIG

    name: str = Field(default="", description="Course name")
    grade: str | None = Field(default=None, description="Letter grade (A, B+, ...)")
    credits: float = Field(default=1, ge=0, description="Credit weight")

    @field_validator("credits", mode="before")
    @classmethod
    def default_missing_credits(cls, v: Any) -> Any:
        """Courses without credits count once."""
        return 1 if v in (None, 0) else v


class Transcript(BaseModel):
    """Academic transcript record."""

    model_config = RECORD_CONFIG

    gpa: float | None = Field(default=None, ge=0.0, le=4.0, description="Overall GPA")
    verified: bool = Field(default=False, description="Verified by an administrator")
    courses: list[TranscriptCourse] = Field(
        default_factory=list, description="Graded courses"
    )

    @field_validator("courses", mode="before")
    @classmethod
    def default_missing_courses(cls, v: Any) -> Any:
        return _none_to_empty_list(v)

    def calculate_gpa(self) -> float | None:
        """Return the credit-weighted GPA of the listed courses.

        Courses with unknown grades are skipped. Returns None when no course
        carries a recognised grade.
        """
        total_points = 0.0
        total_credits = 0.0
        for course in self.courses:
            grade = (course.grade or "").strip().upper()
            if grade not in TRANSCRIPT_GRADE_POINTS:
                continue
            total_points += TRANSCRIPT_GRADE_POINTS[grade] * course.credits
            total_credits += course.credits

        if total_credits <= 0:
            return None
        return total_points / total_credits


class CourseRequirements(BaseModel):
    """Admission requirements for a course."""

    model_config = RECORD_CONFIG

    min_grade: str | None = Field(default=None, description="Minimum overall grade")
    min_points: float | None = Field(default=None, ge=0, description="Minimum points")
    subjects: list[str] = Field(default_factory=list, description="Required subjects")
    certificates: list[str] = Field(
        default_factory=list, description="Required certificates"
    )

    @field_validator("subjects", "certificates", mode="before")
    @classmethod
    def default_missing_lists(cls, v: Any) -> Any:
        return _none_to_empty_list(v)

    @field_validator("min_grade", mode="before")
    @classmethod
    def blank_grade_is_absent(cls, v: Any) -> Any:
        """An empty grade string means no grade requirement."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class JobRequirements(BaseModel):
    """Requirements attached to a job posting."""

    model_config = RECORD_CONFIG

    education: str | None = Field(
        default=None, description="Minimum education level"
    )
    skills: list[str] = Field(default_factory=list, description="Required skills")
    experience: str | None = Field(
        default=None, description="Experience requirement, e.g. '2-4 years'"
    )

    @field_validator("skills", mode="before")
    @classmethod
    def default_missing_skills(cls, v: Any) -> Any:
        return _none_to_empty_list(v)

    @field_validator("education", mode="before")
    @classmethod
    def normalize_education(cls, v: Any) -> str | None:
        """Map spelling variants onto the canonical education levels."""
        if v is None:
            return None
        if isinstance(v, EducationLevel):
            return v.value
        return normalize_education_level(str(v)) or None

    @field_validator("experience", mode="before")
    @classmethod
    def coerce_experience(cls, v: Any) -> str | None:
        """Accept bare numbers as the experience requirement."""
        if v is None:
            return None
        return str(v)


class JobPosting(BaseModel):
    """A job posting as ranked by the orchestrator."""

    model_config = RECORD_CONFIG

    id: str | None = Field(default=None, description="Job identifier")
    title: str = Field(default="", description="Job title")
    company_id: str | None = Field(default=None, description="Owning company")
    status: str = Field(default="active", description="Posting status")
    application_deadline: datetime | None = Field(
        default=None, description="Last moment applications are accepted"
    )
    requirements: JobRequirements = Field(
        default_factory=JobRequirements, description="Job requirements"
    )

    @field_validator("requirements", mode="before")
    @classmethod
    def default_missing_requirements(cls, v: Any) -> Any:
        """A posting without requirements has no requirements."""
        return {} if v is None else v

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")


class StudentCandidate(BaseModel):
    """A student together with the transcripts used to score them."""

    model_config = RECORD_CONFIG

    profile: StudentProfile = Field(..., description="Student profile")
    transcripts: list[Transcript] = Field(
        default_factory=list, description="Transcripts on file"
    )

    @field_validator("transcripts", mode="before")
    @classmethod
    def default_missing_transcripts(cls, v: Any) -> Any:
        return _none_to_empty_list(v)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")


@dataclass(frozen=True)
class EligibilityVerdict:
    """Outcome of checking a student against course admission requirements."""

    is_eligible: bool
    met_requirements: tuple[str, ...] = ()
    missing_requirements: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.is_eligible and self.missing_requirements:
            raise ValueError(
                "EligibilityVerdict.is_eligible=True is incompatible with "
                "missing_requirements"
            )
        if self.is_eligible and self.suggestions:
            raise ValueError("Suggestions are only given to ineligible students")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RequirementCheck:
    """One row of a course qualification breakdown."""

    requirement: str
    student_value: str
    meets: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DimensionScore:
    """Sub-score for a single match dimension."""

    score: float
    matched: bool
    details: str = ""
    matched_skills: tuple[str, ...] = ()
    missing_skills: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (0.0 <= self.score <= 100.0):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")


@dataclass(frozen=True)
class MatchResult:
    """Weighted match between a student and a job."""

    score: float
    matched_criteria: tuple[str, ...] = ()
    missing_criteria: tuple[str, ...] = ()
    breakdown: dict[str, DimensionScore] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (0.0 <= self.score <= 100.0):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RankedMatch:
    """A scored candidate in a ranking."""

    candidate: JobPosting | StudentCandidate
    result: MatchResult
    has_transcripts: bool | None = None
    average_gpa: float | None = None

    @property
    def score(self) -> float:
        return self.result.score

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "candidate": self.candidate.to_dict(),
            "match": self.result.to_dict(),
        }
        if self.has_transcripts is not None:
            payload["has_transcripts"] = self.has_transcripts
        if self.average_gpa is not None:
            payload["average_gpa"] = self.average_gpa
        return payload
