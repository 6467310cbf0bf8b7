"""Weighted job-to-student match scoring."""

from __future__ import annotations

from collections.abc import Sequence

from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matchers import (
    average_verified_gpa,
    education_rank,
    find_matching_skills,
    format_number,
    min_years_required,
    round_score,
)
from career_match.matching.models import (
    Dimension,
    DimensionScore,
    JobRequirements,
    MatchResult,
    StudentProfile,
    Transcript,
)
from career_match.utils.logging import get_logger

logger = get_logger(__name__)

# Sub-score given when no verified GPA is on file.
NO_ACADEMIC_DATA_SCORE = 50.0

# (minimum GPA, sub-score, matched, label), checked top to bottom.
GPA_TIERS: tuple[tuple[float, float, bool, str], ...] = (
    (3.5, 100.0, True, "Excellent"),
    (3.0, 80.0, True, "Good"),
    (2.5, 60.0, True, "Average"),
)
BELOW_TIER_SCORE = 40.0


class MatchScorer:
    """Score how well a student fits a job across four weighted dimensions."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_matching_config()

    @property
    def weights(self) -> dict[Dimension, float]:
        return {
            Dimension.EDUCATION: self.config.weight_education,
            Dimension.SKILLS: self.config.weight_skills,
            Dimension.EXPERIENCE: self.config.weight_experience,
            Dimension.ACADEMIC_PERFORMANCE: self.config.weight_academic,
        }

    def score_education(
        self, student: StudentProfile, job: JobRequirements
    ) -> DimensionScore:
        """Score education level against the job's minimum level."""
        if not job.education:
            return DimensionScore(100.0, True, "No education requirement specified")

        job_level = education_rank(job.education)
        student_level = education_rank(student.education_level)

        if student_level >= job_level:
            return DimensionScore(
                100.0, True, f"Meets education requirement: {job.education}"
            )

        # job_level > student_level >= 0 here, so the division is safe.
        score = student_level / job_level * 100
        return DimensionScore(
            score,
            False,
            "Education level below requirement: "
            f"{student.education_level or 'none'} vs {job.education}",
        )

    def score_skills(
        self, student: StudentProfile, job: JobRequirements
    ) -> DimensionScore:
        """Score the share of required skills the student holds."""
        required = job.skills
        if not required:
            return DimensionScore(100.0, True, "No specific skills required")

        matched, missing = find_matching_skills(required, student.skills)
        score = 100 * len(matched) / len(required)
        return DimensionScore(
            score,
            score >= self.config.skill_match_threshold,
            f"Matched {len(matched)} of {len(required)} required skills",
            matched_skills=tuple(matched),
            missing_skills=tuple(missing),
        )

    def score_experience(
        self, student: StudentProfile, job: JobRequirements
    ) -> DimensionScore:
        """Score years of experience against the smallest number in the requirement."""
        if not job.experience or not job.experience.strip():
            return DimensionScore(100.0, True, "No experience requirement specified")

        min_years = min_years_required(job.experience)
        years = student.experience_years

        if years >= min_years:
            return DimensionScore(
                100.0,
                True,
                f"Meets experience requirement: {format_number(years)} years",
            )

        score = min(100.0, years / min_years * 100)
        return DimensionScore(
            score,
            False,
            "Experience below requirement: "
            f"{format_number(years)} years vs {min_years} years required",
        )

    def score_academic(self, transcripts: Sequence[Transcript]) -> DimensionScore:
        """Score academic performance from verified transcript GPAs."""
        average_gpa = average_verified_gpa(
            transcripts, from_courses=self.config.gpa_from_courses
        )
        if average_gpa is None:
            return DimensionScore(
                NO_ACADEMIC_DATA_SCORE, False, "No verified transcripts available"
            )

        for min_gpa, score, matched, label in GPA_TIERS:
            if average_gpa >= min_gpa:
                return DimensionScore(
                    score,
                    matched,
                    f"{label} academic performance (GPA: {average_gpa:.2f})",
                )
        return DimensionScore(
            BELOW_TIER_SCORE,
            False,
            f"Below average academic performance (GPA: {average_gpa:.2f})",
        )

    def score(
        self,
        student: StudentProfile,
        transcripts: Sequence[Transcript] | None,
        job: JobRequirements,
    ) -> MatchResult:
        """Compute the weighted match score between a student and a job."""
        if student is None:
            raise ValueError("student profile is required")
        if job is None:
            raise ValueError("job requirements are required")

        breakdown = {
            Dimension.EDUCATION: self.score_education(student, job),
            Dimension.SKILLS: self.score_skills(student, job),
            Dimension.EXPERIENCE: self.score_experience(student, job),
            Dimension.ACADEMIC_PERFORMANCE: self.score_academic(transcripts or []),
        }

        weights = self.weights
        total = sum(weights[d] * sub.score for d, sub in breakdown.items())
        # Weights sum to 1.0 within tolerance; keep float drift inside [0, 100].
        total = round_score(min(100.0, max(0.0, total)))

        result = MatchResult(
            score=total,
            matched_criteria=tuple(d.value for d, sub in breakdown.items() if sub.matched),
            missing_criteria=tuple(
                d.value for d, sub in breakdown.items() if not sub.matched
            ),
            breakdown={d.value: sub for d, sub in breakdown.items()},
        )
        logger.debug(
            "Match scored: student=%s score=%.2f matched=%s",
            student.id,
            result.score,
            ",".join(result.matched_criteria) or "-",
        )
        return result
