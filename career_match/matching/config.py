"""Configuration settings for the matching engine."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Matching engine configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scoring weights (must sum to 1.0)
    weight_education: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.30,
        description="Weight for education level match",
    )
    weight_skills: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.30,
        description="Weight for required skills match",
    )
    weight_experience: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.20,
        description="Weight for years of experience match",
    )
    weight_academic: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.20,
        description="Weight for academic performance (verified GPA)",
    )

    # Matching settings
    skill_match_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=50.0,
        description="Skills sub-score at which the skills dimension counts as matched",
    )

    # Ranking defaults
    min_match_score: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=70.0,
        description="Minimum match score for a candidate to be ranked",
    )
    job_match_limit: Annotated[int, Field(gt=0)] = Field(
        default=10,
        description="Maximum number of jobs returned for a student",
    )
    student_match_limit: Annotated[int, Field(gt=0)] = Field(
        default=20,
        description="Maximum number of students returned for a job",
    )

    # Academic settings
    gpa_from_courses: bool = Field(
        default=False,
        description="Derive a missing transcript GPA from its graded courses",
    )

    # Eligibility settings
    include_bridging_suggestion: bool = Field(
        default=False,
        description="Append the bridging/foundation programme hint to suggestions",
    )

    @model_validator(mode="after")
    def validate_weights_sum_to_one(self) -> MatchingConfig:
        """Ensure scoring weights sum to 1.0 (within tolerance)."""
        weight_sum = (
            self.weight_education
            + self.weight_skills
            + self.weight_experience
            + self.weight_academic
        )
        if abs(weight_sum - 1.0) > 1e-6:
            raise ValueError(
                "Scoring weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(education={self.weight_education}, skills={self.weight_skills}, "
                f"experience={self.weight_experience}, academic={self.weight_academic})."
            )
        return self


# Singleton instance for easy import
_matching_config: MatchingConfig | None = None


def get_matching_config() -> MatchingConfig:
    """Get the matching configuration singleton."""
    global _matching_config
    if _matching_config is None:
        _matching_config = MatchingConfig()
    return _matching_config


def reset_matching_config() -> None:
    """Reset the matching configuration singleton (useful for testing)."""
    global _matching_config
    _matching_config = None
