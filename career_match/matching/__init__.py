"""Eligibility and job matching engine.

This module decides whether a student qualifies for a course and how well
students and jobs match, working purely on records supplied by the caller.

Public API:
    - EligibilityEvaluator: Course admission checks
    - MatchScorer: Weighted job-to-student scoring
    - MatchingOrchestrator: Ranking of jobs/students by match score
    - RecordLoader: Load records from YAML/JSON
    - MatchingConfig: Configuration settings
"""

from career_match.matching.availability import (
    accepting_applications_at,
    is_accepting_applications,
)
from career_match.matching.config import (
    MatchingConfig,
    get_matching_config,
    reset_matching_config,
)
from career_match.matching.eligibility import EligibilityEvaluator
from career_match.matching.models import (
    CourseRequirements,
    Dimension,
    DimensionScore,
    EducationLevel,
    EligibilityVerdict,
    JobPosting,
    JobRequirements,
    MatchResult,
    RankedMatch,
    RequirementCheck,
    StudentCandidate,
    StudentGrades,
    StudentProfile,
    Transcript,
)
from career_match.matching.orchestrator import MatchingOrchestrator
from career_match.matching.records import RecordLoader
from career_match.matching.scorer import MatchScorer

__all__ = [
    "EligibilityEvaluator",
    "MatchScorer",
    "MatchingOrchestrator",
    "RecordLoader",
    "MatchingConfig",
    "get_matching_config",
    "reset_matching_config",
    "is_accepting_applications",
    "accepting_applications_at",
    "StudentGrades",
    "StudentProfile",
    "Transcript",
    "CourseRequirements",
    "JobRequirements",
    "JobPosting",
    "StudentCandidate",
    "EducationLevel",
    "Dimension",
    "EligibilityVerdict",
    "RequirementCheck",
    "DimensionScore",
    "MatchResult",
    "RankedMatch",
]
