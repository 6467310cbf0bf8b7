"""Ranking of jobs for a student and of students for a job."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matchers import average_verified_gpa
from career_match.matching.models import (
    JobPosting,
    RankedMatch,
    StudentCandidate,
    StudentProfile,
    Transcript,
)
from career_match.matching.scorer import MatchScorer
from career_match.utils.logging import get_logger

logger = get_logger(__name__)


class MatchingOrchestrator:
    """Score a candidate set, keep strong matches, and rank them.

    Candidates are supplied by the caller; nothing here fetches records or
    reads the clock. Availability is decided by an injected predicate.
    """

    def __init__(
        self,
        config: MatchingConfig | None = None,
        scorer: MatchScorer | None = None,
    ) -> None:
        self.config = config or get_matching_config()
        self.scorer = scorer or MatchScorer(config=self.config)

    def rank_jobs_for_student(
        self,
        student: StudentProfile,
        transcripts: Sequence[Transcript] | None,
        candidate_jobs: Sequence[JobPosting],
        min_score: float | None = None,
        limit: int | None = None,
        is_open: Callable[[JobPosting], bool] | None = None,
    ) -> list[RankedMatch]:
        """Return the best-matching open jobs for a student, highest first."""
        if student is None:
            raise ValueError("student profile is required")
        min_score = self.config.min_match_score if min_score is None else min_score
        limit = self.config.job_match_limit if limit is None else limit
        transcripts = list(transcripts or [])

        matches: list[RankedMatch] = []
        for job in candidate_jobs:
            if is_open is not None and not is_open(job):
                logger.debug("Skipping job %s: not accepting applications", job.id)
                continue

            result = self.scorer.score(student, transcripts, job.requirements)
            if result.score >= min_score:
                matches.append(RankedMatch(candidate=job, result=result))

        ranked = _rank(matches, limit)
        logger.info(
            "Ranked %d of %d jobs for student %s (min_score=%s)",
            len(ranked),
            len(candidate_jobs),
            student.id,
            min_score,
        )
        return ranked

    def rank_students_for_job(
        self,
        job: JobPosting,
        candidate_students: Sequence[StudentCandidate],
        min_score: float | None = None,
        limit: int | None = None,
        include: Callable[[StudentCandidate], bool] | None = None,
    ) -> list[RankedMatch]:
        """Return the best-matching students for a job, highest first."""
        if job is None:
            raise ValueError("job posting is required")
        min_score = self.config.min_match_score if min_score is None else min_score
        limit = self.config.student_match_limit if limit is None else limit

        matches: list[RankedMatch] = []
        for candidate in candidate_students:
            if include is not None and not include(candidate):
                logger.debug("Skipping student %s: excluded", candidate.profile.id)
                continue

            result = self.scorer.score(
                candidate.profile, candidate.transcripts, job.requirements
            )
            if result.score >= min_score:
                matches.append(
                    RankedMatch(
                        candidate=candidate,
                        result=result,
                        has_transcripts=bool(candidate.transcripts),
                        average_gpa=average_verified_gpa(
                            candidate.transcripts,
                            from_courses=self.config.gpa_from_courses,
                        )
                        or 0.0,
                    )
                )

        ranked = _rank(matches, limit)
        logger.info(
            "Ranked %d of %d students for job %s (min_score=%s)",
            len(ranked),
            len(candidate_students),
            job.id,
            min_score,
        )
        return ranked


def _rank(matches: list[RankedMatch], limit: int) -> list[RankedMatch]:
    # sorted() is stable: equal scores keep their input order.
    ranked = sorted(matches, key=lambda m: m.score, reverse=True)
    return ranked[: max(0, limit)]
