"""Application availability checks for job postings."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from career_match.matching.models import JobPosting

ACTIVE_STATUS = "active"


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_accepting_applications(job: JobPosting, now: datetime) -> bool:
    """Return True if the posting is active and its deadline has not passed."""
    if job.status.strip().lower() != ACTIVE_STATUS:
        return False

    if job.application_deadline is not None:
        if _as_utc(job.application_deadline) < _as_utc(now):
            return False

    return True


def accepting_applications_at(now: datetime) -> Callable[[JobPosting], bool]:
    """Build an availability predicate pinned to a single moment."""

    def _predicate(job: JobPosting) -> bool:
        return is_accepting_applications(job, now)

    return _predicate
