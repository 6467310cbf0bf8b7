"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _isolate_singletons():
    """Keep configuration and logging state from leaking between tests."""
    from career_match.config.settings import reset_settings
    from career_match.matching.config import reset_matching_config
    from career_match.utils.logging import reset_logging

    reset_settings()
    reset_matching_config()
    reset_logging()
    yield
    reset_settings()
    reset_matching_config()
    reset_logging()


@pytest.fixture
def matching_config():
    """Default matching configuration, independent of any .env file."""
    from career_match.matching.config import MatchingConfig

    return MatchingConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def sample_grades():
    """Grades of a student with a B average and three core subjects."""
    from career_match.matching.models import StudentGrades

    return StudentGrades(
        overall="B",
        points=45,
        subjects={"Mathematics": "B", "English": "C", "Science": "B"},
    )
