"""career-match: eligibility and job matching engine for student careers."""

__version__ = "0.1.0"
