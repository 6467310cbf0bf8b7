"""Main entry point for career-match."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from career_match import __version__
from career_match.config.settings import Settings
from career_match.utils.logging import configure_logging


def _score_value(value: str) -> float:
    score = float(value)
    if not (0.0 <= score <= 100.0):
        raise argparse.ArgumentTypeError("--min-score must be between 0 and 100")
    return score


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("--limit must be a positive integer")
    return number


def _dump_json(payload: object, out: Path | None) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    text = json.dumps(payload, indent=2, default=_default)
    if out is None:
        print(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")
    print(f"Wrote: {out}")


def _add_out_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the JSON result to this file instead of stdout",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="career-match",
        description="career-match: course eligibility and job matching for students",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m career_match eligibility --student student.yaml --course course.yaml
  python -m career_match rank-jobs --student student.yaml --jobs jobs.json --open-only
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    eligibility_parser = subparsers.add_parser(
        "eligibility",
        help="Check a student against course admission requirements",
    )
    eligibility_parser.add_argument(
        "--student", type=Path, required=True, help="Student profile (YAML/JSON)"
    )
    eligibility_parser.add_argument(
        "--course",
        type=Path,
        required=True,
        help="Course or course requirements (YAML/JSON)",
    )
    eligibility_parser.add_argument(
        "--breakdown",
        action="store_true",
        help="Include the per-requirement qualification breakdown",
    )
    _add_out_argument(eligibility_parser)

    match_parser = subparsers.add_parser(
        "match",
        help="Score a single student against a single job",
    )
    match_parser.add_argument(
        "--student", type=Path, required=True, help="Student profile (YAML/JSON)"
    )
    match_parser.add_argument(
        "--job", type=Path, required=True, help="Job posting (YAML/JSON)"
    )
    match_parser.add_argument(
        "--transcripts",
        type=Path,
        default=None,
        help="Transcript list for the student (YAML/JSON)",
    )
    _add_out_argument(match_parser)

    rank_jobs_parser = subparsers.add_parser(
        "rank-jobs",
        help="Rank job postings for a student",
    )
    rank_jobs_parser.add_argument(
        "--student", type=Path, required=True, help="Student profile (YAML/JSON)"
    )
    rank_jobs_parser.add_argument(
        "--jobs", type=Path, required=True, help="Job posting list (YAML/JSON)"
    )
    rank_jobs_parser.add_argument(
        "--transcripts",
        type=Path,
        default=None,
        help="Transcript list for the student (YAML/JSON)",
    )
    rank_jobs_parser.add_argument(
        "--min-score",
        type=_score_value,
        default=None,
        help="Minimum match score (defaults to MATCHING_MIN_MATCH_SCORE)",
    )
    rank_jobs_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Maximum number of jobs (defaults to MATCHING_JOB_MATCH_LIMIT)",
    )
    rank_jobs_parser.add_argument(
        "--open-only",
        action="store_true",
        help="Skip postings that are inactive or past their deadline",
    )
    _add_out_argument(rank_jobs_parser)

    rank_students_parser = subparsers.add_parser(
        "rank-students",
        help="Rank candidate students for a job",
    )
    rank_students_parser.add_argument(
        "--job", type=Path, required=True, help="Job posting (YAML/JSON)"
    )
    rank_students_parser.add_argument(
        "--students",
        type=Path,
        required=True,
        help="Candidate list: entries with `profile` and `transcripts` (YAML/JSON)",
    )
    rank_students_parser.add_argument(
        "--min-score",
        type=_score_value,
        default=None,
        help="Minimum match score (defaults to MATCHING_MIN_MATCH_SCORE)",
    )
    rank_students_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Maximum number of students (defaults to MATCHING_STUDENT_MATCH_LIMIT)",
    )
    _add_out_argument(rank_students_parser)

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"career-match v{__version__} running {parsed.mode}")

    from career_match.matching.records import RecordLoader

    loader = RecordLoader()

    try:
        if parsed.mode == "eligibility":
            from career_match.matching.eligibility import EligibilityEvaluator

            student = loader.load_student(parsed.student)
            requirements = loader.load_course_requirements(parsed.course)

            evaluator = EligibilityEvaluator()
            payload: dict = {
                "eligibility": evaluator.evaluate_student(student, requirements)
            }
            if parsed.breakdown:
                payload["breakdown"] = evaluator.breakdown_student(
                    student, requirements
                )
            _dump_json(payload, parsed.out)
            return 0

        if parsed.mode == "match":
            from career_match.matching.scorer import MatchScorer

            student = loader.load_student(parsed.student)
            job = loader.load_job(parsed.job)
            transcripts = (
                loader.load_transcripts(parsed.transcripts)
                if parsed.transcripts
                else []
            )

            result = MatchScorer().score(student, transcripts, job.requirements)
            _dump_json({"job_id": job.id, "match": result}, parsed.out)
            return 0

        if parsed.mode == "rank-jobs":
            from career_match.matching.availability import accepting_applications_at
            from career_match.matching.orchestrator import MatchingOrchestrator

            student = loader.load_student(parsed.student)
            jobs = loader.load_jobs(parsed.jobs)
            transcripts = (
                loader.load_transcripts(parsed.transcripts)
                if parsed.transcripts
                else []
            )
            is_open = (
                accepting_applications_at(datetime.now(UTC))
                if parsed.open_only
                else None
            )

            ranked = MatchingOrchestrator().rank_jobs_for_student(
                student,
                transcripts,
                jobs,
                min_score=parsed.min_score,
                limit=parsed.limit,
                is_open=is_open,
            )
            _dump_json({"matches": ranked}, parsed.out)
            return 0

        if parsed.mode == "rank-students":
            from career_match.matching.orchestrator import MatchingOrchestrator

            job = loader.load_job(parsed.job)
            candidates = loader.load_students(parsed.students)

            ranked = MatchingOrchestrator().rank_students_for_job(
                job,
                candidates,
                min_score=parsed.min_score,
                limit=parsed.limit,
            )
            _dump_json({"matches": ranked}, parsed.out)
            return 0
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to run {parsed.mode}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
