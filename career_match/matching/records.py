"""Loading of student, course and job records from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from career_match.matching.models import (
    CourseRequirements,
    JobPosting,
    StudentCandidate,
    StudentProfile,
    Transcript,
)


class RecordLoader:
    """Load and validate matching records stored as YAML or JSON documents."""

    def load_student(self, path: Path | str) -> StudentProfile:
        """Load a single student profile."""
        return StudentProfile.model_validate(self._load_mapping(Path(path)))

    def load_course_requirements(self, path: Path | str) -> CourseRequirements:
        """Load course requirements, either bare or nested under `requirements`."""
        data = self._load_mapping(Path(path))
        if isinstance(data.get("requirements"), dict):
            data = data["requirements"]
        return CourseRequirements.model_validate(data)

    def load_job(self, path: Path | str) -> JobPosting:
        """Load a single job posting."""
        return JobPosting.model_validate(self._load_mapping(Path(path)))

    def load_jobs(self, path: Path | str) -> list[JobPosting]:
        """Load a list of job postings."""
        return [JobPosting.model_validate(item) for item in self._load_items(Path(path))]

    def load_transcripts(self, path: Path | str) -> list[Transcript]:
        """Load a list of transcripts."""
        return [Transcript.model_validate(item) for item in self._load_items(Path(path))]

    def load_students(self, path: Path | str) -> list[StudentCandidate]:
        """Load candidate students with their transcripts."""
        return [
            StudentCandidate.model_validate(item)
            for item in self._load_items(Path(path))
        ]

    def _load_mapping(self, path: Path) -> dict:
        data = self._load(path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Record must be a mapping/dict: {path}")
        return data

    def _load_items(self, path: Path) -> list[Any]:
        """Load a list, accepting either a bare list or a mapping with `items`."""
        data = self._load(path)
        if data is None:
            return []
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            return data["items"]
        if not isinstance(data, list):
            raise ValueError(f"Records must be a list: {path}")
        return data

    def _load(self, path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"Record file not found: {path}")

        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return self._load_yaml(path)
        if suffix == ".json":
            return self._load_json(path)
        return self._load_unknown(path)

    def _load_yaml(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML record: {path}") from e

    def _load_json(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON record: {path}") from e

    def _load_unknown(self, path: Path) -> Any:
        """Auto-detect the format when the file extension is unknown."""
        raw = path.read_text(encoding="utf-8")
        raw_stripped = raw.lstrip()

        # Try JSON first if it looks like JSON, otherwise fall back to YAML.
        if raw_stripped.startswith("{") or raw_stripped.startswith("["):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass

        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid record format: {path}") from e
