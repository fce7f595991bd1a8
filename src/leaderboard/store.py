"""
Local state for jobs and per-job leaderboards.

State lives in a flat key-value repository under two keys, `jobs` and
`leaderboard`. Each write re-serializes the whole collection; the last
writer wins.
"""

import json
import os
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger
from pydantic import ValidationError

from shared.models import Job, LeaderboardEntry

JOBS_KEY = "jobs"
LEADERBOARD_KEY = "leaderboard"


class KeyValueRepository(ABC):
    """Persistent string-keyed storage of JSON-serializable values."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""


class MemoryRepository(KeyValueRepository):
    """In-process repository (tests, throwaway sessions)."""

    def __init__(self, data: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def clear(self) -> None:
        self._data.clear()


class JsonFileRepository(KeyValueRepository):
    """All keys in one JSON file, rewritten whole on every set."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed state file {self.path}")
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            f = os.fdopen(fd, "w", encoding="utf-8")
        except BaseException:
            os.close(fd)
            os.unlink(tmp_path)
            raise
        try:
            with f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def get(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class StateStore:
    """Owns the job list and the leaderboard."""

    def __init__(
        self,
        repository: KeyValueRepository,
        clock: Callable[[], float] = time.time,
    ):
        self.repository = repository
        self.clock = clock
        self._jobs: list[Job] = []
        self._leaderboard: dict[str, list[LeaderboardEntry]] = {}

    def load(self) -> "StateStore":
        """Read both collections from the repository."""
        self._jobs = self._load_jobs()
        self._leaderboard = self._load_leaderboard()
        logger.debug(
            f"Loaded {len(self._jobs)} jobs, {len(self._leaderboard)} leaderboards"
        )
        return self

    def _load_jobs(self) -> list[Job]:
        raw = self.repository.get(JOBS_KEY) or []
        if not isinstance(raw, list):
            logger.warning("Stored jobs are not a list, starting empty")
            return []

        jobs = []
        for item in raw:
            try:
                jobs.append(Job.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid job: {e}")
        return jobs

    def _load_leaderboard(self) -> dict[str, list[LeaderboardEntry]]:
        raw = self.repository.get(LEADERBOARD_KEY) or {}
        if not isinstance(raw, dict):
            logger.warning("Stored leaderboard is not an object, starting empty")
            return {}

        leaderboard: dict[str, list[LeaderboardEntry]] = {}
        for job_id, items in raw.items():
            entries = []
            for item in items if isinstance(items, list) else []:
                try:
                    entries.append(LeaderboardEntry.model_validate(item))
                except ValidationError as e:
                    logger.warning(f"Skipping invalid entry for job {job_id}: {e}")
            leaderboard[job_id] = entries
        return leaderboard

    def _save_jobs(self) -> None:
        self.repository.set(JOBS_KEY, [job.model_dump() for job in self._jobs])

    def _save_leaderboard(self) -> None:
        self.repository.set(
            LEADERBOARD_KEY,
            {
                job_id: [entry.model_dump(by_alias=True) for entry in entries]
                for job_id, entries in self._leaderboard.items()
            },
        )

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    @property
    def jobs(self) -> list[Job]:
        return list(self._jobs)

    def get_job(self, job_id: str) -> Optional[Job]:
        return next((job for job in self._jobs if job.id == job_id), None)

    def _new_job_id(self) -> str:
        existing = {job.id for job in self._jobs}
        candidate = int(self.clock() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def create_job(self, title: str, description: str) -> Job:
        """Create a job with a time-based ID and persist the job list."""
        if not title or not title.strip():
            raise ValueError("Job title must not be empty")

        job = Job(id=self._new_job_id(), title=title, description=description)
        self._jobs.append(job)
        self._save_jobs()
        logger.info(f"Created job {job.id}: {job.title}")
        return job

    # -------------------------------------------------------------------------
    # Leaderboard
    # -------------------------------------------------------------------------

    @property
    def leaderboard(self) -> dict[str, list[LeaderboardEntry]]:
        return {job_id: list(entries) for job_id, entries in self._leaderboard.items()}

    def entries_for(self, job_id: str) -> list[LeaderboardEntry]:
        """Entries for a job in submission order."""
        return list(self._leaderboard.get(job_id, []))

    def append_entry(self, job_id: str, entry: LeaderboardEntry) -> list[LeaderboardEntry]:
        """Append an analysis result and persist the whole leaderboard."""
        if self.get_job(job_id) is None:
            raise ValueError(f"Unknown job: {job_id}")

        self._leaderboard.setdefault(job_id, []).append(entry)
        self._save_leaderboard()
        logger.info(f"Added {entry.file_name} to job {job_id} (score: {entry.score})")
        return self.entries_for(job_id)

    def clear(self) -> None:
        """Drop all jobs and leaderboards."""
        self.repository.clear()
        self._jobs = []
        self._leaderboard = {}
