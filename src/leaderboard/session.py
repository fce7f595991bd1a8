"""
View state for the leaderboard front end.

The view is either the job creation form (no job selected) or the detail
of one job with its upload target and leaderboard. Selecting a job and
starting a new one are the only transitions.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from shared.models import Job, LeaderboardEntry

from .api_client import AnalyzeClient
from .store import StateStore


class ViewMode(str, Enum):
    """Which screen is shown."""

    CREATE_JOB = "create_job"
    JOB_DETAIL = "job_detail"


class ViewStateError(Exception):
    """Operation not available in the current view mode."""


class ViewSession:
    """Drives the two-mode view over a StateStore."""

    def __init__(self, store: StateStore, analyze_client: Optional[AnalyzeClient] = None):
        self.store = store
        self.analyze_client = analyze_client
        self.selected_job_id: Optional[str] = None
        self.uploading = False

    @property
    def mode(self) -> ViewMode:
        if self.selected_job_id is None:
            return ViewMode.CREATE_JOB
        return ViewMode.JOB_DETAIL

    @property
    def current_job(self) -> Optional[Job]:
        if self.selected_job_id is None:
            return None
        return self.store.get_job(self.selected_job_id)

    def select_job(self, job_id: str) -> Job:
        job = self.store.get_job(job_id)
        if job is None:
            raise ViewStateError(f"Unknown job: {job_id}")
        self.selected_job_id = job.id
        return job

    def new_job(self) -> None:
        """Return to the job creation form."""
        self.selected_job_id = None

    def submit_job(self, title: str, description: str) -> Job:
        """Create a job from the form and switch to its detail view."""
        if self.mode is not ViewMode.CREATE_JOB:
            raise ViewStateError("Job creation form is not shown")
        job = self.store.create_job(title, description)
        self.selected_job_id = job.id
        return job

    def leaderboard(self) -> list[LeaderboardEntry]:
        """Entries of the selected job, empty in the creation form."""
        if self.selected_job_id is None:
            return []
        return self.store.entries_for(self.selected_job_id)

    async def upload(self, path: Path) -> LeaderboardEntry:
        """
        Analyze a CV for the selected job and append it to the leaderboard.

        Nothing is stored when the request fails.
        """
        job = self.current_job
        if job is None:
            raise ViewStateError("Select a job before uploading a CV")
        if self.analyze_client is None:
            raise ViewStateError("No analysis client configured")

        self.uploading = True
        try:
            result = await self.analyze_client.analyze(path, job.description)
        finally:
            self.uploading = False

        entry = result.to_entry(path.name)
        self.store.append_entry(job.id, entry)
        logger.debug(f"{path.name} scored {entry.score} for job {job.id}")
        return entry
