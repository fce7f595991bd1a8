"""
Unit tests for the two-mode view session.
"""

import tempfile
import unittest
from pathlib import Path

from leaderboard.api_client import AnalyzeRequestError
from leaderboard.session import ViewMode, ViewSession, ViewStateError
from leaderboard.store import MemoryRepository, StateStore
from shared.models import AnalysisResult


class FakeAnalyzeClient:
    """Returns queued results, or raises when the queue holds an exception."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: list[tuple[str, str]] = []

    async def analyze(self, path: Path, job_description: str) -> AnalysisResult:
        self.calls.append((path.name, job_description))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestViewSession(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.cv_path = Path(self._tmp.name) / "jane.pdf"
        self.cv_path.write_bytes(b"%PDF-1.4")
        self.store = StateStore(MemoryRepository()).load()

    def tearDown(self):
        self._tmp.cleanup()

    def test_starts_in_creation_form(self):
        session = ViewSession(self.store)
        self.assertIs(session.mode, ViewMode.CREATE_JOB)
        self.assertIsNone(session.current_job)
        self.assertEqual(session.leaderboard(), [])

    def test_submit_job_selects_it(self):
        session = ViewSession(self.store)
        job = session.submit_job("Backend", "Go")

        self.assertIs(session.mode, ViewMode.JOB_DETAIL)
        self.assertEqual(session.current_job, job)

    def test_transitions(self):
        session = ViewSession(self.store)
        first = session.submit_job("First", "")
        session.new_job()
        self.assertIs(session.mode, ViewMode.CREATE_JOB)

        second = session.submit_job("Second", "")
        session.select_job(first.id)
        self.assertEqual(session.current_job, first)
        session.select_job(second.id)
        self.assertEqual(session.current_job, second)

    def test_submit_requires_creation_form(self):
        session = ViewSession(self.store)
        session.submit_job("Backend", "Go")
        with self.assertRaises(ViewStateError):
            session.submit_job("Another", "")

    def test_select_unknown_job(self):
        session = ViewSession(self.store)
        with self.assertRaises(ViewStateError):
            session.select_job("missing")
        self.assertIs(session.mode, ViewMode.CREATE_JOB)

    async def test_upload_requires_selected_job(self):
        session = ViewSession(self.store, FakeAnalyzeClient())
        with self.assertRaises(ViewStateError):
            await session.upload(self.cv_path)

    async def test_upload_appends_entries_in_order(self):
        client = FakeAnalyzeClient(
            AnalysisResult(match_score=85, profile_summary="Good fit."),
            AnalysisResult(match_score=40, profile_summary="Weak fit."),
        )
        session = ViewSession(self.store, client)
        job = session.submit_job("Backend", "Senior backend engineer")

        await session.upload(self.cv_path)
        await session.upload(self.cv_path)

        self.assertEqual([e.score for e in session.leaderboard()], [85, 40])
        self.assertEqual(session.leaderboard()[0].file_name, "jane.pdf")
        self.assertEqual(client.calls[0], ("jane.pdf", "Senior backend engineer"))
        self.assertEqual(len(self.store.entries_for(job.id)), 2)
        self.assertFalse(session.uploading)

    async def test_failed_upload_stores_nothing(self):
        client = FakeAnalyzeClient(AnalyzeRequestError("500: File parse error", 500))
        session = ViewSession(self.store, client)
        session.submit_job("Backend", "Go")

        with self.assertRaises(AnalyzeRequestError):
            await session.upload(self.cv_path)

        self.assertEqual(session.leaderboard(), [])
        self.assertFalse(session.uploading)


if __name__ == "__main__":
    unittest.main()
