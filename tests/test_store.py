"""
Unit tests for the local job/leaderboard store.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from leaderboard.store import (
    JOBS_KEY,
    LEADERBOARD_KEY,
    JsonFileRepository,
    MemoryRepository,
    StateStore,
)
from shared.models import LeaderboardEntry


def fixed_clock(value: float = 1718000000.5):
    return lambda: value


class TestStateStore(unittest.TestCase):

    def setUp(self):
        self.repository = MemoryRepository()
        self.store = StateStore(self.repository, clock=fixed_clock()).load()

    def test_create_job_round_trip(self):
        job = self.store.create_job("Backend Engineer", "  Go, 5y experience\n")

        reloaded = StateStore(self.repository).load()
        fetched = reloaded.get_job(job.id)

        self.assertEqual(fetched, job)
        self.assertEqual(fetched.title, "Backend Engineer")
        self.assertEqual(fetched.description, "  Go, 5y experience\n")

    def test_job_id_is_time_based(self):
        job = self.store.create_job("A", "")
        self.assertEqual(job.id, "1718000000500")

    def test_job_ids_are_unique_within_same_millisecond(self):
        ids = [self.store.create_job(f"Job {i}", "").id for i in range(3)]
        self.assertEqual(ids, ["1718000000500", "1718000000501", "1718000000502"])

    def test_blank_title_rejected(self):
        with self.assertRaises(ValueError):
            self.store.create_job("   ", "description")
        self.assertEqual(self.store.jobs, [])

    def test_append_preserves_submission_order(self):
        job = self.store.create_job("Backend", "Go")
        for i in range(5):
            self.store.append_entry(
                job.id, LeaderboardEntry(file_name=f"cv{i}.pdf", score=90 - i * 10, summary="")
            )

        reloaded = StateStore(self.repository).load()
        names = [entry.file_name for entry in reloaded.entries_for(job.id)]
        self.assertEqual(names, [f"cv{i}.pdf" for i in range(5)])

    def test_leaderboards_are_per_job(self):
        first = self.store.create_job("First", "")
        second = self.store.create_job("Second", "")
        self.store.append_entry(first.id, LeaderboardEntry(file_name="a.pdf", score=10))

        self.assertEqual(len(self.store.entries_for(first.id)), 1)
        self.assertEqual(self.store.entries_for(second.id), [])

    def test_append_to_unknown_job(self):
        with self.assertRaises(ValueError):
            self.store.append_entry("missing", LeaderboardEntry(file_name="a.pdf"))

    def test_storage_format(self):
        job = self.store.create_job("Backend", "Go")
        self.store.append_entry(
            job.id, LeaderboardEntry(file_name="jane.pdf", score=85, summary="Good fit.")
        )

        self.assertEqual(
            self.repository.get(JOBS_KEY),
            [{"id": job.id, "title": "Backend", "description": "Go"}],
        )
        self.assertEqual(
            self.repository.get(LEADERBOARD_KEY),
            {job.id: [{"fileName": "jane.pdf", "score": 85, "summary": "Good fit."}]},
        )

    def test_invalid_stored_values_load_empty(self):
        repository = MemoryRepository({JOBS_KEY: {"not": "a list"}, LEADERBOARD_KEY: [1, 2]})
        store = StateStore(repository).load()
        self.assertEqual(store.jobs, [])
        self.assertEqual(store.leaderboard, {})

    def test_invalid_items_are_skipped(self):
        repository = MemoryRepository(
            {
                JOBS_KEY: [{"id": "1", "title": "Ok"}, {"title": "no id"}],
                LEADERBOARD_KEY: {"1": [{"fileName": "a.pdf", "score": 5}, {"score": 1}]},
            }
        )
        store = StateStore(repository).load()
        self.assertEqual([job.id for job in store.jobs], ["1"])
        self.assertEqual(len(store.entries_for("1")), 1)

    def test_clear(self):
        job = self.store.create_job("Backend", "Go")
        self.store.append_entry(job.id, LeaderboardEntry(file_name="a.pdf"))

        self.store.clear()

        self.assertEqual(self.store.jobs, [])
        self.assertEqual(StateStore(self.repository).load().jobs, [])


class TestJsonFileRepository(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "state" / "leaderboard.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_persists_across_instances(self):
        store = StateStore(JsonFileRepository(self.path)).load()
        job = store.create_job("Backend", "Go")
        store.append_entry(job.id, LeaderboardEntry(file_name="a.docx", score=70))

        reloaded = StateStore(JsonFileRepository(self.path)).load()

        self.assertEqual(reloaded.jobs, [job])
        self.assertEqual(reloaded.entries_for(job.id)[0].score, 70)
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(set(data), {JOBS_KEY, LEADERBOARD_KEY})

    def test_missing_file(self):
        repository = JsonFileRepository(self.path)
        self.assertIsNone(repository.get(JOBS_KEY))

    def test_corrupt_file(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        self.assertIsNone(JsonFileRepository(self.path).get(JOBS_KEY))

    def test_clear_removes_file(self):
        repository = JsonFileRepository(self.path)
        repository.set("jobs", [])
        self.assertTrue(self.path.exists())

        repository.clear()

        self.assertFalse(self.path.exists())

    def test_failed_open_closes_descriptor_and_removes_temp_file(self):
        repository = JsonFileRepository(self.path)

        with mock.patch("leaderboard.store.os.fdopen", side_effect=OSError("no handle")), \
                mock.patch("leaderboard.store.os.close", wraps=os.close) as close:
            with self.assertRaises(OSError):
                repository.set(JOBS_KEY, [])

        close.assert_called_once()
        self.assertEqual(list(self.path.parent.iterdir()), [])
        self.assertFalse(self.path.exists())


if __name__ == "__main__":
    unittest.main()
