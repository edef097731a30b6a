import sqlite3
import tempfile
import unittest
import sys
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.analytics import db as analytics_db
from app.core.config import settings


class AnalyticsDbTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.db_path = Path(tmp.name) / "nested" / "analytics.db"
        patcher = patch.object(
            analytics_db,
            "settings",
            replace(settings, analytics_enabled=True, analytics_db_path=str(self.db_path)),
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        analytics_db.init_db()

    def test_init_creates_database(self):
        self.assertTrue(self.db_path.exists())

    def test_summary_counts_runs_and_feedback(self):
        analytics_db.log_analysis_run(
            run_id="run-1",
            job_title="Bartender",
            company="Le Comptoir",
            overall_score=80,
            blocked=False,
            insights_source="ai",
            model="gpt-4o-mini",
            latency_ms=120,
        )
        analytics_db.log_analysis_run(
            run_id="run-2",
            job_title="Backend Engineer",
            company="Acme",
            overall_score=40,
            blocked=True,
            insights_source="fallback",
        )
        analytics_db.log_feedback(job_id="job-1", feedback_type="helpful", user_action="saved", notes=None)
        analytics_db.log_feedback(job_id="job-2", feedback_type="wrong_score", user_action=None, notes="Too low")

        summary = analytics_db.get_summary()
        self.assertTrue(summary["enabled"])
        self.assertEqual(summary["runs_total"], 2)
        self.assertEqual(summary["runs_7d"], 2)
        self.assertEqual(summary["fallback_total"], 1)
        self.assertEqual(summary["blocked_total"], 1)
        self.assertEqual(summary["average_score"], 60.0)
        self.assertEqual(summary["feedback_total"], 2)
        self.assertEqual(summary["feedback_by_type"], {"helpful": 1, "wrong_score": 1})

        latest = analytics_db.get_latest_runs(limit=1)
        self.assertEqual(latest[0]["run_id"], "run-2")

    def test_empty_summary(self):
        summary = analytics_db.get_summary()
        self.assertEqual(summary["runs_total"], 0)
        self.assertIsNone(summary["average_score"])
        self.assertEqual(summary["feedback_total"], 0)

    def test_purge_removes_expired_rows(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO analysis_runs (
                    created_at, run_id, job_title, company, overall_score, blocked, insights_source
                ) VALUES ('2000-01-01 00:00:00', 'old', 'Old', 'Old Co', 50, 0, 'ai')
                """
            )
            conn.commit()
        analytics_db.log_analysis_run(
            run_id="fresh",
            job_title="New",
            company="New Co",
            overall_score=70,
            blocked=False,
            insights_source="ai",
        )

        deleted = analytics_db.purge_old_records()
        self.assertEqual(deleted, {"analysis_runs": 1, "analysis_feedback": 0})
        self.assertEqual(analytics_db.get_summary()["runs_total"], 1)

    def test_disabled_store_is_inert(self):
        with patch.object(analytics_db, "settings", replace(settings, analytics_enabled=False)):
            self.assertEqual(analytics_db.get_summary(), {"enabled": False})
            self.assertEqual(analytics_db.get_latest_runs(), [])
            analytics_db.log_feedback(job_id="x", feedback_type="helpful", user_action=None, notes=None)
        self.assertEqual(analytics_db.get_summary()["feedback_total"], 0)


if __name__ == "__main__":
    unittest.main()
