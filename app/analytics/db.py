from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from app.core.config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _get_db_path() -> Path:
    return Path(settings.analytics_db_path)


def init_db() -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_runs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                run_id TEXT NOT NULL,
                job_title TEXT,
                company TEXT,
                overall_score INTEGER NOT NULL,
                blocked INTEGER NOT NULL,
                insights_source TEXT NOT NULL,
                model TEXT,
                latency_ms INTEGER
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_analysis_runs_created_at
            ON analysis_runs (created_at)
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_feedback (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                job_id TEXT NOT NULL,
                feedback_type TEXT NOT NULL,
                user_action TEXT,
                notes TEXT
            )
            """
        )
        conn.commit()
    purge_old_records()


def log_analysis_run(
    *,
    run_id: str,
    job_title: str | None,
    company: str | None,
    overall_score: int,
    blocked: bool,
    insights_source: str,
    model: str | None = None,
    latency_ms: int | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO analysis_runs (
                created_at, run_id, job_title, company, overall_score, blocked,
                insights_source, model, latency_ms
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                run_id,
                job_title,
                company,
                int(overall_score),
                1 if blocked else 0,
                insights_source,
                model,
                latency_ms,
            ),
        )
        conn.commit()


def log_feedback(
    *,
    job_id: str,
    feedback_type: str,
    user_action: str | None,
    notes: str | None,
) -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO analysis_feedback (
                created_at, job_id, feedback_type, user_action, notes
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (_utc_now(), job_id, feedback_type, user_action, notes),
        )
        conn.commit()


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {"analysis_runs": 0, "analysis_feedback": 0}

    db_path = _get_db_path()
    runs_retention = max(1, int(settings.analytics_retention_days))
    feedback_retention = max(1, int(settings.feedback_retention_days))

    deleted = {"analysis_runs": 0, "analysis_feedback": 0}
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute(
            "DELETE FROM analysis_runs WHERE created_at < datetime('now', ?)",
            (f"-{runs_retention} days",),
        )
        deleted["analysis_runs"] = int(cur.rowcount or 0)

        cur = conn.execute(
            "DELETE FROM analysis_feedback WHERE created_at < datetime('now', ?)",
            (f"-{feedback_retention} days",),
        )
        deleted["analysis_feedback"] = int(cur.rowcount or 0)
        conn.commit()

    return deleted


def _row_to_dict(cursor: sqlite3.Cursor, row: tuple) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def get_summary() -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute(
            """
            SELECT
                COUNT(*) AS runs_total,
                COALESCE(SUM(CASE WHEN insights_source = 'fallback' THEN 1 ELSE 0 END), 0) AS fallback_total,
                COALESCE(SUM(blocked), 0) AS blocked_total,
                AVG(overall_score) AS average_score
            FROM analysis_runs
            """
        )
        runs = _row_to_dict(cur, cur.fetchone())
        cur = conn.execute(
            """
            SELECT COUNT(*)
            FROM analysis_runs
            WHERE created_at >= datetime('now', '-7 days')
            """
        )
        runs_7d = cur.fetchone()[0]
        cur = conn.execute(
            """
            SELECT feedback_type, COUNT(*) AS count
            FROM analysis_feedback
            GROUP BY feedback_type
            ORDER BY feedback_type
            """
        )
        feedback_by_type = {row[0]: row[1] for row in cur.fetchall()}

    average = runs["average_score"]
    return {
        "enabled": True,
        "runs_total": runs["runs_total"],
        "runs_7d": runs_7d,
        "fallback_total": runs["fallback_total"],
        "blocked_total": runs["blocked_total"],
        "average_score": round(average, 1) if average is not None else None,
        "feedback_total": sum(feedback_by_type.values()),
        "feedback_by_type": feedback_by_type,
    }


def get_latest_runs(limit: int = 20) -> list[dict[str, Any]]:
    if not settings.analytics_enabled:
        return []
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute(
            """
            SELECT created_at, run_id, job_title, company, overall_score, blocked, insights_source, model
            FROM analysis_runs
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = cur.fetchall()
        return [_row_to_dict(cur, row) for row in rows]
