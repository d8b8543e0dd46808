from typing import Any

import psycopg
from psycopg.rows import dict_row

from findoc.database.connection import get_connection
from findoc.database.models import JobRecord

_JOB_COLUMNS = (
    "id, document_id, status, attempts, error_message, locked_at, created_at, updated_at"
)


class JobRepository:
    """Queue operations on extraction_jobs.

    Status flow: pending -> processing -> done | failed, with processing
    returning to pending on a retry or a cancelled run.
    """

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Lock the oldest claimable job and move it to processing in one statement.

        Concurrent workers skip rows already locked by another claim.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                UPDATE extraction_jobs
                SET status = 'processing', locked_at = NOW(), updated_at = NOW()
                WHERE id = (
                    SELECT id FROM extraction_jobs
                    WHERE status = 'pending' AND attempts < %s
                    ORDER BY created_at
                    LIMIT 1
                    FOR UPDATE SKIP LOCKED
                )
                RETURNING {_JOB_COLUMNS}
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()
        conn.commit()
        return JobRecord(**row) if row is not None else None

    def mark_done(self, job_id: int) -> None:
        self._update(job_id, "status = 'done', error_message = NULL")

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job as permanently failed."""
        self._update(job_id, "status = 'failed', error_message = %s", error)

    def increment_attempts(self, job_id: int) -> None:
        """Count a failed attempt and put the job back in the queue."""
        self._update(
            job_id, "attempts = attempts + 1, status = 'pending', locked_at = NULL"
        )

    def release(self, job_id: int) -> None:
        """Return a cancelled job to pending without counting an attempt."""
        self._update(job_id, "status = 'pending', locked_at = NULL")

    def find_by_id(self, job_id: int) -> JobRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_JOB_COLUMNS} FROM extraction_jobs WHERE id = %s",
                    (job_id,),
                )
                row = cur.fetchone()
        return JobRecord(**row) if row is not None else None

    @staticmethod
    def _update(job_id: int, assignments: str, *params: object) -> None:
        with get_connection() as conn:
            conn.execute(
                f"UPDATE extraction_jobs SET {assignments}, updated_at = NOW() WHERE id = %s",
                (*params, job_id),
            )
            conn.commit()
