from typing import Any

import psycopg
from psycopg.rows import dict_row

from docgate.database.connection import get_connection
from docgate.database.models import IngestionJobRecord


class JobRepository:
    """Database operations for the document_ingestion_jobs table."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> IngestionJobRecord | None:
        """Claim the next pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, document_id, status, attempts, allow_format_override
                FROM document_ingestion_jobs
                WHERE status = 'pending'
                  AND attempts < %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()

        if row is None:
            return None

        conn.execute(
            """
            UPDATE document_ingestion_jobs
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return IngestionJobRecord(
            id=row["id"],
            document_id=str(row["document_id"]),
            status="processing",
            attempts=row["attempts"],
            allow_format_override=bool(row["allow_format_override"]),
        )

    def mark_done(self, job_id: int) -> None:
        """Mark a job as done."""
        self._set_final_status(job_id, "done", None)

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job as permanently failed."""
        self._set_final_status(job_id, "failed", error)

    def mark_rejected(self, job_id: int, reason: str) -> None:
        """Mark a job whose document was refused by the quality gate."""
        self._set_final_status(job_id, "rejected", reason)

    def increment_attempts(self, job_id: int) -> None:
        """Increment attempt count and return job to pending."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_ingestion_jobs
                SET attempts = attempts + 1, status = 'pending',
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> IngestionJobRecord | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, status, attempts, allow_format_override,
                           error_message, locked_at, created_at, updated_at
                    FROM document_ingestion_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return IngestionJobRecord(
            id=row["id"],
            document_id=str(row["document_id"]),
            status=row["status"],
            attempts=row["attempts"],
            allow_format_override=bool(row["allow_format_override"]),
            error_message=row["error_message"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _set_final_status(self, job_id: int, status: str, error: str | None) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_ingestion_jobs
                SET status = %s, error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (status, error, job_id),
            )
            conn.commit()
