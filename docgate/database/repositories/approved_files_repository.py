from __future__ import annotations

import psycopg
from psycopg.rows import dict_row

from docgate.approval.base import ApprovedFileQueue
from docgate.approval.exceptions import ApprovedQueueError
from docgate.approval.models import ApprovedFile
from docgate.database.connection import get_connection


class PostgresApprovedFileQueue(ApprovedFileQueue):
    """Approved-files queue backed by the approved_files_queue table."""

    def add(self, approved_file: ApprovedFile) -> ApprovedFile:
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO approved_files_queue
                    (id, document_id, file_name, file_size, chunks_count,
                     extraction_method, validation_hash, verified_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (id) DO NOTHING
                    """,
                    (
                        approved_file.id,
                        approved_file.document_id,
                        approved_file.file_name,
                        approved_file.file_size,
                        approved_file.chunks_count,
                        approved_file.extraction_method,
                        approved_file.validation_hash,
                        approved_file.verified_at,
                    ),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise ApprovedQueueError(
                f"Failed to queue approved file for document {approved_file.document_id}: {exc}"
            ) from exc
        return approved_file

    def list(self) -> list[ApprovedFile]:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, document_id, file_name, file_size, chunks_count,
                               extraction_method, validation_hash, verified_at
                        FROM approved_files_queue
                        ORDER BY verified_at
                        """
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise ApprovedQueueError(f"Failed to read approved files queue: {exc}") from exc

        return [
            ApprovedFile(
                id=str(row["id"]),
                document_id=str(row["document_id"]),
                file_name=row["file_name"],
                file_size=row["file_size"],
                chunks_count=row["chunks_count"],
                extraction_method=row["extraction_method"],
                validation_hash=row["validation_hash"],
                verified_at=row["verified_at"],
            )
            for row in rows
        ]

    def remove(self, file_id: str) -> bool:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "DELETE FROM approved_files_queue WHERE id = %s",
                        (file_id,),
                    )
                    removed = cur.rowcount > 0
                conn.commit()
        except psycopg.Error as exc:
            raise ApprovedQueueError(f"Failed to remove approved file {file_id}: {exc}") from exc
        return removed
