import hashlib
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docgate.chunking.models import TextChunk
from docgate.database.connection import get_connection
from docgate.processor.exceptions import DocumentNotFoundError
from docgate.processor.models import AiDocument
from docgate.quality.models import QualityReport


def chunk_row_metadata(
    document: AiDocument, chunk: TextChunk, total_chunks: int
) -> dict[str, Any]:
    """JSONB metadata stored alongside each chunk row."""
    return {
        "chunk_length": len(chunk.content),
        "position_in_document": round(chunk.index / total_chunks, 4),
        "document_type": document.document_type or "unknown",
        "file_type": document.mime_type or "unknown",
        "window_start": chunk.start,
        "window_end": chunk.end,
    }


def quality_payload(report: QualityReport) -> dict[str, Any]:
    """Subset of a quality report stored under ai_documents.metadata."""
    return {
        "quality_gate": {
            "quality_score": report.metrics.quality_score,
            "validation_hash": report.validation_hash,
            "passes_validation": report.decision.passes_validation,
            "format_only_violation": report.decision.format_only_violation,
            "detected_issues": list(report.metrics.detected_issues),
            "warnings": list(report.decision.warnings),
            "character_count": report.metrics.character_count,
            "word_count": report.metrics.word_count,
            "has_bullets": report.metrics.has_bullets,
            "has_headings": report.metrics.has_headings,
            "preview": report.preview,
        }
    }


class AiDocumentsRepository:
    """Database operations for the ai_documents and ai_document_chunks tables."""

    def find_by_id(self, document_id: str) -> AiDocument:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, organization_id, file_name, file_path, mime_type,
                           file_size, uploaded_by, document_type
                    FROM ai_documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return AiDocument(
            id=str(row["id"]),
            organization_id=str(row["organization_id"]),
            file_name=row["file_name"],
            file_path=row["file_path"],
            mime_type=row["mime_type"],
            file_size=row["file_size"],
            uploaded_by=str(row["uploaded_by"]) if row["uploaded_by"] is not None else None,
            document_type=row["document_type"],
        )

    def update_processing_status(
        self,
        document_id: str,
        status: str,
        error_message: str | None = None,
    ) -> None:
        """Set processing_status (pending, processing, completed, failed).

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE ai_documents
                    SET processing_status = %s,
                        processing_error = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (status, error_message, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def update_quality_result(self, document_id: str, report: QualityReport) -> None:
        """Merge the quality gate outcome into ai_documents.metadata.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE ai_documents
                    SET metadata = COALESCE(metadata, '{}'::jsonb) || %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (Jsonb(quality_payload(report)), document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def replace_chunks(self, document: AiDocument, chunks: list[TextChunk]) -> int:
        """Replace every chunk row of *document* in one transaction.

        Returns:
            Number of chunk rows written.
        """
        rows = [
            (
                document.id,
                document.organization_id,
                chunk.index,
                chunk.content,
                hashlib.sha256(chunk.content.encode("utf-8")).hexdigest(),
                Jsonb(chunk_row_metadata(document, chunk, len(chunks))),
            )
            for chunk in chunks
        ]
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM ai_document_chunks WHERE document_id = %s",
                    (document.id,),
                )
                cur.executemany(
                    """
                    INSERT INTO ai_document_chunks
                    (document_id, organization_id, chunk_index, content,
                     content_hash, metadata)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    rows,
                )
            conn.commit()
        return len(rows)

    def mark_completed(self, document_id: str, total_chunks: int) -> None:
        """Mark a document completed with its chunk count.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE ai_documents
                    SET processing_status = 'completed',
                        processing_error = NULL,
                        total_chunks = %s,
                        processed_at = NOW(),
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (total_chunks, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
