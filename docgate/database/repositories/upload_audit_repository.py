from typing import Any

import psycopg
from psycopg.types.json import Jsonb

from docgate.database.connection import get_connection
from docgate.logging.logger import Log


class UploadAuditRepository:
    """Writes to the ai_upload_audit table.

    Audit rows are non-critical: a failed insert is logged and never
    interrupts document processing.
    """

    def record(
        self,
        *,
        organization_id: str,
        document_id: str,
        action: str,
        user_id: str | None,
        metadata: dict[str, Any],
    ) -> bool:
        """Insert one audit row. Returns False when the insert failed."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO ai_upload_audit
                    (organization_id, document_id, action, user_id, metadata)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (organization_id, document_id, action, user_id, Jsonb(metadata)),
                )
                conn.commit()
        except psycopg.Error as exc:
            Log.warning(
                f"Failed to record upload audit '{action}' for document {document_id}: {exc}"
            )
            return False
        return True
