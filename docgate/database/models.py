from dataclasses import dataclass
from datetime import datetime


@dataclass
class IngestionJobRecord:
    """Represents a row from the document_ingestion_jobs table."""

    id: int
    document_id: str
    status: str
    attempts: int
    allow_format_override: bool = False
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
