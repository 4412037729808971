import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class ApprovedFile:
    """A document that passed the gate and was chunked, awaiting release."""

    document_id: str
    file_name: str
    file_size: int
    chunks_count: int
    extraction_method: str
    validation_hash: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    verified_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
