from dataclasses import dataclass


@dataclass(frozen=True)
class AiDocument:
    """Domain model for a knowledge-base document (subset of DB columns)."""

    id: str
    organization_id: str
    file_name: str
    file_path: str
    mime_type: str
    file_size: int
    uploaded_by: str | None = None
    document_type: str | None = None


@dataclass(frozen=True)
class FileValidation:
    """Outcome of pre-extraction file checks."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
