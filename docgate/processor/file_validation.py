from docgate.extraction.factory import SUPPORTED_MIME_TYPES
from docgate.processor.models import AiDocument, FileValidation

MAX_FILE_NAME_LENGTH = 255


def validate_file(document: AiDocument, max_size_bytes: int) -> FileValidation:
    """Check size and type before any extraction work is done."""
    errors: list[str] = []
    warnings: list[str] = []

    if document.file_size > max_size_bytes:
        errors.append(
            f"File size ({document.file_size / 1024 / 1024:.1f}MB) exceeds "
            f"{max_size_bytes / 1024 / 1024:.0f}MB limit"
        )
    if document.mime_type.split(";", 1)[0].strip().lower() not in SUPPORTED_MIME_TYPES:
        errors.append(f"Unsupported file type: {document.mime_type}")
    if len(document.file_name) > MAX_FILE_NAME_LENGTH:
        warnings.append("File name is very long and may be truncated")

    return FileValidation(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
