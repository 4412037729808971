from pathlib import Path

from docgate.processor.exceptions import FileReadError, InvalidFilePathError
from docgate.processor.models import AiDocument


def document_file_path(files_root: Path, file_path: str) -> Path:
    """Build path to document file: {files_root}/{file_path}

    Raises:
        InvalidFilePathError: if the stored path resolves outside *files_root*.
    """
    root = files_root.resolve()
    path = (root / file_path.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        raise InvalidFilePathError(f"Storage path escapes files root: {file_path}")
    return path


class FileLoader:
    """Resolves the local copy of a document's stored object and reads its bytes."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def load(self, document: AiDocument) -> bytes:
        """Read document bytes from disk.

        Raises:
            FileNotFoundError: if the file does not exist at resolved path.
            FileReadError: if the file exists but cannot be read.
            InvalidFilePathError: if the stored path is outside the files root.
        """
        path = document_file_path(self._files_root, document.file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc
