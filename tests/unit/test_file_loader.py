from pathlib import Path

import pytest

from docgate.processor.exceptions import InvalidFilePathError
from docgate.processor.file_loader import FileLoader, document_file_path
from docgate.processor.models import AiDocument


def _make_document(file_path: str = "org-1/policy.pdf") -> AiDocument:
    return AiDocument(
        id="doc-1",
        organization_id="org-1",
        file_name="policy.pdf",
        file_path=file_path,
        mime_type="application/pdf",
        file_size=1024,
    )


class TestDocumentFilePath:
    def test_joins_under_root(self, tmp_path: Path) -> None:
        assert document_file_path(tmp_path, "org-1/a.pdf") == tmp_path.resolve() / "org-1" / "a.pdf"

    def test_leading_slash_stays_under_root(self, tmp_path: Path) -> None:
        assert document_file_path(tmp_path, "/org-1/a.pdf") == tmp_path.resolve() / "org-1" / "a.pdf"

    def test_rejects_traversal(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidFilePathError, match="escapes"):
            document_file_path(tmp_path, "../../etc/passwd")


class TestLoadReturnsBytes:
    def test_returns_file_bytes(self, tmp_path: Path) -> None:
        (tmp_path / "org-1").mkdir()
        (tmp_path / "org-1" / "policy.pdf").write_bytes(b"%PDF test content")

        result = FileLoader(files_root=tmp_path).load(_make_document())

        assert result == b"%PDF test content"

    def test_reads_file_by_stored_path(self, tmp_path: Path) -> None:
        (tmp_path / "other.txt").write_bytes(b"other")

        result = FileLoader(files_root=tmp_path).load(_make_document("other.txt"))

        assert result == b"other"


class TestLoadRaises:
    def test_raises_file_not_found(self, tmp_path: Path) -> None:
        loader = FileLoader(files_root=tmp_path)

        with pytest.raises(FileNotFoundError, match="missing"):
            loader.load(_make_document("missing.pdf"))

    def test_raises_for_path_outside_root(self, tmp_path: Path) -> None:
        loader = FileLoader(files_root=tmp_path / "root")

        with pytest.raises(InvalidFilePathError):
            loader.load(_make_document("../secret.pdf"))
