from docgate.extraction.factory import DOCX_MIME_TYPE
from docgate.processor.file_validation import MAX_FILE_NAME_LENGTH, validate_file
from docgate.processor.models import AiDocument

MAX_SIZE = 50 * 1024 * 1024


def _make_document(**overrides: object) -> AiDocument:
    values: dict[str, object] = {
        "id": "doc-1",
        "organization_id": "org-1",
        "file_name": "policy.docx",
        "file_path": "org-1/policy.docx",
        "mime_type": DOCX_MIME_TYPE,
        "file_size": 2048,
    }
    values.update(overrides)
    return AiDocument(**values)  # type: ignore[arg-type]


class TestValidateFile:
    def test_valid_document(self) -> None:
        result = validate_file(_make_document(), MAX_SIZE)
        assert result.is_valid
        assert result.errors == ()
        assert result.warnings == ()

    def test_size_at_limit_is_valid(self) -> None:
        assert validate_file(_make_document(file_size=MAX_SIZE), MAX_SIZE).is_valid

    def test_oversized_file(self) -> None:
        result = validate_file(_make_document(file_size=60 * 1024 * 1024), MAX_SIZE)
        assert not result.is_valid
        assert result.errors == ("File size (60.0MB) exceeds 50MB limit",)

    def test_unsupported_type(self) -> None:
        result = validate_file(_make_document(mime_type="image/png"), MAX_SIZE)
        assert not result.is_valid
        assert result.errors == ("Unsupported file type: image/png",)

    def test_mime_parameters_are_ignored(self) -> None:
        result = validate_file(_make_document(mime_type="text/plain; charset=utf-8"), MAX_SIZE)
        assert result.is_valid

    def test_long_file_name_only_warns(self) -> None:
        name = "x" * (MAX_FILE_NAME_LENGTH + 1) + ".pdf"
        result = validate_file(_make_document(file_name=name), MAX_SIZE)
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_collects_every_error(self) -> None:
        result = validate_file(
            _make_document(file_size=MAX_SIZE + 1, mime_type="application/zip"), MAX_SIZE
        )
        assert len(result.errors) == 2
