from docgate.approval.base import ApprovedFileQueue
from docgate.approval.models import ApprovedFile
from docgate.chunking.splitter import split_into_windows
from docgate.config.settings import Settings
from docgate.database.repositories.ai_documents_repository import AiDocumentsRepository
from docgate.database.repositories.upload_audit_repository import UploadAuditRepository
from docgate.extraction.factory import TEXT_MIME_TYPES, ExtractorFactory
from docgate.logging.logger import Log
from docgate.processor.exceptions import DocumentRejectedError, InvalidDocumentFileError
from docgate.processor.file_loader import FileLoader
from docgate.processor.file_validation import validate_file
from docgate.processor.models import AiDocument
from docgate.processor.pipeline import PipelineContext, PipelineStep
from docgate.quality.gate import sanitize_and_score
from docgate.quality.models import QualityReport

PREVIEW_SNIPPET_LENGTH = 200


def _require_document(context: PipelineContext) -> AiDocument:
    if context.document is None:
        raise ValueError("PipelineContext.document must be set before this step")
    return context.document


def _require_report(context: PipelineContext) -> QualityReport:
    if context.report is None:
        raise ValueError("PipelineContext.report must be set before this step")
    return context.report


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: AiDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_processing_status(context.document_id, "processing")
        Log.info(f"Document {context.document_id} marked as processing", job_id=context.job_id)
        return context


class MarkFailedStep(PipelineStep):
    def __init__(
        self,
        doc_repo: AiDocumentsRepository,
        audit_repo: UploadAuditRepository,
    ) -> None:
        self._doc_repo = doc_repo
        self._audit_repo = audit_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(
            f"Document {context.document_id} failed: {context.error_message}",
            job_id=context.job_id,
        )
        document = context.document
        if document is None:
            # Nothing was loaded, so there is no row to mark.
            return context
        self._doc_repo.update_processing_status(
            document.id, "failed", error_message=context.error_message
        )
        self._audit_repo.record(
            organization_id=document.organization_id,
            document_id=document.id,
            action="processing_failed",
            user_id=document.uploaded_by,
            metadata={"error": context.error_message},
        )
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(
        self,
        file_loader: FileLoader,
        doc_repo: AiDocumentsRepository,
        max_file_size_bytes: int,
    ) -> None:
        self._file_loader = file_loader
        self._doc_repo = doc_repo
        self._max_file_size_bytes = max_file_size_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._doc_repo.find_by_id(context.document_id)
        context.document = document

        validation = validate_file(document, self._max_file_size_bytes)
        for warning in validation.warnings:
            Log.warning(f"Document {document.id}: {warning}")
        if not validation.is_valid:
            raise InvalidDocumentFileError("; ".join(validation.errors))

        context.raw_bytes = self._file_loader.load(document)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {document.id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(
        self,
        settings: Settings,
        extractor_factory: type[ExtractorFactory] = ExtractorFactory,
    ) -> None:
        self._settings = settings
        self._extractor_factory = extractor_factory

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        extractor = self._extractor_factory.create(self._settings, document.mime_type)
        context.raw_text = extractor.extract(context.raw_bytes)
        context.extraction_method = extractor.method
        Log.info(
            f"Extracted {len(context.raw_text)} chars from document {document.id}",
            method=extractor.method,
        )
        return context


class QualityGateStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        strip_markup = document.mime_type.split(";", 1)[0].strip().lower() not in TEXT_MIME_TYPES
        report = sanitize_and_score(context.raw_text, strip_markup=strip_markup)
        context.report = report
        Log.info(
            f"Quality gate scored document {document.id}",
            score=report.metrics.quality_score,
            passes=report.decision.passes_validation,
            hash=report.validation_hash,
        )
        return context


class PersistQualityStep(PipelineStep):
    def __init__(self, doc_repo: AiDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_quality_result(context.document_id, _require_report(context))
        return context


class RecordAttemptStep(PipelineStep):
    """Audit every extraction attempt, whether or not the gate passes."""

    def __init__(self, audit_repo: UploadAuditRepository) -> None:
        self._audit_repo = audit_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        report = _require_report(context)
        self._audit_repo.record(
            organization_id=document.organization_id,
            document_id=document.id,
            action="preview_extracted",
            user_id=document.uploaded_by,
            metadata={
                "validationHash": report.validation_hash,
                "qualityMetrics": report.metrics.to_dict(),
                "wordCount": report.metrics.word_count,
                "characterCount": report.metrics.character_count,
                "previewSnippet": report.sanitized_text[:PREVIEW_SNIPPET_LENGTH],
                "hasError": not report.decision.passes_validation,
            },
        )
        return context


class EnforceGateStep(PipelineStep):
    """Stop documents the gate refused.

    Only a paragraph-structure failure can be overridden, and only when the
    job asked for it and the override switch is enabled.
    """

    def __init__(self, audit_repo: UploadAuditRepository, settings: Settings) -> None:
        self._audit_repo = audit_repo
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        report = _require_report(context)
        decision = report.decision

        if decision.passes_validation:
            self._audit(document, report, "proceed_validated")
            return context

        if (
            decision.format_only_violation
            and context.allow_format_override
            and self._settings.format_override_enabled
        ):
            Log.warning(
                f"Document {document.id} proceeds with format override: {decision.error}",
                job_id=context.job_id,
            )
            self._audit(document, report, "proceed_format_override")
            return context

        raise DocumentRejectedError(decision.error or "Document failed quality validation", report)

    def _audit(self, document: AiDocument, report: QualityReport, action: str) -> None:
        self._audit_repo.record(
            organization_id=document.organization_id,
            document_id=document.id,
            action=action,
            user_id=document.uploaded_by,
            metadata={
                "validationHash": report.validation_hash,
                "qualityScore": report.metrics.quality_score,
                "warnings": list(report.decision.warnings),
            },
        )


class ChunkTextStep(PipelineStep):
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        report = _require_report(context)
        chunks = split_into_windows(
            report.sanitized_text,
            chunk_size=self._settings.chunk_size,
            overlap=self._settings.chunk_overlap,
        )
        if not chunks:
            raise DocumentRejectedError("No content chunks could be produced", report)
        context.chunks = chunks
        Log.info(f"Split document {context.document_id} into {len(chunks)} chunks")
        return context


class PersistChunksStep(PipelineStep):
    def __init__(self, doc_repo: AiDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        written = self._doc_repo.replace_chunks(document, context.chunks)
        self._doc_repo.mark_completed(document.id, written)
        Log.info(f"Document {document.id} completed with {written} chunks")
        return context


class EnqueueApprovedStep(PipelineStep):
    def __init__(self, queue: ApprovedFileQueue) -> None:
        self._queue = queue

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context)
        report = _require_report(context)
        context.approved_file = self._queue.add(
            ApprovedFile(
                document_id=document.id,
                file_name=document.file_name,
                file_size=document.file_size,
                chunks_count=len(context.chunks),
                extraction_method=context.extraction_method,
                validation_hash=report.validation_hash,
            )
        )
        Log.info(f"Document {document.id} queued as approved", file_id=context.approved_file.id)
        return context
