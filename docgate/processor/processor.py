from pathlib import Path

from docgate.approval.base import ApprovedFileQueue
from docgate.config.settings import Settings
from docgate.database.repositories.ai_documents_repository import AiDocumentsRepository
from docgate.database.repositories.upload_audit_repository import UploadAuditRepository
from docgate.logging.logger import Log
from docgate.processor.file_loader import FileLoader
from docgate.processor.pipeline import PipelineContext, PipelineStep
from docgate.processor.steps import (
    ChunkTextStep,
    EnforceGateStep,
    EnqueueApprovedStep,
    ExtractTextStep,
    LoadDocumentStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistChunksStep,
    PersistQualityStep,
    QualityGateStep,
    RecordAttemptStep,
)


class Processor:
    """Runs the ingestion pipeline steps in order for one document.

    Pipeline: load -> extract -> sanitize/score -> gate -> chunk -> persist -> enqueue.
    When a step raises, the failure step runs and the exception propagates.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(
        self,
        document_id: str,
        job_id: int,
        allow_format_override: bool = False,
    ) -> PipelineContext:
        Log.info(f"Processing document {document_id} for job {job_id}")
        context = PipelineContext(
            document_id=document_id,
            job_id=job_id,
            allow_format_override=allow_format_override,
        )
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                context.error_message = str(exc)
                self._failed_step.run(context)
                raise
        return context


def build_processor(
    settings: Settings,
    queue: ApprovedFileQueue,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required steps and adapters."""
    file_loader = FileLoader(files_root=files_root or settings.files_root)
    doc_repo = AiDocumentsRepository()
    audit_repo = UploadAuditRepository()
    steps: list[PipelineStep] = [
        MarkProcessingStep(doc_repo),
        LoadDocumentStep(
            file_loader=file_loader,
            doc_repo=doc_repo,
            max_file_size_bytes=settings.max_file_size_bytes,
        ),
        ExtractTextStep(settings),
        QualityGateStep(),
        PersistQualityStep(doc_repo),
        RecordAttemptStep(audit_repo),
        EnforceGateStep(audit_repo, settings),
        ChunkTextStep(settings),
        PersistChunksStep(doc_repo),
        EnqueueApprovedStep(queue),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(doc_repo, audit_repo))
