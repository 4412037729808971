from docgate.config.settings import Settings
from docgate.database.models import IngestionJobRecord
from docgate.database.repositories.job_repository import JobRepository
from docgate.extraction.exceptions import TextExtractionError
from docgate.logging.logger import Log
from docgate.processor.exceptions import DocumentRejectedError
from docgate.processor.processor import Processor


class JobRunner:
    """Run one job, catch exceptions, and apply retry logic."""

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._settings = settings

    def run(self, job: IngestionJobRecord) -> None:
        """Execute a single job with error handling."""
        Log.info(f"Running job {job.id} (attempt {job.attempts + 1})")
        try:
            self._processor.process(
                job.document_id,
                job.id,
                allow_format_override=job.allow_format_override,
            )
            self._job_repo.mark_done(job.id)
            Log.info(f"Job {job.id} completed successfully")
        except (DocumentRejectedError, TextExtractionError) as exc:
            # The file content decides the outcome, so a retry cannot change it.
            self._job_repo.mark_rejected(job.id, str(exc))
            Log.warning(f"Job {job.id} rejected: {exc}")
        except Exception as exc:
            self._handle_failure(job, exc)

    def _handle_failure(self, job: IngestionJobRecord, exc: Exception) -> None:
        """Increment attempts; mark failed if at max, otherwise back to pending."""
        Log.error(f"Job {job.id} failed: {exc}")
        if job.attempts + 1 >= self._settings.max_job_attempts:
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} permanently failed after {job.attempts + 1} attempts")
        else:
            self._job_repo.increment_attempts(job.id)
            Log.warning(f"Job {job.id} will be retried (attempt {job.attempts + 1})")
