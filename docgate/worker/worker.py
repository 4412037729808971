import time

from docgate.config.settings import Settings
from docgate.database.connection import get_connection
from docgate.database.models import IngestionJobRecord
from docgate.database.repositories.job_repository import JobRepository
from docgate.logging.logger import Log
from docgate.worker.job_runner import JobRunner


class Worker:
    """Claims pending ingestion jobs one at a time and hands them to the runner.

    Several workers can share one database; claiming uses SKIP LOCKED so each
    job is processed by exactly one of them.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._idle_seconds = settings.job_poll_interval_seconds

    def run(self, max_jobs: int | None = None) -> int:
        """Poll until interrupted, or until *max_jobs* jobs have been run.

        Returns:
            Number of jobs handed to the runner.
        """
        Log.info("Worker started, polling for ingestion jobs", idle_seconds=self._idle_seconds)
        handled = 0
        try:
            while max_jobs is None or handled < max_jobs:
                if self._poll_once():
                    handled += 1
                else:
                    Log.debug("No ingestion jobs pending, sleeping")
                    time.sleep(self._idle_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully", jobs_handled=handled)
        return handled

    def _poll_once(self) -> bool:
        job = self._try_claim_job()
        if job is None:
            return False
        Log.info(
            f"Claimed ingestion job {job.id}",
            document_id=job.document_id,
            format_override=job.allow_format_override,
        )
        self._job_runner.run(job)
        return True

    def _try_claim_job(self) -> IngestionJobRecord | None:
        """Attempt to claim the next pending job. Database errors are retried on the next poll."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error while claiming a job, will retry: {exc}")
            return None
