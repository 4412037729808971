from docgate.approval.factory import ApprovedFileQueueFactory
from docgate.config.settings import Settings
from docgate.database.connection import close_pool, init_pool
from docgate.database.repositories.job_repository import JobRepository
from docgate.logging.logger import Log
from docgate.processor.processor import build_processor
from docgate.worker.job_runner import JobRunner
from docgate.worker.worker import Worker


def build_worker(settings: Settings) -> Worker:
    """Wire the approved queue, pipeline and job runner into a worker."""
    queue = ApprovedFileQueueFactory.create(settings)
    processor = build_processor(settings, queue)
    job_repo = JobRepository(settings.max_job_attempts)
    return Worker(job_repo, JobRunner(processor, job_repo, settings), settings)


def main() -> None:
    """Entry point of the docgate-worker console script."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(
        "Starting docgate worker",
        env=settings.app_env,
        pdf_engine=settings.pdf_engine,
        queue=settings.approved_queue_backend,
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
    )
    init_pool(settings)

    try:
        build_worker(settings).run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
