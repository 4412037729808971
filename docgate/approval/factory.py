from docgate.approval.base import ApprovedFileQueue
from docgate.approval.memory_queue import InMemoryApprovedFileQueue
from docgate.config.settings import Settings
from docgate.database.repositories.approved_files_repository import (
    PostgresApprovedFileQueue,
)


class ApprovedFileQueueFactory:
    """Creates the configured approved-files queue backend."""

    BACKENDS: dict[str, type[ApprovedFileQueue]] = {
        "postgres": PostgresApprovedFileQueue,
        "memory": InMemoryApprovedFileQueue,
    }

    @classmethod
    def create(cls, settings: Settings) -> ApprovedFileQueue:
        backend = settings.approved_queue_backend.lower()
        queue_cls = cls.BACKENDS.get(backend)
        if queue_cls is None:
            raise ValueError(
                f"Unknown approved queue backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        return queue_cls()
