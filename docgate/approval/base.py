from __future__ import annotations

from abc import ABC, abstractmethod

from docgate.approval.models import ApprovedFile


class ApprovedFileQueue(ABC):
    """Port for the queue of verified files awaiting release to the knowledge base."""

    @abstractmethod
    def add(self, approved_file: ApprovedFile) -> ApprovedFile:
        """Append *approved_file* and return it as stored."""

    @abstractmethod
    def list(self) -> list[ApprovedFile]:
        """Return queued files, oldest first."""

    @abstractmethod
    def remove(self, file_id: str) -> bool:
        """Remove a queued file. Returns False when *file_id* is not queued."""
