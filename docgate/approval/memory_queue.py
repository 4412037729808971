from __future__ import annotations

from docgate.approval.base import ApprovedFileQueue
from docgate.approval.models import ApprovedFile


class InMemoryApprovedFileQueue(ApprovedFileQueue):
    """Process-local queue; contents are lost on restart."""

    def __init__(self) -> None:
        self._files: dict[str, ApprovedFile] = {}

    def add(self, approved_file: ApprovedFile) -> ApprovedFile:
        self._files[approved_file.id] = approved_file
        return approved_file

    def list(self) -> list[ApprovedFile]:
        return sorted(self._files.values(), key=lambda f: f.verified_at)

    def remove(self, file_id: str) -> bool:
        return self._files.pop(file_id, None) is not None
