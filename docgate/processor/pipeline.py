from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docgate.approval.models import ApprovedFile
from docgate.chunking.models import TextChunk
from docgate.processor.models import AiDocument
from docgate.quality.models import QualityReport


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    job_id: int
    allow_format_override: bool = False
    document: AiDocument | None = None
    raw_bytes: bytes = b""
    raw_text: str = ""
    extraction_method: str = ""
    report: QualityReport | None = None
    chunks: list[TextChunk] = field(default_factory=list)
    approved_file: ApprovedFile | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
