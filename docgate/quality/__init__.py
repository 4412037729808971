from docgate.quality.fingerprint import validation_hash
from docgate.quality.gate import sanitize_and_score
from docgate.quality.models import QualityMetrics, QualityReport, ValidationDecision
from docgate.quality.sanitizer import sanitize_text

__all__ = [
    "QualityMetrics",
    "QualityReport",
    "ValidationDecision",
    "sanitize_and_score",
    "sanitize_text",
    "validation_hash",
]
