from docgate.quality.fingerprint import validation_hash
from docgate.quality.metrics import compute_metrics
from docgate.quality.models import QualityReport
from docgate.quality.sanitizer import sanitize_text
from docgate.quality.scorer import decide

PREVIEW_LENGTH = 1000


def sanitize_and_score(raw_text: str, *, strip_markup: bool = True) -> QualityReport:
    """Sanitize raw extracted text and run the quality gate over it.

    Pure function of its input. Low-quality or empty text is reported through
    ``report.decision``; only a non-string argument raises.

    Raises:
        TypeError: if *raw_text* is not a string.
    """
    sanitized = sanitize_text(raw_text, strip_markup=strip_markup)
    metrics = compute_metrics(sanitized)
    return QualityReport(
        sanitized_text=sanitized,
        metrics=metrics,
        decision=decide(metrics),
        validation_hash=validation_hash(sanitized),
        preview=sanitized[:PREVIEW_LENGTH],
    )
