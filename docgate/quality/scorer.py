from docgate.quality.metrics import (
    MAX_BINARY_RATIO,
    MIN_ALPHABETIC_RATIO,
    MIN_CHARACTERS,
    MIN_EFFECTIVE_PARAGRAPHS,
)
from docgate.quality.models import (
    BINARY_CONTENT,
    INSUFFICIENT_PARAGRAPHS,
    LOW_ALPHABETIC_RATIO,
    NO_SENTENCE_MARKERS,
    TEXT_TOO_SHORT,
    XML_ARTIFACTS,
    QualityMetrics,
    ValidationDecision,
)

RECOMMENDED_CHARACTERS = 1000
RECOMMENDED_PARAGRAPHS = 3
RECOMMENDED_SEMANTIC_PARAGRAPHS = 2


def failed_gate_checks(metrics: QualityMetrics) -> tuple[str, ...]:
    """Return the issue tag of every hard gate threshold the metrics miss."""
    checks = (
        (TEXT_TOO_SHORT, metrics.character_count >= MIN_CHARACTERS),
        (
            INSUFFICIENT_PARAGRAPHS,
            metrics.effective_paragraph_count >= MIN_EFFECTIVE_PARAGRAPHS,
        ),
        (LOW_ALPHABETIC_RATIO, metrics.alphabetic_ratio >= MIN_ALPHABETIC_RATIO),
        (XML_ARTIFACTS, not metrics.xml_artifacts),
        (BINARY_CONTENT, metrics.binary_ratio < MAX_BINARY_RATIO),
        (NO_SENTENCE_MARKERS, metrics.has_sentence_markers),
    )
    return tuple(tag for tag, passed in checks if not passed)


def build_warnings(metrics: QualityMetrics) -> tuple[str, ...]:
    """Informational warnings, independent of the hard gate."""
    warnings: list[str] = []
    if metrics.character_count < RECOMMENDED_CHARACTERS:
        warnings.append(
            f"Document is short ({metrics.character_count} characters); "
            f"at least {RECOMMENDED_CHARACTERS} are recommended for reliable retrieval"
        )
    if (
        metrics.paragraph_count < RECOMMENDED_PARAGRAPHS
        and metrics.semantic_paragraph_count < RECOMMENDED_SEMANTIC_PARAGRAPHS
    ):
        warnings.append(
            f"Weak paragraph structure ({metrics.paragraph_count} blank-line "
            f"paragraphs, {metrics.semantic_paragraph_count} sentence paragraphs); "
            "chunk boundaries may split related content"
        )
    if metrics.alphabetic_ratio < MIN_ALPHABETIC_RATIO:
        warnings.append(
            f"Low alphabetic content ({metrics.alphabetic_ratio:.0%}); "
            "text may be corrupted or mostly non-textual"
        )
    if not metrics.has_sentence_markers:
        warnings.append(
            "No sentence punctuation found; text may be fragments or extraction noise"
        )
    return tuple(warnings)


def decide(metrics: QualityMetrics) -> ValidationDecision:
    """Turn metrics into a pass/fail decision.

    A format-only violation is a failure of the paragraph heuristic alone;
    it is the only failure a privileged override may bypass.
    """
    failed = failed_gate_checks(metrics)
    passes = not failed
    return ValidationDecision(
        passes_validation=passes,
        format_only_violation=failed == (INSUFFICIENT_PARAGRAPHS,),
        warnings=build_warnings(metrics),
        error=None if passes else _error_message(metrics, failed),
    )


def _error_message(metrics: QualityMetrics, failed: tuple[str, ...]) -> str:
    # empty text fails every content check; report the root cause only
    if metrics.character_count == 0:
        return TEXT_TOO_SHORT
    return ", ".join(failed)
