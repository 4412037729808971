from dataclasses import dataclass

TEXT_TOO_SHORT = "text_too_short"
INSUFFICIENT_PARAGRAPHS = "insufficient_paragraphs"
LOW_ALPHABETIC_RATIO = "low_alphabetic_ratio"
XML_ARTIFACTS = "xml_artifacts"
BINARY_CONTENT = "binary_content"
NO_SENTENCE_MARKERS = "no_sentence_markers"

# Order in which issue tags are reported and joined into ValidationDecision.error.
ISSUE_ORDER: tuple[str, ...] = (
    TEXT_TOO_SHORT,
    INSUFFICIENT_PARAGRAPHS,
    LOW_ALPHABETIC_RATIO,
    XML_ARTIFACTS,
    BINARY_CONTENT,
    NO_SENTENCE_MARKERS,
)


@dataclass(frozen=True)
class QualityMetrics:
    """Structural and quality measurements of a sanitized text."""

    character_count: int = 0
    word_count: int = 0
    alphabetic_ratio: float = 0.0
    binary_ratio: float = 0.0
    unicode_ratio: float = 0.0
    has_non_latin_text: bool = False
    xml_artifacts: bool = False
    has_binary_signature: bool = False
    paragraph_count: int = 0
    semantic_paragraph_count: int = 0
    effective_paragraph_count: int = 0
    has_sentence_markers: bool = False
    has_bullets: bool = False
    has_headings: bool = False
    quality_score: int = 0
    detected_issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "characterCount": self.character_count,
            "wordCount": self.word_count,
            "alphabeticRatio": self.alphabetic_ratio,
            "binaryRatio": self.binary_ratio,
            "unicodeRatio": self.unicode_ratio,
            "hasNonLatinText": self.has_non_latin_text,
            "xmlArtifacts": self.xml_artifacts,
            "hasBinarySignature": self.has_binary_signature,
            "paragraphCount": self.paragraph_count,
            "semanticParagraphCount": self.semantic_paragraph_count,
            "effectiveParagraphCount": self.effective_paragraph_count,
            "hasSentenceMarkers": self.has_sentence_markers,
            "hasBullets": self.has_bullets,
            "hasHeadings": self.has_headings,
            "qualityScore": self.quality_score,
            "detectedIssues": list(self.detected_issues),
        }


@dataclass(frozen=True)
class ValidationDecision:
    """Outcome of the quality gate."""

    passes_validation: bool
    format_only_violation: bool = False
    warnings: tuple[str, ...] = ()
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "passesValidation": self.passes_validation,
            "formatOnlyViolation": self.format_only_violation,
            "warnings": list(self.warnings),
            "error": self.error,
        }


@dataclass(frozen=True)
class QualityReport:
    """Everything computed from one raw text in a single gate run."""

    sanitized_text: str
    metrics: QualityMetrics
    decision: ValidationDecision
    validation_hash: str
    preview: str

    def to_dict(self) -> dict[str, object]:
        """JSON-safe rendering in the shape the upload front end consumes."""
        return {
            "sanitizedText": self.sanitized_text,
            "metrics": self.metrics.to_dict(),
            "decision": self.decision.to_dict(),
            "validationHash": self.validation_hash,
            "preview": self.preview,
        }
