"""Named predicates and ratios computed over sanitized text."""

import re

from docgate.quality.models import (
    BINARY_CONTENT,
    INSUFFICIENT_PARAGRAPHS,
    ISSUE_ORDER,
    LOW_ALPHABETIC_RATIO,
    NO_SENTENCE_MARKERS,
    TEXT_TOO_SHORT,
    XML_ARTIFACTS,
    QualityMetrics,
)

MIN_CHARACTERS = 800
MIN_ALPHABETIC_RATIO = 0.70
MIN_EFFECTIVE_PARAGRAPHS = 2
MAX_BINARY_RATIO = 0.30
SEMANTIC_PARAGRAPH_MIN_LENGTH = 40

XML_ARTIFACT_MARKERS: tuple[str, ...] = (
    "_rels/",
    "customXml/",
    "word/",
    ".rels",
    "styles.xml",
)

_ALPHABETIC_RE = re.compile(r"[a-zA-Z]")
_BINARY_RE = re.compile(r"[\x00-\x08\x0E-\x1F\x7F-\xFF]")
_UNICODE_RE = re.compile(r"[^\x00-\x7F]")
_NON_LATIN_RE = re.compile(r"[^\x00-\xFF]")
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
_SENTENCE_MARKER_RE = re.compile(r"[.?!:]")
_SEMANTIC_ENDINGS = (".", "!", "?", ":")
_BINARY_SIGNATURE_RE = re.compile(
    r"%PDF-\d\.\d|\bendobj\b|\bendstream\b|\bobj\s*<<"
)
_BULLET_LINE_RE = re.compile(
    r"^[ \t]*[-*\u2022\u25cb\u25e6\u25aa\u25ab\u2023\u2043][ \t]+", re.M
)
_HEADING_LINE_RE = re.compile(r"^#+[ \t]+|^[A-Z][^.\n]*:[ \t]*$", re.M)


def _ratio(pattern: re.Pattern[str], text: str) -> float:
    if not text:
        return 0.0
    return len(pattern.findall(text)) / len(text)


def alphabetic_ratio(text: str) -> float:
    return _ratio(_ALPHABETIC_RE, text)


def binary_ratio(text: str) -> float:
    """Share of characters in the control and high-byte ranges."""
    return _ratio(_BINARY_RE, text)


def unicode_ratio(text: str) -> float:
    return _ratio(_UNICODE_RE, text)


def has_non_latin_text(text: str) -> bool:
    return _NON_LATIN_RE.search(text) is not None


def has_xml_artifacts(text: str) -> bool:
    return any(marker in text for marker in XML_ARTIFACT_MARKERS)


def has_binary_signature(text: str) -> bool:
    """True when the text looks like a binary container dumped as text."""
    return _BINARY_SIGNATURE_RE.search(text) is not None


def has_sentence_markers(text: str) -> bool:
    return _SENTENCE_MARKER_RE.search(text) is not None


def has_bullets(text: str) -> bool:
    """True when some line starts with a list marker."""
    return _BULLET_LINE_RE.search(text) is not None


def has_headings(text: str) -> bool:
    """True for a markdown heading or a capitalized line ending in a colon."""
    return _HEADING_LINE_RE.search(text) is not None


def split_blocks(text: str) -> list[str]:
    """Split on blank lines; whitespace-only blocks are dropped."""
    return [block for block in _PARAGRAPH_BREAK_RE.split(text) if block.strip()]


def count_paragraphs(text: str) -> int:
    return len(split_blocks(text))


def count_semantic_paragraphs(text: str) -> int:
    """Count blocks of at least 40 characters ending in terminal punctuation.

    Fallback structural signal for documents that have real sentences but no
    blank-line paragraph breaks.
    """
    count = 0
    for block in split_blocks(text):
        trimmed = block.strip()
        if len(trimmed) >= SEMANTIC_PARAGRAPH_MIN_LENGTH and trimmed.endswith(
            _SEMANTIC_ENDINGS
        ):
            count += 1
    return count


def count_words(text: str) -> int:
    return len(text.split())


def compute_quality_score(
    *,
    alphabetic: float,
    effective_paragraphs: int,
    character_count: int,
    xml_artifacts: bool,
    binary: float,
    sentence_markers: bool,
) -> int:
    """Heuristic 0-100 score.

    Weights are empirically chosen tuning values kept for compatibility with
    scores already stored for existing documents.
    """
    score = 100.0
    score -= max(0.0, (0.7 - alphabetic) * 100)
    score -= max(0, (3 - effective_paragraphs) * 10)
    score -= max(0.0, (800 - character_count) / 10)
    score -= 30 if xml_artifacts else 0
    score -= binary * 50
    score -= 0 if sentence_markers else 20
    clamped = min(100.0, max(0.0, score))
    # half-up, matching the scores produced by the upload front end
    return int(clamped + 0.5)


def detect_issues(
    *,
    character_count: int,
    effective_paragraphs: int,
    alphabetic: float,
    xml_artifacts: bool,
    binary: float,
    binary_signature: bool,
    sentence_markers: bool,
) -> tuple[str, ...]:
    found: set[str] = set()
    if character_count < MIN_CHARACTERS:
        found.add(TEXT_TOO_SHORT)
    if effective_paragraphs < MIN_EFFECTIVE_PARAGRAPHS:
        found.add(INSUFFICIENT_PARAGRAPHS)
    if alphabetic < MIN_ALPHABETIC_RATIO:
        found.add(LOW_ALPHABETIC_RATIO)
    if xml_artifacts:
        found.add(XML_ARTIFACTS)
    if binary >= MAX_BINARY_RATIO or binary_signature:
        found.add(BINARY_CONTENT)
    if not sentence_markers:
        found.add(NO_SENTENCE_MARKERS)
    return tuple(tag for tag in ISSUE_ORDER if tag in found)


def compute_metrics(text: str) -> QualityMetrics:
    """Compute all metrics for an already-sanitized text."""
    if not text:
        return QualityMetrics(detected_issues=(TEXT_TOO_SHORT,))

    character_count = len(text)
    alphabetic = alphabetic_ratio(text)
    binary = binary_ratio(text)
    xml_artifacts = has_xml_artifacts(text)
    binary_signature = has_binary_signature(text)
    sentence_markers = has_sentence_markers(text)
    paragraphs = count_paragraphs(text)
    semantic_paragraphs = count_semantic_paragraphs(text)
    effective_paragraphs = max(paragraphs, semantic_paragraphs)

    return QualityMetrics(
        character_count=character_count,
        word_count=count_words(text),
        alphabetic_ratio=alphabetic,
        binary_ratio=binary,
        unicode_ratio=unicode_ratio(text),
        has_non_latin_text=has_non_latin_text(text),
        xml_artifacts=xml_artifacts,
        has_binary_signature=binary_signature,
        paragraph_count=paragraphs,
        semantic_paragraph_count=semantic_paragraphs,
        effective_paragraph_count=effective_paragraphs,
        has_sentence_markers=sentence_markers,
        has_bullets=has_bullets(text),
        has_headings=has_headings(text),
        quality_score=compute_quality_score(
            alphabetic=alphabetic,
            effective_paragraphs=effective_paragraphs,
            character_count=character_count,
            xml_artifacts=xml_artifacts,
            binary=binary,
            sentence_markers=sentence_markers,
        ),
        detected_issues=detect_issues(
            character_count=character_count,
            effective_paragraphs=effective_paragraphs,
            alphabetic=alphabetic,
            xml_artifacts=xml_artifacts,
            binary=binary,
            binary_signature=binary_signature,
            sentence_markers=sentence_markers,
        ),
    )
