"""Deterministic normalization of extracted document text.

Processing flow:
0. (markup formats only) Strip tags, filesystem paths and package-internal
   paths leaked by the format loader.
1. Strip control characters, keeping newlines.
2. Smart punctuation to ASCII.
3. Repair UTF-8-read-as-cp1252 mojibake for the same punctuation.
4. Canonical bullets.
5. Remove field codes and bookmark tokens.
6. Collapse horizontal whitespace and excess blank lines.
7. Trim.

The rule pass repeats until the text stops changing, so sanitizing an
already-sanitized text is a no-op even when a removal in step 5 splices
together a sequence an earlier step rewrites.
"""

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WINDOWS_PATH_RE = re.compile(r"\b[A-Za-z]:\\\S*")
_PACKAGE_PATH_RE = re.compile(r"/(?:word|_rels|customXml)/\S*")

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

_SMART_PUNCTUATION: dict[str, str] = {
    "‘": "'",
    "’": "'",
    "‚": "'",
    "‛": "'",
    "“": '"',
    "”": '"',
    "„": '"',
    "‟": '"',
    "\u2013": "-",
    "\u2014": "-",
    "…": "...",
}

# Longest sequences first; the bare prefix is the last resort for a closing
# quote whose third byte was lost in transit.
_MOJIBAKE: tuple[tuple[str, str], ...] = (
    ("â€™", "'"),
    ("â€˜", "'"),
    ("â€œ", '"'),
    ("â€\u009d", '"'),
    # en/em dash: third char is a smart quote already rewritten by step 2
    ('â€"', "-"),
    ("â€¦", "..."),
    ("â€¢", "•"),
    ("â€", '"'),
)

_ROUND_BULLETS_RE = re.compile("[◦‣⁃○●∙]")
_SQUARE_BULLETS_RE = re.compile("[■□▫◻◼◽◾]")

_FIELD_CODE_RE = re.compile(r"\{[^}\n]*\}")
_TOC_BOOKMARK_RE = re.compile(r"_Toc\d+")

_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def strip_format_leakage(text: str) -> str:
    """Remove tags and loader path fragments that are not document content."""
    text = _TAG_RE.sub(" ", text)
    text = _WINDOWS_PATH_RE.sub(" ", text)
    return _PACKAGE_PATH_RE.sub(" ", text)


def strip_control_characters(text: str) -> str:
    return _CONTROL_CHARS_RE.sub("", text)


def normalize_punctuation(text: str) -> str:
    for smart, plain in _SMART_PUNCTUATION.items():
        text = text.replace(smart, plain)
    return text


def repair_mojibake(text: str) -> str:
    for broken, fixed in _MOJIBAKE:
        text = text.replace(broken, fixed)
    return text


def normalize_bullets(text: str) -> str:
    text = _ROUND_BULLETS_RE.sub("•", text)
    return _SQUARE_BULLETS_RE.sub("▪", text)


def remove_field_artifacts(text: str) -> str:
    text = _FIELD_CODE_RE.sub("", text)
    return _TOC_BOOKMARK_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    return _EXCESS_NEWLINES_RE.sub("\n\n", text)


def sanitize_text(text: str, *, strip_markup: bool = True) -> str:
    """Normalize extracted text.

    Args:
        text: Raw extracted text.
        strip_markup: Run the markup-leakage pre-pass. Turn off for plain
            text and markdown, where angle brackets can be real content.

    Raises:
        TypeError: if *text* is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    # After the first pass every rule keeps the length or shortens the text,
    # so this reaches a fixed point.
    current = text
    while True:
        updated = _apply_rules(current, strip_markup)
        if updated == current:
            return current
        current = updated


def _apply_rules(text: str, strip_markup: bool) -> str:
    if strip_markup:
        text = strip_format_leakage(text)
    text = strip_control_characters(text)
    text = normalize_punctuation(text)
    text = repair_mojibake(text)
    text = normalize_bullets(text)
    text = remove_field_artifacts(text)
    text = collapse_whitespace(text)
    return text.strip()
