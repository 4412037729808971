"""Content fingerprint for correlating upload-attempt logs with text.

The hash is a 32-bit rolling hash (``h = h * 31 + unit``) and collides
easily. It identifies content in logs only and must not be used for
integrity checks or deduplication; chunk rows carry a SHA-256 for that.
"""

_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def _utf16_code_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def validation_hash(text: str) -> str:
    """Return the hex fingerprint of *text*.

    Iterates UTF-16 code units so the value matches hashes already logged by
    the browser upload client for the same text.
    """
    h = 0
    for unit in _utf16_code_units(text):
        h = ((h << 5) - h + unit) & _MASK_32
    if h & _SIGN_BIT:
        h -= 1 << 32
    return format(abs(h), "x")
