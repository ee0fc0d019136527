"""Content classification heuristics.

Decides whether a byte buffer is human-readable text and whether a path names
a supported image type. The verdict drives routing in
`fileai.core.engine.Dispatcher`.

Heuristics:
    - Text: at least 90% of the first 512 bytes are printable ASCII
      (0x20-0x7E) or one of `\\n`, `\\r`, `\\t`.
    - Image: lower-cased extension in `IMAGE_EXTENSIONS`. No magic-byte
      sniffing is performed.

Precedence:
    Text is tried first, then image, otherwise `UNKNOWN`.

Failure behavior:
    Never raises. Never performs I/O or network access.
"""

import os

from fileai.core.routing_types import ClassificationVerdict


# ============================================================
# CONFIG
# ============================================================

SAMPLE_SIZE = 512
TEXT_RATIO_NUMERATOR = 9
TEXT_RATIO_DENOMINATOR = 10

IMAGE_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff"
})

_TEXT_WHITESPACE = frozenset(b"\n\r\t")


# ============================================================
# HEURISTICS
# ============================================================

def is_likely_text(content: bytes) -> bool:
    """Return whether the leading sample of `content` looks like text.

    An empty sample is never text.
    """
    sample = content[:SAMPLE_SIZE]
    if not sample:
        return False

    text_count = sum(
        1 for b in sample
        if 0x20 <= b <= 0x7E or b in _TEXT_WHITESPACE
    )

    # count / len >= 0.9, kept in integers to avoid float rounding at the edge.
    return text_count * TEXT_RATIO_DENOMINATOR >= len(sample) * TEXT_RATIO_NUMERATOR


def is_image_path(file_path: str) -> bool:
    """Return whether the path's extension marks a supported image."""
    _, ext = os.path.splitext(str(file_path))
    return ext.lower() in IMAGE_EXTENSIONS


# ============================================================
# PUBLIC ENTRYPOINT
# ============================================================

def classify(content: bytes, file_path: str) -> ClassificationVerdict:
    """Classify file content for dispatch.

    Args:
        content: Raw file bytes; only the first `SAMPLE_SIZE` bytes are read.
        file_path: Source path, used only for its extension.

    Returns:
        `TEXT`, `IMAGE` or `UNKNOWN`. Empty content is always `UNKNOWN`.
    """
    if not content:
        return ClassificationVerdict.UNKNOWN

    if is_likely_text(content):
        return ClassificationVerdict.TEXT

    if is_image_path(file_path):
        return ClassificationVerdict.IMAGE

    return ClassificationVerdict.UNKNOWN
