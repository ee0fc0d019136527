"""
File reading and payload preparation for the dispatch pipeline.

Architectural role:
- Read a whole file from local storage.
- Turn text content into the string forwarded to the gateway.
- Normalize images into a base64 JPEG payload of bounded size.

Processing lifecycle (image):
1. Decode the source image with Pillow.
2. Convert to RGB so palette/alpha formats (PNG, GIF) can be stored as JPEG.
3. Resize to `TARGET_WIDTH` keeping the aspect ratio (LANCZOS).
4. Re-encode as JPEG at `JPEG_QUALITY`.
5. Base64-encode the JPEG bytes.

Error handling strategy:
- `OSError` while reading becomes `ReadError`.
- Any decode/resize/encode failure becomes `ImageProcessingError`.
- No partial payload is ever returned.

Side effects:
- Reads files only. No temporary files are written.
"""

import base64
import io
import logging

from PIL import Image

from fileai.core.errors import ImageProcessingError, ReadError


logger = logging.getLogger(__name__)


# ============================================================
# CONFIG
# ============================================================

TARGET_WIDTH = 800
JPEG_QUALITY = 80
IMAGE_MIME_TYPE = "image/jpeg"


# ============================================================
# STORAGE
# ============================================================

def read_bytes(path: str) -> bytes:
    """Read the full content of `path`."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as err:
        raise ReadError(f"failed to read file {path}: {err}") from err


# ============================================================
# TEXT
# ============================================================

def prepare_text(content: bytes) -> str:
    """Decode UTF-8 text; invalid sequences are replaced, nothing is trimmed."""
    return content.decode("utf-8", errors="replace")


# ============================================================
# IMAGE
# ============================================================

def _target_size(width: int, height: int) -> tuple:
    new_height = max(1, round(height * TARGET_WIDTH / width))
    return TARGET_WIDTH, new_height


def prepare_image(file_path: str) -> str:
    """
    Produce the base64 JPEG payload for an image file.

    Raises:
    - `ImageProcessingError` when the image cannot be decoded, resized or
      encoded.
    """
    try:
        with Image.open(file_path) as img:
            img = img.convert("RGB")
            size = _target_size(*img.size)
            resized = img.resize(size, Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        resized.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except Exception as err:
        # Pillow surfaces corrupt input as OSError, SyntaxError, struct.error, ...
        raise ImageProcessingError(f"failed to process image {file_path}: {err}") from err

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.debug(
        "Normalized image %s to %sx%s (%d base64 chars)",
        file_path, size[0], size[1], len(encoded),
    )
    return encoded


def image_data_url(payload: str) -> str:
    """Render a base64 JPEG payload as a data URL."""
    return f"data:{IMAGE_MIME_TYPE};base64,{payload}"
