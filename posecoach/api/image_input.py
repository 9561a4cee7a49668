"""
Image-input normalization for the HTTP adapter.

Architectural role:
- Accept either a bare base64 string or a `data:` URL from browser clients.
- Enforce an approximate size limit before the payload is forwarded.
- Never decode the image; the payload is passed to the service as-is.

Error handling strategy:
- Empty input, malformed data URLs, unsupported MIME types and oversize
  payloads raise `ValueError` for the adapter to map to HTTP 400.
"""

import os


MAX_IMAGE_SIZE_MB = float(os.getenv("MAX_IMAGE_SIZE_MB", "10"))
MAX_IMAGE_SIZE_BYTES = int(MAX_IMAGE_SIZE_MB * 1024 * 1024)
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}
DEFAULT_MIME_TYPE = "image/jpeg"


def approx_decoded_size(encoded: str) -> int:
    """Estimate decoded byte length of a base64 string without decoding it."""
    padding = 0
    if encoded.endswith("=="):
        padding = 2
    elif encoded.endswith("="):
        padding = 1
    return (len(encoded) * 3) // 4 - padding


def resolve_image_input(value: str) -> tuple[str, str]:
    """
    Split an image reference into `(base64_payload, mime_type)`.

    Supported formats:
    - data URL (`data:image/png;base64,...`)
    - bare base64 (assumed JPEG)
    """
    if not value or not value.strip():
        raise ValueError("Image payload is empty")

    value = value.strip()
    mime_type = DEFAULT_MIME_TYPE

    if value.startswith("data:"):
        if "," not in value:
            raise ValueError("Malformed data URL")
        header, value = value.split(",", 1)
        media = header[len("data:"):].split(";", 1)[0].strip().lower()
        if ";base64" not in header:
            raise ValueError("Data URL is not base64-encoded")
        if media:
            mime_type = media

    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValueError(f"Unsupported image type: {mime_type}")

    if not value:
        raise ValueError("Image payload is empty")

    if approx_decoded_size(value) > MAX_IMAGE_SIZE_BYTES:
        raise ValueError("Image exceeds max size limit")

    return value, mime_type
