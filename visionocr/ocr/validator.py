"""Payload checks applied before any AI call."""

from visionocr.ocr.exceptions import OcrValidationError
from visionocr.ocr.models import OcrRequest

ALLOWED_FILE_TYPES: frozenset[str] = frozenset(
    {
        "image/png",
        "image/jpeg",
        "image/jpg",
        "image/webp",
        "image/gif",
        "application/pdf",
    }
)

DEFAULT_IMAGE_TYPE = "image/png"


def estimate_decoded_size(image_base64: str) -> float:
    """Approximate decoded byte size; base64 inflates data by a third."""
    return len(image_base64) * 3 / 4


def validate_request(request: OcrRequest, max_size_mb: int) -> float:
    """Reject missing, oversized or disallowed payloads.

    Size is checked before type, so an oversized payload is rejected
    whatever its MIME type. An empty ``file_type`` is accepted.

    Returns:
        The estimated decoded size in bytes.

    Raises:
        OcrValidationError: with the message returned to the caller.
    """
    if not request.image_base64:
        raise OcrValidationError("No image data provided")

    estimated_size = estimate_decoded_size(request.image_base64)
    if estimated_size > max_size_mb * 1024 * 1024:
        raise OcrValidationError(f"File too large. Maximum size is {max_size_mb}MB")

    if request.file_type and request.file_type.lower() not in ALLOWED_FILE_TYPES:
        raise OcrValidationError("Invalid file type. Allowed: PNG, JPEG, WebP, GIF, PDF")

    return estimated_size


def build_image_url(image_base64: str, file_type: str) -> str:
    """Return a data URL, adding the MIME prefix when the payload is raw base64."""
    if image_base64.startswith("data:"):
        return image_base64
    return f"data:{file_type or DEFAULT_IMAGE_TYPE};base64,{image_base64}"
