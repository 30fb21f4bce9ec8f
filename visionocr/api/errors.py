import time

from fastapi.responses import JSONResponse

from visionocr.auth.exceptions import AuthenticationError
from visionocr.logging.logger import Log
from visionocr.ocr.exceptions import (
    OcrError,
    OcrQuotaExceededError,
    OcrRateLimitError,
    OcrValidationError,
)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class GatewayCredentialError(AuthenticationError):
    """Raised when a request lacks the gateway (publishable) credential."""

    def __init__(self) -> None:
        super().__init__("Invalid gateway credential")


def error_response(
    status_code: int,
    message: str,
    processing_time_ms: int | None = None,
) -> JSONResponse:
    content: dict[str, object] = {"error": message}
    if processing_time_ms is not None:
        content["processing_time_ms"] = processing_time_ms
    return JSONResponse(status_code=status_code, content=content)


def response_for_exception(exc: Exception, started_at: float) -> JSONResponse:
    """Map a handler failure to its HTTP status and JSON body.

    AuthenticationError -> 401, OcrValidationError -> 400,
    OcrQuotaExceededError -> 402, OcrRateLimitError -> 429.
    Any other failure is a 500 carrying ``processing_time_ms``; exceptions
    outside the OCR hierarchy get a generic message.
    """
    if isinstance(exc, AuthenticationError):
        return error_response(401, str(exc))
    if isinstance(exc, OcrValidationError):
        Log.error(f"Rejected OCR payload: {exc}")
        return error_response(400, str(exc))
    if isinstance(exc, OcrQuotaExceededError):
        return error_response(402, str(exc))
    if isinstance(exc, OcrRateLimitError):
        return error_response(429, str(exc))

    processing_time_ms = int((time.monotonic() - started_at) * 1000)
    if isinstance(exc, OcrError):
        Log.error(f"OCR processing error: {exc}")
        return error_response(500, str(exc), processing_time_ms)
    Log.exception(f"Unexpected OCR processing error: {exc}")
    return error_response(500, UNKNOWN_ERROR_MESSAGE, processing_time_ms)
