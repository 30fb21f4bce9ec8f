class OcrError(Exception):
    """Raised when OCR processing fails."""


class OcrValidationError(OcrError):
    """Raised when the submitted payload is rejected (missing data, size, type)."""


class OcrConfigurationError(OcrError):
    """Raised when the AI provider is not configured."""


class OcrRateLimitError(OcrError):
    """Raised when the AI provider answers HTTP 429."""

    def __init__(self, message: str = "Rate limit exceeded. Please try again in a moment.") -> None:
        super().__init__(message)


class OcrQuotaExceededError(OcrError):
    """Raised when the AI provider answers HTTP 402."""

    def __init__(self, message: str = "Usage limit reached. Please add credits to continue.") -> None:
        super().__init__(message)


class OcrUpstreamError(OcrError):
    """Raised when the AI provider answers with any other non-success status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"AI Gateway error: {status_code}")
        self.status_code = status_code


class OcrNetworkError(OcrError):
    """Raised when the AI provider cannot be reached."""


class OcrEmptyResultError(OcrError):
    """Raised when the AI provider returns no text."""

    def __init__(self, message: str = "No text could be extracted from the image") -> None:
        super().__init__(message)
