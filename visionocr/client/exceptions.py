class ClientError(Exception):
    """Base exception for client-side OCR errors."""


class FileReadError(ClientError):
    """Raised when a local file cannot be read."""


class UnsupportedFileTypeError(ClientError):
    """Raised when a file is neither an image nor a PDF."""


class OcrRequestError(ClientError):
    """Raised when the OCR function call fails or returns an error body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
