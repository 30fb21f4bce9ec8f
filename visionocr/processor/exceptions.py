class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found for the requesting user."""


class StorageError(ProcessorError):
    """Raised when a stored file cannot be written, read or removed."""
