class AuthenticationError(Exception):
    """Raised when a caller cannot be authenticated."""


class NotSignedInError(AuthenticationError):
    """Raised when an operation needs a session and there is none."""
