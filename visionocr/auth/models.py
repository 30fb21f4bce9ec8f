from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """User identity as reported by the backend auth service."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """A signed-in session."""

    access_token: str
    user: AuthenticatedUser
    refresh_token: str = ""
