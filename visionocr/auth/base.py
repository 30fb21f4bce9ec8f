from abc import ABC, abstractmethod

from visionocr.auth.models import AuthenticatedUser


class BaseTokenVerifier(ABC):
    """Contract for resolving a user access token to a user."""

    @abstractmethod
    def verify(self, access_token: str) -> AuthenticatedUser:
        """Return the user owning ``access_token``.

        Raises:
            AuthenticationError: if the token is rejected or cannot be checked.
        """
