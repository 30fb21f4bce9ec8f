from typing import Any

import httpx

from visionocr.auth.base import BaseTokenVerifier
from visionocr.auth.exceptions import AuthenticationError
from visionocr.auth.models import AuthenticatedUser, Session
from visionocr.config.settings import Settings


class BackendAuthClient(BaseTokenVerifier):
    """Client for the backend platform's auth REST API (``/auth/v1``)."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: int = 10,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={"apikey": api_key},
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def for_server(cls, settings: Settings) -> "BackendAuthClient":
        """Client holding the service-role key, used to verify user tokens."""
        return cls(
            base_url=settings.backend_url,
            api_key=settings.backend_service_role_key,
            timeout_seconds=settings.auth_timeout_seconds,
        )

    @classmethod
    def for_client(cls, settings: Settings) -> "BackendAuthClient":
        """Client holding the publishable key, used to sign users in."""
        return cls(
            base_url=settings.backend_url,
            api_key=settings.backend_publishable_key,
            timeout_seconds=settings.auth_timeout_seconds,
        )

    def verify(self, access_token: str) -> AuthenticatedUser:
        try:
            response = self._client.get(
                "/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Auth service unreachable: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise AuthenticationError(
                f"Token rejected by auth service: {response.status_code}"
            )
        return self._parse_user(self._json_body(response))

    def sign_in_with_password(self, email: str, password: str) -> Session:
        """Exchange email and password for a session.

        Raises:
            AuthenticationError: on wrong credentials or transport failure.
        """
        return self._token_grant("password", {"email": email, "password": password})

    def refresh_session(self, refresh_token: str) -> Session:
        """Trade a refresh token for a new session once the access token expired.

        Raises:
            AuthenticationError: if the refresh token is rejected.
        """
        return self._token_grant("refresh_token", {"refresh_token": refresh_token})

    def close(self) -> None:
        self._client.close()

    def _token_grant(self, grant_type: str, payload: dict[str, str]) -> Session:
        try:
            response = self._client.post(
                "/token",
                params={"grant_type": grant_type},
                json=payload,
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Auth service unreachable: {exc}") from exc

        body = self._json_body(response)
        if response.status_code != httpx.codes.OK:
            message = (
                body.get("error_description")
                or body.get("msg")
                or f"Auth request failed: {response.status_code}"
            )
            raise AuthenticationError(message)

        access_token = body.get("access_token")
        if not access_token:
            raise AuthenticationError("Auth service returned no access token")
        return Session(
            access_token=access_token,
            refresh_token=body.get("refresh_token") or "",
            user=self._parse_user(body.get("user") or {}),
        )

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _parse_user(data: dict[str, Any]) -> AuthenticatedUser:
        user_id = data.get("id")
        if not user_id:
            raise AuthenticationError("Auth service returned no user")
        email = data.get("email")
        return AuthenticatedUser(id=str(user_id), email=str(email) if email else None)
