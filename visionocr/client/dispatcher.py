from pathlib import Path
from typing import Any

import httpx

from visionocr.auth.backend_auth_client import BackendAuthClient
from visionocr.auth.exceptions import AuthenticationError, NotSignedInError
from visionocr.auth.models import Session
from visionocr.auth.session_store import SessionStore
from visionocr.client.encoder import EncodedFile, encode_file
from visionocr.client.exceptions import OcrRequestError, UnsupportedFileTypeError
from visionocr.config.settings import Settings
from visionocr.logging.logger import Log
from visionocr.ocr.models import OcrMode, OcrResult

HANDWRITING_KEYWORDS = (
    "handwritten",
    "handwriting",
    "notes",
    "notebook",
    "manuscript",
    "letter",
    "diary",
    "journal",
)


def is_likely_handwritten(file_name: str) -> bool:
    """Guess from the file name whether a document is handwritten."""
    lower_name = file_name.lower()
    return any(keyword in lower_name for keyword in HANDWRITING_KEYWORDS)


def detect_mode(file_name: str) -> OcrMode:
    return OcrMode.HANDWRITING if is_likely_handwritten(file_name) else OcrMode.MIXED


class OcrDispatcher:
    """Sends encoded files to the OCR function on behalf of the signed-in user.

    Two credentials travel with each call: the publishable key in the
    headers admits the request at the gateway, and the user's access token
    in the body identifies the caller.

    With an ``auth_client`` an expired access token is refreshed once and the
    call retried.
    """

    def __init__(
        self,
        *,
        function_url: str,
        publishable_key: str,
        session_store: SessionStore,
        timeout_seconds: int = 120,
        auth_client: BackendAuthClient | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._function_url = function_url
        self._session_store = session_store
        self._auth_client = auth_client
        headers = {}
        if publishable_key:
            headers = {
                "Authorization": f"Bearer {publishable_key}",
                "apikey": publishable_key,
            }
        self._client = httpx.Client(headers=headers, timeout=timeout_seconds, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, session_store: SessionStore) -> "OcrDispatcher":
        return cls(
            function_url=settings.ocr_function_url,
            publishable_key=settings.backend_publishable_key,
            session_store=session_store,
            timeout_seconds=settings.client_timeout_seconds,
            auth_client=BackendAuthClient.for_client(settings),
        )

    def process_document(self, path: Path, mode: OcrMode | None = None) -> OcrResult:
        """Encode a local file and extract its text."""
        return self.process_file(encode_file(path), mode)

    def process_file(self, encoded: EncodedFile, mode: OcrMode | None = None) -> OcrResult:
        """Route an encoded file by type; the mode is guessed from its name if unset.

        Raises:
            UnsupportedFileTypeError: if the file is neither an image nor a PDF.
        """
        detected_mode = mode or detect_mode(encoded.file_name)
        if encoded.is_pdf:
            return self.process_pdf(encoded, detected_mode)
        if encoded.is_image:
            return self.process_image(encoded, detected_mode)
        raise UnsupportedFileTypeError(f"Unsupported file type: {encoded.file_type}")

    def process_image(self, encoded: EncodedFile, mode: OcrMode = OcrMode.MIXED) -> OcrResult:
        return self.invoke(encoded, mode)

    def process_pdf(self, encoded: EncodedFile, mode: OcrMode = OcrMode.PRINTED) -> OcrResult:
        # The whole PDF goes out as one payload.
        return self.invoke(encoded, mode)

    def process_handwriting(self, encoded: EncodedFile) -> OcrResult:
        return self.process_image(encoded, OcrMode.HANDWRITING)

    def invoke(self, encoded: EncodedFile, mode: OcrMode) -> OcrResult:
        """POST one file to the OCR function.

        Raises:
            NotSignedInError: if there is no current session or it cannot be
                refreshed.
            OcrRequestError: on transport failure or an error response.
        """
        session = self._session_store.load()
        if session is None or not session.access_token:
            raise NotSignedInError("You must be logged in to use OCR processing")

        Log.debug(f"Invoking OCR function for {encoded.file_name} ({mode.value})")
        response = self._post(encoded, mode, session.access_token)
        if (
            response.status_code == httpx.codes.UNAUTHORIZED
            and self._auth_client is not None
            and session.refresh_token
        ):
            session = self._refresh(self._auth_client, session)
            response = self._post(encoded, mode, session.access_token)

        data = self._json_body(response)
        if data.get("error"):
            raise OcrRequestError(str(data["error"]), status_code=response.status_code)
        if response.is_error:
            raise OcrRequestError(
                f"OCR processing failed: {response.status_code}",
                status_code=response.status_code,
            )
        return OcrResult.from_dict(data)

    def close(self) -> None:
        self._client.close()
        if self._auth_client is not None:
            self._auth_client.close()

    def _post(self, encoded: EncodedFile, mode: OcrMode, access_token: str) -> httpx.Response:
        try:
            return self._client.post(
                self._function_url,
                json={
                    "imageBase64": encoded.base64_data,
                    "fileName": encoded.file_name,
                    "fileType": encoded.file_type,
                    "mode": mode.value,
                    "userAccessToken": access_token,
                },
            )
        except httpx.HTTPError as exc:
            raise OcrRequestError(f"OCR processing failed: {exc}") from exc

    def _refresh(self, auth_client: BackendAuthClient, session: Session) -> Session:
        try:
            refreshed = auth_client.refresh_session(session.refresh_token)
        except AuthenticationError as exc:
            self._session_store.clear()
            raise NotSignedInError("Your session has expired. Please log in again.") from exc
        self._session_store.save(refreshed)
        Log.info("Session refreshed")
        return refreshed

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
