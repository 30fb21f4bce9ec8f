from visionocr.api.schemas import OcrProcessRequest
from visionocr.auth.base import BaseTokenVerifier
from visionocr.auth.exceptions import AuthenticationError
from visionocr.logging.logger import Log
from visionocr.ocr.base import BaseOcrEngine
from visionocr.ocr.models import OcrMode, OcrRequest, OcrResult


class OcrRequestHandler:
    """Authenticate the caller, then hand the payload to the OCR engine."""

    def __init__(self, verifier: BaseTokenVerifier, engine: BaseOcrEngine) -> None:
        self._verifier = verifier
        self._engine = engine

    def handle(self, body: OcrProcessRequest, started_at: float) -> OcrResult:
        """Process one OCR request.

        The token check happens first, so an anonymous request never reaches
        the auth service or the AI provider.

        Raises:
            AuthenticationError: token missing or rejected.
            OcrError: validation or extraction failure.
        """
        if not body.user_access_token:
            Log.error("Missing userAccessToken")
            raise AuthenticationError("Authentication required")

        try:
            user = self._verifier.verify(body.user_access_token)
        except AuthenticationError as exc:
            Log.error(f"Authentication failed: {exc}")
            raise AuthenticationError("Unauthorized") from exc

        Log.info(f"OCR request from authenticated user: {user.id}")

        request = OcrRequest(
            image_base64=body.image_base64 or "",
            file_name=body.file_name or "",
            file_type=body.file_type or "",
            mode=OcrMode.from_value(body.mode),
        )
        return self._engine.extract(request, started_at=started_at)
