"""Tests for the OCR function HTTP surface."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from visionocr.api.app import OCR_PROCESS_PATH, create_app
from visionocr.auth.exceptions import AuthenticationError
from visionocr.auth.models import AuthenticatedUser
from visionocr.config.settings import Settings
from visionocr.ocr.engine import OcrEngine
from visionocr.ocr.exceptions import (
    OcrNetworkError,
    OcrQuotaExceededError,
    OcrRateLimitError,
    OcrUpstreamError,
)

TEN_MB = 10 * 1024 * 1024


def _make_client(
    vision_client: MagicMock | None = None,
    verifier: MagicMock | None = None,
    publishable_key: str = "",
) -> tuple[TestClient, MagicMock, MagicMock]:
    if vision_client is None:
        vision_client = MagicMock()
        vision_client.create_vision_completion.return_value = "Hello world from OCR"
    if verifier is None:
        verifier = MagicMock()
        verifier.verify.return_value = AuthenticatedUser(id="user-1", email="a@example.com")
    settings = Settings(backend_publishable_key=publishable_key)
    engine = OcrEngine(client=vision_client, model="test-model")
    app = create_app(settings, verifier=verifier, engine=engine)
    return TestClient(app), vision_client, verifier


def _body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "imageBase64": "aGVsbG8=",
        "fileName": "scan.png",
        "fileType": "image/png",
        "mode": "printed",
        "userAccessToken": "user-token",
    }
    body.update(overrides)
    return body


class TestSuccess:
    def test_returns_flat_result(self) -> None:
        client, _vision, _verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=_body())

        assert response.status_code == 200
        data = response.json()
        assert data["extracted_text"] == "Hello world from OCR"
        assert data["word_count"] == 4
        assert data["character_count"] == len("Hello world from OCR")
        assert data["confidence_note"] == "High confidence OCR extraction"
        assert isinstance(data["processing_time_ms"], int)

    @pytest.mark.parametrize(
        "text",
        ["single", "  padded   words\n\nacross lines  ", "tab\tseparated\tvalues"],
    )
    def test_counts_match_returned_text(self, text: str) -> None:
        vision = MagicMock()
        vision.create_vision_completion.return_value = text
        client, _vision, _verifier = _make_client(vision_client=vision)

        data = client.post(OCR_PROCESS_PATH, json=_body()).json()

        assert data["word_count"] == len(data["extracted_text"].split())
        assert data["character_count"] == len(data["extracted_text"])

    def test_verifies_token_with_auth_service(self) -> None:
        client, _vision, verifier = _make_client()
        client.post(OCR_PROCESS_PATH, json=_body())
        verifier.verify.assert_called_once_with("user-token")

    def test_unknown_mode_uses_mixed_prompts(self) -> None:
        client, vision, _verifier = _make_client()
        client.post(OCR_PROCESS_PATH, json=_body(mode="typewriter"))
        kwargs = vision.create_vision_completion.call_args.kwargs
        assert "printed and handwritten" in kwargs["user_prompt"]

    def test_health(self) -> None:
        client, _vision, _verifier = _make_client()
        assert client.get("/health").json() == {"status": "ok", "service": "visionocr"}


class TestAuthentication:
    def test_missing_token_is_rejected_before_external_calls(self) -> None:
        client, vision, verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=_body(userAccessToken=None))

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        verifier.verify.assert_not_called()
        vision.create_vision_completion.assert_not_called()

    def test_empty_token_is_rejected(self) -> None:
        client, _vision, verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=_body(userAccessToken=""))
        assert response.status_code == 401
        verifier.verify.assert_not_called()

    def test_rejected_token_is_unauthorized(self) -> None:
        verifier = MagicMock()
        verifier.verify.side_effect = AuthenticationError("Token rejected by auth service: 401")
        client, vision, _verifier = _make_client(verifier=verifier)

        response = client.post(OCR_PROCESS_PATH, json=_body())

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        vision.create_vision_completion.assert_not_called()


class TestGatewayCredential:
    def test_missing_publishable_key_is_rejected(self) -> None:
        client, _vision, verifier = _make_client(publishable_key="pub-key")
        response = client.post(OCR_PROCESS_PATH, json=_body())
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid gateway credential"}
        verifier.verify.assert_not_called()

    def test_bearer_publishable_key_is_admitted(self) -> None:
        client, _vision, _verifier = _make_client(publishable_key="pub-key")
        response = client.post(
            OCR_PROCESS_PATH,
            json=_body(),
            headers={"Authorization": "Bearer pub-key"},
        )
        assert response.status_code == 200

    def test_apikey_header_is_admitted(self) -> None:
        client, _vision, _verifier = _make_client(publishable_key="pub-key")
        response = client.post(OCR_PROCESS_PATH, json=_body(), headers={"apikey": "pub-key"})
        assert response.status_code == 200

    def test_user_jwt_bearer_with_apikey_is_admitted(self) -> None:
        client, _vision, verifier = _make_client(publishable_key="pub-key")
        response = client.post(
            OCR_PROCESS_PATH,
            json=_body(),
            headers={"Authorization": "Bearer user-jwt", "apikey": "pub-key"},
        )
        assert response.status_code == 200
        verifier.verify.assert_called_once_with("user-token")

    def test_wrong_key_in_both_headers_is_rejected(self) -> None:
        client, _vision, _verifier = _make_client(publishable_key="pub-key")
        response = client.post(
            OCR_PROCESS_PATH,
            json=_body(),
            headers={"Authorization": "Bearer user-jwt", "apikey": "other-key"},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid gateway credential"}


class TestValidation:
    def test_missing_image_data(self) -> None:
        client, vision, _verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=_body(imageBase64=""))
        assert response.status_code == 400
        assert response.json() == {"error": "No image data provided"}
        vision.create_vision_completion.assert_not_called()

    @pytest.mark.parametrize("file_type", ["image/png", "application/pdf", "text/plain", ""])
    def test_oversized_payload_rejected_regardless_of_type(self, file_type: str) -> None:
        client, vision, _verifier = _make_client()
        oversized = "A" * (TEN_MB * 4 // 3 + 4)
        response = client.post(
            OCR_PROCESS_PATH, json=_body(imageBase64=oversized, fileType=file_type)
        )
        assert response.status_code == 400
        assert response.json() == {"error": "File too large. Maximum size is 10MB"}
        vision.create_vision_completion.assert_not_called()

    def test_disallowed_type_rejected(self) -> None:
        client, vision, _verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=_body(fileType="image/tiff"))
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid file type. Allowed: PNG, JPEG, WebP, GIF, PDF"}
        vision.create_vision_completion.assert_not_called()

    def test_malformed_json_rejected(self) -> None:
        client, _vision, _verifier = _make_client()
        response = client.post(
            OCR_PROCESS_PATH,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_non_object_body_rejected(self) -> None:
        client, _vision, _verifier = _make_client()
        response = client.post(OCR_PROCESS_PATH, json=["not", "an", "object"])
        assert response.status_code == 400


class TestUpstreamFailures:
    def _client_raising(self, exc: Exception) -> TestClient:
        vision = MagicMock()
        vision.create_vision_completion.side_effect = exc
        client, _vision, _verifier = _make_client(vision_client=vision)
        return client

    def test_rate_limit_passes_through(self) -> None:
        response = self._client_raising(OcrRateLimitError()).post(OCR_PROCESS_PATH, json=_body())
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Please try again in a moment."}

    def test_quota_passes_through(self) -> None:
        response = self._client_raising(OcrQuotaExceededError()).post(
            OCR_PROCESS_PATH, json=_body()
        )
        assert response.status_code == 402
        assert response.json() == {"error": "Usage limit reached. Please add credits to continue."}

    def test_other_upstream_status_is_generic_failure(self) -> None:
        response = self._client_raising(OcrUpstreamError(503)).post(OCR_PROCESS_PATH, json=_body())
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "AI Gateway error: 503"
        assert "processing_time_ms" in data

    def test_network_error_is_generic_failure(self) -> None:
        response = self._client_raising(OcrNetworkError("AI provider network error: boom")).post(
            OCR_PROCESS_PATH, json=_body()
        )
        assert response.status_code == 500

    def test_empty_extraction_is_generic_failure(self) -> None:
        vision = MagicMock()
        vision.create_vision_completion.return_value = "   "
        client, _vision, _verifier = _make_client(vision_client=vision)
        response = client.post(OCR_PROCESS_PATH, json=_body())
        assert response.status_code == 500
        assert response.json()["error"] == "No text could be extracted from the image"

    def test_unexpected_error_hides_details(self) -> None:
        response = self._client_raising(RuntimeError("secret internals")).post(
            OCR_PROCESS_PATH, json=_body()
        )
        assert response.status_code == 500
        assert response.json()["error"] == "Unknown error occurred"


class TestCors:
    def test_preflight_allows_client_headers(self) -> None:
        client, _vision, _verifier = _make_client()
        response = client.options(
            OCR_PROCESS_PATH,
            headers={
                "Origin": "https://app.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, apikey, content-type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
