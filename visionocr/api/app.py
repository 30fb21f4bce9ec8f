import hmac
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from visionocr.api.errors import GatewayCredentialError, error_response, response_for_exception
from visionocr.api.handler import OcrRequestHandler
from visionocr.api.schemas import OcrProcessRequest
from visionocr.auth.backend_auth_client import BackendAuthClient
from visionocr.auth.base import BaseTokenVerifier
from visionocr.config.settings import Settings
from visionocr.ocr.base import BaseOcrEngine
from visionocr.ocr.factory import OcrEngineFactory

OCR_PROCESS_PATH = "/functions/v1/ocr-process"
CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def _presented_gateway_keys(request: Request) -> list[str]:
    """Candidate keys from the bearer token and the ``apikey`` header."""
    candidates: list[str] = []
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        candidates.append(token.strip())
    apikey = request.headers.get("apikey", "")
    if apikey:
        candidates.append(apikey)
    return candidates


def check_gateway_credential(request: Request, publishable_key: str) -> None:
    """Admit the request if either header carries the publishable key.

    The bearer token may be a user JWT while ``apikey`` holds the key, so both
    are checked. No check is made when no publishable key is configured.
    """
    if not publishable_key:
        return
    expected = publishable_key.encode()
    matches = [
        hmac.compare_digest(key.encode(), expected) for key in _presented_gateway_keys(request)
    ]
    if not any(matches):
        raise GatewayCredentialError()


def create_app(
    settings: Settings,
    *,
    verifier: BaseTokenVerifier | None = None,
    engine: BaseOcrEngine | None = None,
) -> FastAPI:
    """Build the OCR function application.

    ``verifier`` and ``engine`` default to the backend auth client and the
    engine configured by ``settings.ocr_provider``.
    """
    handler = OcrRequestHandler(
        verifier=verifier if verifier is not None else BackendAuthClient.for_server(settings),
        engine=engine if engine is not None else OcrEngineFactory.create(settings),
    )

    app = FastAPI(title="VisionOCR", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": "visionocr"}

    @app.post(OCR_PROCESS_PATH)
    async def ocr_process(request: Request) -> JSONResponse:
        started_at = time.monotonic()
        try:
            check_gateway_credential(request, settings.backend_publishable_key)
        except GatewayCredentialError as exc:
            return response_for_exception(exc, started_at)

        try:
            body = OcrProcessRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            return error_response(400, "Invalid request body")

        try:
            result = await run_in_threadpool(handler.handle, body, started_at)
        except Exception as exc:  # noqa: BLE001
            return response_for_exception(exc, started_at)
        return JSONResponse(content=result.to_dict())

    return app
