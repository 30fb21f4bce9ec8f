from typing import ClassVar

from visionocr.config.settings import Settings
from visionocr.ocr.base import BaseOcrEngine
from visionocr.ocr.engine import OcrEngine
from visionocr.ocr.example_client_adapter import ExampleClientAdapter
from visionocr.ocr.openai_client_adapter import OpenAIClientAdapter


class OcrEngineFactory:
    """Creates the configured OCR engine."""

    SUPPORTED_PROVIDERS: ClassVar[list[str]] = [
        "example",
        "gateway",
        "openai",
        "openai_compatible",
    ]

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        """Create a configured OCR engine from application settings."""
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return OcrEngine(
                client=ExampleClientAdapter(),
                model="example",
                max_tokens=settings.ai_max_tokens,
                max_file_size_mb=settings.max_file_size_mb,
            )
        if provider not in cls.SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unknown OCR provider '{provider}'. Choose from: {cls.SUPPORTED_PROVIDERS}"
            )
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
        )
        return OcrEngine(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            max_tokens=settings.ai_max_tokens,
            max_file_size_mb=settings.max_file_size_mb,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "gateway":
            return settings.gateway_base_url
        url = settings.openai_compatible_base_url.strip()
        if not url:
            raise ValueError(
                "openai_compatible_base_url is required for ocr_provider=openai_compatible"
            )
        return url

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "gateway": settings.gateway_api_key,
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "gateway": settings.gateway_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "gateway": settings.gateway_timeout_seconds,
            "openai": settings.openai_timeout_seconds,
            "openai_compatible": settings.openai_compatible_timeout_seconds,
        }
        return key_map.get(provider, 60) or 60
