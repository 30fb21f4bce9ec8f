"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in OcrEngineFactory.
"""

from typing import ClassVar

from visionocr.ocr.client_base import BaseVisionClient


class ExampleClientAdapter(BaseVisionClient):
    """Example adapter that returns a fixed transcription.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_TEXT: ClassVar[str] = (
        "Document Analysis Complete\n\n"
        "[DEMO MODE - Configure an AI provider for real extraction]"
    )

    def __init__(self, text: str | None = None) -> None:
        self._text = text if text is not None else self.DEFAULT_TEXT

    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        _ = model, system_prompt, user_prompt, image_url, max_tokens
        return self._text
