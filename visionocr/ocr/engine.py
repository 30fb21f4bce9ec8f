"""AI-powered OCR engine."""

import time
from pathlib import Path

from visionocr.logging.logger import Log
from visionocr.ocr.base import BaseOcrEngine
from visionocr.ocr.client_base import BaseVisionClient
from visionocr.ocr.exceptions import OcrEmptyResultError
from visionocr.ocr.metrics import confidence_note, count_characters, count_words
from visionocr.ocr.models import OcrMode, OcrRequest, OcrResult, PromptPair
from visionocr.ocr.prompt_loader import load_prompt_pair
from visionocr.ocr.validator import build_image_url, validate_request


class OcrEngine(BaseOcrEngine):
    """Extracts text from an encoded image through a vision-capable AI provider."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        max_tokens: int = 4096,
        max_file_size_mb: int = 10,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._max_file_size_mb = max_file_size_mb
        self._prompts: dict[OcrMode, PromptPair] = {
            mode: load_prompt_pair(mode, prompt_dir) for mode in OcrMode
        }

    def extract(self, request: OcrRequest, started_at: float | None = None) -> OcrResult:
        if started_at is None:
            started_at = time.monotonic()

        estimated_size = validate_request(request, self._max_file_size_mb)
        Log.info(
            f"Processing OCR for file: {request.file_name}, type: {request.file_type}, "
            f"mode: {request.mode.value}, size: {estimated_size / 1024:.1f}KB"
        )

        prompts = self._prompts[request.mode]
        extracted_text = self._client.create_vision_completion(
            model=self._model,
            system_prompt=prompts.system_prompt,
            user_prompt=prompts.user_prompt,
            image_url=build_image_url(request.image_base64, request.file_type),
            max_tokens=self._max_tokens,
        )
        if not extracted_text.strip():
            raise OcrEmptyResultError()

        result = OcrResult(
            extracted_text=extracted_text,
            processing_time_ms=int((time.monotonic() - started_at) * 1000),
            word_count=count_words(extracted_text),
            character_count=count_characters(extracted_text),
            confidence_note=confidence_note(request.mode),
        )
        Log.info(
            f"OCR completed: {result.word_count} words in {result.processing_time_ms}ms"
        )
        return result
