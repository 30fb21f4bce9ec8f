import httpx
import openai

from visionocr.logging.logger import Log
from visionocr.ocr.client_base import BaseVisionClient
from visionocr.ocr.exceptions import (
    OcrConfigurationError,
    OcrNetworkError,
    OcrQuotaExceededError,
    OcrRateLimitError,
    OcrUpstreamError,
)

PAYMENT_REQUIRED = 402


class OpenAIClientAdapter(BaseVisionClient):
    """Vision client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        if not self._api_key:
            raise OcrConfigurationError("AI provider API key is not configured")
        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": user_prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    },
                ],
            )
        except openai.RateLimitError as exc:
            Log.error(f"AI Gateway error: 429 {exc}")
            raise OcrRateLimitError() from exc
        except openai.APIStatusError as exc:
            Log.error(f"AI Gateway error: {exc.status_code} {exc}")
            if exc.status_code == PAYMENT_REQUIRED:
                raise OcrQuotaExceededError() from exc
            raise OcrUpstreamError(exc.status_code) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise OcrNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise OcrNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
