from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific vision chat-completion clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_url: str,
        max_tokens: int,
    ) -> str:
        """Return the assistant message content as plain text.

        Raises:
            OcrRateLimitError: provider answered 429.
            OcrQuotaExceededError: provider answered 402.
            OcrUpstreamError: provider answered any other error status.
            OcrNetworkError: provider could not be reached.
        """
