from abc import ABC, abstractmethod

from visionocr.ocr.models import OcrRequest, OcrResult


class BaseOcrEngine(ABC):
    """Contract for all OCR engines."""

    @abstractmethod
    def extract(self, request: OcrRequest, started_at: float | None = None) -> OcrResult:
        """Validate the payload, run extraction and measure the result.

        Args:
            request: Encoded image plus display metadata and mode.
            started_at: ``time.monotonic()`` value the elapsed time is
                measured from. Defaults to the moment of the call.

        Raises:
            OcrError: on any failure.
        """
