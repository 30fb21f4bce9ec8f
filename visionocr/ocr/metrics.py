from visionocr.ocr.models import OcrMode

HANDWRITING_CONFIDENCE_NOTE = (
    "Handwriting recognition - accuracy may vary based on writing clarity"
)
DEFAULT_CONFIDENCE_NOTE = "High confidence OCR extraction"


def count_words(text: str) -> int:
    """Number of whitespace-separated, non-empty tokens."""
    return len(text.split())


def count_characters(text: str) -> int:
    return len(text)


def confidence_note(mode: OcrMode) -> str:
    if mode is OcrMode.HANDWRITING:
        return HANDWRITING_CONFIDENCE_NOTE
    return DEFAULT_CONFIDENCE_NOTE
