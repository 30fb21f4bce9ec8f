from visionocr.ocr.base import BaseOcrEngine
from visionocr.ocr.engine import OcrEngine
from visionocr.ocr.factory import OcrEngineFactory
from visionocr.ocr.models import OcrMode, OcrRequest, OcrResult

__all__ = [
    "BaseOcrEngine",
    "OcrEngine",
    "OcrEngineFactory",
    "OcrMode",
    "OcrRequest",
    "OcrResult",
]
