from dataclasses import dataclass
from datetime import datetime

from visionocr.database.models import DocumentRecord, OcrResultRecord
from visionocr.ocr.models import OcrResult


@dataclass(frozen=True)
class HistoryItem:
    """One entry of a user's document history."""

    id: str
    file_name: str
    file_type: str
    status: str
    extracted_text: str
    processed_at: datetime


@dataclass(frozen=True)
class DocumentDetail:
    """A document together with its OCR result, if it has one."""

    document: DocumentRecord
    result: OcrResultRecord | None = None


@dataclass(frozen=True)
class ScanOutcome:
    """Outcome of a successful scan."""

    document: DocumentRecord
    result: OcrResult
