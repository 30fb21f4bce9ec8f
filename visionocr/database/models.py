from dataclasses import dataclass
from datetime import datetime

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class OcrResultRecord:
    """Represents a row from the ocr_results table."""

    id: str
    document_id: str
    user_id: str
    extracted_text: str
    word_count: int
    character_count: int
    processing_time_ms: int
    created_at: datetime | None = None


@dataclass
class HistoryRow:
    """A document joined with the extracted text of its OCR result, if any."""

    id: str
    file_name: str
    file_type: str
    status: str
    created_at: datetime
    extracted_text: str = ""
