from dataclasses import replace
from pathlib import Path

from visionocr.auth.models import Session
from visionocr.auth.session_store import SessionStore
from visionocr.client.dispatcher import OcrDispatcher
from visionocr.client.encoder import encode_bytes, read_file
from visionocr.client.exceptions import UnsupportedFileTypeError
from visionocr.config.settings import Settings
from visionocr.database.models import STATUS_COMPLETED
from visionocr.database.repositories.documents_repository import DocumentsRepository
from visionocr.database.repositories.ocr_results_repository import OcrResultsRepository
from visionocr.logging.logger import Log
from visionocr.ocr.models import OcrMode
from visionocr.processor.models import ScanOutcome
from visionocr.processor.storage import DocumentStorage


class DocumentProcessor:
    """Orchestrates one scan for the signed-in user.

    Pipeline: create document -> store file -> OCR -> persist result -> complete.
    A failure after the document row exists marks it failed and re-raises.
    """

    def __init__(
        self,
        dispatcher: OcrDispatcher,
        doc_repo: DocumentsRepository,
        results_repo: OcrResultsRepository,
        storage: DocumentStorage,
    ) -> None:
        self._dispatcher = dispatcher
        self._doc_repo = doc_repo
        self._results_repo = results_repo
        self._storage = storage

    def scan(self, session: Session, path: Path, mode: OcrMode | None = None) -> ScanOutcome:
        """Extract text from a local file and record it in the user's history."""
        data = read_file(path)
        encoded = encode_bytes(path.name, data)
        if not (encoded.is_pdf or encoded.is_image):
            raise UnsupportedFileTypeError(f"Unsupported file type: {encoded.file_type}")

        user_id = session.user.id
        document = self._doc_repo.create(
            user_id,
            file_name=encoded.file_name,
            file_type=encoded.file_type,
            file_size=encoded.file_size,
        )
        Log.info(f"Created document {document.id} for {encoded.file_name}")

        try:
            self._storage.save(user_id, document.id, encoded.file_name, data)
            result = self._dispatcher.process_file(encoded, mode)
            self._results_repo.create(user_id, document.id, result)
        except Exception as exc:
            Log.error(f"Document {document.id} failed: {exc}")
            self._mark_failed(user_id, document.id)
            raise

        self._doc_repo.mark_completed(user_id, document.id)
        Log.info(
            f"Document {document.id} completed: {result.word_count} words, "
            f"{result.character_count} chars in {result.processing_time_ms}ms"
        )
        return ScanOutcome(document=replace(document, status=STATUS_COMPLETED), result=result)

    def _mark_failed(self, user_id: str, document_id: str) -> None:
        """Record the failure without masking the error that caused it."""
        try:
            self._doc_repo.mark_failed(user_id, document_id)
        except Exception as exc:  # noqa: BLE001
            Log.error(f"Could not mark document {document_id} as failed: {exc}")


def build_processor(settings: Settings, session_store: SessionStore) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    return DocumentProcessor(
        dispatcher=OcrDispatcher.from_settings(settings, session_store),
        doc_repo=DocumentsRepository(),
        results_repo=OcrResultsRepository(),
        storage=DocumentStorage(files_root=settings.files_root),
    )
