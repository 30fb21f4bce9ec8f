from visionocr.config.settings import Settings
from visionocr.database.repositories.documents_repository import DocumentsRepository
from visionocr.database.repositories.ocr_results_repository import OcrResultsRepository
from visionocr.logging.logger import Log
from visionocr.processor.exceptions import StorageError
from visionocr.processor.models import DocumentDetail, HistoryItem
from visionocr.processor.storage import DocumentStorage


class HistoryService:
    """Reads and deletes a user's processed documents."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        results_repo: OcrResultsRepository,
        storage: DocumentStorage,
        default_limit: int = 10,
    ) -> None:
        self._doc_repo = doc_repo
        self._results_repo = results_repo
        self._storage = storage
        self._default_limit = default_limit

    def recent(self, user_id: str, limit: int | None = None) -> list[HistoryItem]:
        """Newest documents first, each with its extracted text ("" if none)."""
        rows = self._doc_repo.list_recent(user_id, limit or self._default_limit)
        return [
            HistoryItem(
                id=row.id,
                file_name=row.file_name,
                file_type=row.file_type,
                status=row.status,
                extracted_text=row.extracted_text,
                processed_at=row.created_at,
            )
            for row in rows
        ]

    def get(self, user_id: str, document_id: str) -> DocumentDetail:
        """Raises DocumentNotFoundError for unknown or foreign documents."""
        document = self._doc_repo.find_by_id(user_id, document_id)
        result = self._results_repo.find_by_document_id(user_id, document_id)
        return DocumentDetail(document=document, result=result)

    def delete(self, user_id: str, document_id: str) -> None:
        """Delete a document, its OCR result and its stored file.

        Once the row is gone the document is out of the history, so a file that
        cannot be removed is only logged.

        Raises:
            DocumentNotFoundError: if the user has no such document.
        """
        self._doc_repo.delete(user_id, document_id)
        try:
            self._storage.delete(user_id, document_id)
        except StorageError as exc:
            Log.warning(f"Document {document_id} deleted but its file remains: {exc}")
        Log.info(f"Deleted document {document_id}")


def build_history_service(settings: Settings) -> HistoryService:
    return HistoryService(
        doc_repo=DocumentsRepository(),
        results_repo=OcrResultsRepository(),
        storage=DocumentStorage(files_root=settings.files_root),
        default_limit=settings.history_limit,
    )
