from psycopg.rows import dict_row

from visionocr.database.connection import get_connection
from visionocr.database.models import OcrResultRecord
from visionocr.ocr.models import OcrResult


class OcrResultsRepository:
    """Database operations for the ocr_results table."""

    def create(self, user_id: str, document_id: str, result: OcrResult) -> OcrResultRecord:
        """Persist the OCR result linked to ``document_id``."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO ocr_results
                    (document_id, user_id, extracted_text, word_count,
                     character_count, processing_time_ms)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at
                    """,
                    (
                        document_id,
                        user_id,
                        result.extracted_text,
                        result.word_count,
                        result.character_count,
                        result.processing_time_ms,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO ocr_results returned no row")
        return OcrResultRecord(
            id=str(row["id"]),
            document_id=document_id,
            user_id=user_id,
            extracted_text=result.extracted_text,
            word_count=result.word_count,
            character_count=result.character_count,
            processing_time_ms=result.processing_time_ms,
            created_at=row["created_at"],
        )

    def find_by_document_id(self, user_id: str, document_id: str) -> OcrResultRecord | None:
        """Return the OCR result of a document, or None if it has none."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, user_id, extracted_text, word_count,
                           character_count, processing_time_ms, created_at
                    FROM ocr_results
                    WHERE document_id = %s AND user_id = %s
                    """,
                    (document_id, user_id),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return OcrResultRecord(
            id=str(row["id"]),
            document_id=str(row["document_id"]),
            user_id=str(row["user_id"]),
            extracted_text=row["extracted_text"],
            word_count=row["word_count"],
            character_count=row["character_count"],
            processing_time_ms=row["processing_time_ms"],
            created_at=row["created_at"],
        )
