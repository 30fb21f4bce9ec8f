from typing import Any

from psycopg.rows import dict_row

from visionocr.database.connection import get_connection
from visionocr.database.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PROCESSING,
    DocumentRecord,
    HistoryRow,
)
from visionocr.processor.exceptions import DocumentNotFoundError

_DOCUMENT_COLUMNS = """
    id, user_id, file_name, file_type, file_size, status, created_at, updated_at
"""


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        file_name=row["file_name"],
        file_type=row["file_type"],
        file_size=row["file_size"],
        status=row["status"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentsRepository:
    """Database operations for the documents table.

    Every statement is scoped by ``user_id``; a row owned by another user is
    reported as not found.
    """

    def create(
        self,
        user_id: str,
        file_name: str,
        file_type: str,
        file_size: int,
    ) -> DocumentRecord:
        """Insert a new document in the ``processing`` state."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents (user_id, file_name, file_type, file_size, status)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_DOCUMENT_COLUMNS}
                    """,
                    (user_id, file_name, file_type, file_size, STATUS_PROCESSING),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return _to_record(row)

    def find_by_id(self, user_id: str, document_id: str) -> DocumentRecord:
        """Find a document owned by ``user_id``.

        Raises:
            DocumentNotFoundError: if no such document exists for this user.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE id = %s AND user_id = %s
                    """,
                    (document_id, user_id),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def mark_completed(self, user_id: str, document_id: str) -> None:
        """Mark a document as completed."""
        self._update_status(user_id, document_id, STATUS_COMPLETED)

    def mark_failed(self, user_id: str, document_id: str) -> None:
        """Mark a document as failed."""
        self._update_status(user_id, document_id, STATUS_FAILED)

    def list_recent(self, user_id: str, limit: int) -> list[HistoryRow]:
        """Return the user's newest documents with their extracted text."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT d.id, d.file_name, d.file_type, d.status, d.created_at,
                           COALESCE(r.extracted_text, '') AS extracted_text
                    FROM documents d
                    LEFT JOIN ocr_results r ON r.document_id = d.id
                    WHERE d.user_id = %s
                    ORDER BY d.created_at DESC
                    LIMIT %s
                    """,
                    (user_id, limit),
                )
                rows = cur.fetchall()

        return [
            HistoryRow(
                id=str(row["id"]),
                file_name=row["file_name"],
                file_type=row["file_type"],
                status=row["status"],
                created_at=row["created_at"],
                extracted_text=row["extracted_text"],
            )
            for row in rows
        ]

    def delete(self, user_id: str, document_id: str) -> None:
        """Delete a document; its OCR result goes with it via ON DELETE CASCADE.

        Raises:
            DocumentNotFoundError: if no such document exists for this user.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM documents WHERE id = %s AND user_id = %s",
                    (document_id, user_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def _update_status(self, user_id: str, document_id: str, status: str) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s, updated_at = NOW()
                    WHERE id = %s AND user_id = %s
                    """,
                    (status, document_id, user_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
