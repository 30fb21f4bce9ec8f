import re
from pathlib import Path

from visionocr.processor.exceptions import StorageError

_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_-]+$")


def document_file_path(files_root: Path, user_id: str, document_id: str, file_name: str) -> Path:
    """Build path to a stored file: {files_root}/{user_id}/{document_id}{suffix}"""
    return files_root / user_id / f"{document_id}{Path(file_name).suffix.lower()}"


class DocumentStorage:
    """Stores uploaded files under a per-user directory.

    A user can only reach paths below ``{files_root}/{user_id}/``.
    """

    FILES_ROOT = Path("files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def save(self, user_id: str, document_id: str, file_name: str, data: bytes) -> Path:
        path = self._resolve(user_id, document_id, file_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to store {file_name}: {exc}") from exc
        return path

    def find(self, user_id: str, document_id: str) -> Path | None:
        """Return the stored file of a document, or None if there is none."""
        user_dir = self._user_dir(user_id)
        self._check_segment(document_id)
        if not user_dir.is_dir():
            return None
        for path in sorted(user_dir.glob(f"{document_id}*")):
            if path.stem == document_id:
                return path
        return None

    def delete(self, user_id: str, document_id: str) -> bool:
        """Remove the stored file of a document. Returns False if there was none."""
        path = self.find(user_id, document_id)
        if path is None:
            return False
        try:
            path.unlink()
        except OSError as exc:
            raise StorageError(f"Failed to delete {path.name}: {exc}") from exc
        return True

    def _user_dir(self, user_id: str) -> Path:
        self._check_segment(user_id)
        return self._files_root / user_id

    def _resolve(self, user_id: str, document_id: str, file_name: str) -> Path:
        self._check_segment(document_id)
        path = document_file_path(self._files_root, user_id, document_id, file_name)
        if path.resolve().parent != self._user_dir(user_id).resolve():
            raise StorageError(f"Path {path} is outside the storage area of user {user_id}")
        return path

    @staticmethod
    def _check_segment(segment: str) -> None:
        if not _SAFE_SEGMENT.match(segment):
            raise StorageError(f"Invalid path segment: {segment!r}")
