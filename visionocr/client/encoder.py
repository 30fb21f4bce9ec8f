import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from visionocr.client.exceptions import FileReadError

UNKNOWN_FILE_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class EncodedFile:
    """A local file ready to be sent to the OCR function."""

    file_name: str
    file_type: str
    file_size: int
    base64_data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.file_type};base64,{self.base64_data}"

    @property
    def is_pdf(self) -> bool:
        return self.file_type == "application/pdf"

    @property
    def is_image(self) -> bool:
        return self.file_type.startswith("image/")


def guess_file_type(file_name: str) -> str:
    """MIME type from the file extension, as a browser would report it."""
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or UNKNOWN_FILE_TYPE


def encode_bytes(file_name: str, data: bytes, file_type: str | None = None) -> EncodedFile:
    return EncodedFile(
        file_name=file_name,
        file_type=file_type or guess_file_type(file_name),
        file_size=len(data),
        base64_data=base64.b64encode(data).decode("ascii"),
    )


def read_file(path: Path) -> bytes:
    """Raises FileReadError if the file cannot be read."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"Cannot read {path}: {exc}") from exc


def encode_file(path: Path) -> EncodedFile:
    """Read a file and encode it as raw base64 (no data URL prefix).

    Raises:
        FileReadError: if the file cannot be read.
    """
    return encode_bytes(path.name, read_file(path))
