from dataclasses import asdict, dataclass
from enum import Enum


class OcrMode(str, Enum):
    """Extraction hint that selects the prompt pair."""

    PRINTED = "printed"
    HANDWRITING = "handwriting"
    MIXED = "mixed"

    @classmethod
    def from_value(cls, value: str | None) -> "OcrMode":
        """Resolve a mode name; unknown or empty values fall back to MIXED."""
        if not value:
            return cls.MIXED
        try:
            return cls(value.lower())
        except ValueError:
            return cls.MIXED


@dataclass(frozen=True)
class OcrRequest:
    """A validated-shape OCR request, before size/type checks."""

    image_base64: str
    file_name: str = ""
    file_type: str = ""
    mode: OcrMode = OcrMode.MIXED


@dataclass(frozen=True)
class PromptPair:
    """System and user instructions for one extraction mode."""

    system_prompt: str
    user_prompt: str


@dataclass(frozen=True)
class OcrResult:
    """Flat OCR result as returned by the OCR function."""

    extracted_text: str
    processing_time_ms: int
    word_count: int
    character_count: int
    confidence_note: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "OcrResult":
        return cls(
            extracted_text=str(data.get("extracted_text") or ""),
            processing_time_ms=int(data.get("processing_time_ms") or 0),  # type: ignore[call-overload]
            word_count=int(data.get("word_count") or 0),  # type: ignore[call-overload]
            character_count=int(data.get("character_count") or 0),  # type: ignore[call-overload]
            confidence_note=str(data.get("confidence_note") or ""),
        )
