from visionocr.ocr.metrics import (
    DEFAULT_CONFIDENCE_NOTE,
    HANDWRITING_CONFIDENCE_NOTE,
    confidence_note,
    count_characters,
    count_words,
)
from visionocr.ocr.models import OcrMode


class TestCountWords:
    def test_counts_whitespace_separated_tokens(self) -> None:
        assert count_words("Invoice  No. 42\n\tTotal: $10") == 5

    def test_ignores_leading_and_trailing_whitespace(self) -> None:
        assert count_words("  one two  \n") == 2

    def test_empty_text_has_no_words(self) -> None:
        assert count_words("") == 0
        assert count_words(" \n ") == 0


class TestCountCharacters:
    def test_counts_every_character_including_whitespace(self) -> None:
        assert count_characters("ab c\n") == 5


class TestConfidenceNote:
    def test_handwriting_note(self) -> None:
        assert confidence_note(OcrMode.HANDWRITING) == HANDWRITING_CONFIDENCE_NOTE

    def test_other_modes_share_default_note(self) -> None:
        assert confidence_note(OcrMode.PRINTED) == DEFAULT_CONFIDENCE_NOTE
        assert confidence_note(OcrMode.MIXED) == DEFAULT_CONFIDENCE_NOTE
