import logging

from visionocr.logging.logger import Log


class TestLog:
    def test_configure_sets_level_and_single_handler(self) -> None:
        logger = logging.getLogger("visionocr")
        previous_level = logger.level
        previous_handlers = list(logger.handlers)
        try:
            Log.configure("debug")
            Log.configure("warning")

            assert logger.level == logging.WARNING
            assert len(logger.handlers) == max(len(previous_handlers), 1)
        finally:
            logger.setLevel(previous_level)
            logger.handlers = previous_handlers

    def test_messages_reach_visionocr_logger(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="visionocr"):
            Log.info("Processing OCR for file: scan.png")
            Log.warning("Ignoring unreadable session file")

        messages = [record.getMessage() for record in caplog.records if record.name == "visionocr"]
        assert messages == [
            "Processing OCR for file: scan.png",
            "Ignoring unreadable session file",
        ]
