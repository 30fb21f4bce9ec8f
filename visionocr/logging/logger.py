import logging
import sys


class Log:
    """Process-wide ``visionocr`` logger shared by the server, client and CLI."""

    _logger: logging.Logger = logging.getLogger("visionocr")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level; the stdout handler is attached only once."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str) -> None:
        cls._logger.info(message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def exception(cls, message: str) -> None:
        """Log at ERROR level with the active exception's traceback."""
        cls._logger.exception(message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._logger.warning(message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)
