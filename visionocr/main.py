import uvicorn

from visionocr.api.app import create_app
from visionocr.config.settings import Settings
from visionocr.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build the OCR function app -> serve it."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(f"OCR function listening on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
