from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "visionocr"
    db_username: str = "visionocr"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 10.0

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "*"

    backend_url: str = "http://localhost:54321"
    backend_service_role_key: str = ""
    backend_publishable_key: str = ""
    auth_timeout_seconds: int = 10

    ocr_provider: str = "gateway"
    ai_max_tokens: int = 4096
    max_file_size_mb: int = 10

    gateway_base_url: str = "https://ai.gateway.lovable.dev/v1"
    gateway_api_key: str = ""
    gateway_model_name: str = "google/gemini-2.5-flash"
    gateway_timeout_seconds: int = 60

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_timeout_seconds: int = 60

    ocr_function_url: str = "http://localhost:8000/functions/v1/ocr-process"
    client_timeout_seconds: int = 120
    files_root: Path = Path("files")
    session_file: Path = Path.home() / ".visionocr" / "session.json"
    history_limit: int = 10

    @property
    def cors_origin_list(self) -> list[str]:
        """Comma-separated ``cors_origins`` as a list; empty means any origin."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]
