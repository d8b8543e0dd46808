from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "findoc"
    db_username: str = "findoc"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    storage_root: str = "/app/files"
    store_page_images: bool = False

    render_engine: str = "pymupdf"
    render_dpi: int = 200

    extraction_provider: str = "openai"
    extraction_max_workers: int = 4
    page_retry_attempts: int = 1

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_base_url: str = ""
    openai_timeout_seconds: int = 60
    openai_temperature: float = 0.0
    openai_max_tokens: int = 4096

    slash_date_order: str = "MDY"

    @field_validator("slash_date_order")
    @classmethod
    def _check_slash_date_order(cls, value: str) -> str:
        order = value.strip().upper()
        if order not in ("MDY", "DMY"):
            raise ValueError("slash_date_order must be 'MDY' or 'DMY'")
        return order
