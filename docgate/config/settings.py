from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "knowledge_base"
    db_username: str = "docgate"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    files_root: Path = Path("/app/files")
    pdf_engine: str = "pdfplumber"
    max_file_size_bytes: int = Field(default=50 * 1024 * 1024, gt=0)

    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)

    # Kill switch for privileged overrides of paragraph-structure-only failures.
    format_override_enabled: bool = True
    approved_queue_backend: str = "postgres"
