"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Annotated, Any
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from smartsummary.exceptions import ConfigurationError

_ENV_FILES = (".env", "../.env", "../../.env")

_REPO_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_ALLOWED_AUDIO_TYPES = ("audio/mpeg", "audio/wav", "audio/mp3", "audio/x-wav")


def _resolve_repo_path(value: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        return raw
    p = Path(raw)
    if p.is_absolute():
        return str(p)
    return str((_REPO_ROOT / p).resolve())


class EngineConfig(BaseSettings):
    """External transcription/summarization engines."""

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    transcribe_command: str = "python transcript.py"
    summarize_command: str = "python summarize.py"
    workdir: str | None = None
    timeout_s: float | None = Field(
        default=600.0,
        ge=0,
        description="Wall-clock limit for one engine run; 0 disables the limit.",
    )

    @model_validator(mode="after")
    def _validate_commands(self) -> "EngineConfig":
        if not self.transcribe_command.strip():
            raise ConfigurationError("ENGINE_TRANSCRIBE_COMMAND must not be empty")
        if not self.summarize_command.strip():
            raise ConfigurationError("ENGINE_SUMMARIZE_COMMAND must not be empty")
        if self.workdir:
            self.workdir = _resolve_repo_path(self.workdir)
        return self

    @property
    def effective_timeout_s(self) -> float | None:
        if not self.timeout_s:
            return None
        return float(self.timeout_s)


class MailConfig(BaseSettings):
    """Outbound notification mail (SMTP)."""

    model_config = SettingsConfigDict(
        env_prefix="MAIL_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = True
    host: str = "smtp.gmail.com"
    port: int = 587
    use_starttls: bool = True
    username: str = ""
    password: str = ""
    sender: str = ""
    # The notice always goes to one fixed mailbox when this is set.
    recipient: str = ""
    subject: str = "Meeting Notes"
    dashboard_url: str = "http://localhost:5000/dashboard"
    inline_image_path: str | None = None
    timeout_s: float = Field(default=30.0, gt=0)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=5, ge=0)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    upload_dir: str = "./uploads"
    log_dir: str = "./logs"
    upload_max_bytes: int = Field(default=50 * 1024 * 1024, ge=1)
    allowed_audio_types: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_AUDIO_TYPES))

    # Database
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_db: str = "smartsummary"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    db_pool_min_size: int = Field(default=1, ge=0)
    db_pool_max_size: int = Field(default=10, ge=1)

    # Engines
    engine: EngineConfig = EngineConfig()

    # Notifications
    mail: MailConfig = MailConfig()

    # Logging
    logging: LoggingSettings = LoggingSettings()

    @field_validator("allowed_audio_types", mode="before")
    @classmethod
    def _split_types(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @model_validator(mode="after")
    def _normalize(self) -> "Settings":
        self.allowed_audio_types = [str(t).strip().lower() for t in self.allowed_audio_types]
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ConfigurationError("DB_POOL_MIN_SIZE must be <= DB_POOL_MAX_SIZE")
        return self

    def model_post_init(self, __context: Any) -> None:
        # Apps run from `apps/*`; keep relative paths anchored at the repo root.
        self.upload_dir = _resolve_repo_path(self.upload_dir)
        self.log_dir = _resolve_repo_path(self.log_dir)
        # Upload storage must exist before the first request arrives.
        for p in (self.upload_dir, self.log_dir):
            Path(p).mkdir(parents=True, exist_ok=True)

    @property
    def database_url(self) -> str:
        return f"postgresql://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
