"""Application configuration management."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Subtitle QC Service"
    app_version: str = "0.1.0"
    app_description: str = "Validate, repair and re-export SRT subtitle files"

    # Environment
    environment: str = "development"  # development, staging, production

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_hosts: list[str] = ["*"]

    # Authentication
    api_key: str | None = None

    # CORS Configuration
    cors_enabled: bool = True
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Encodings
    default_encoding: str = "utf-8"
    supported_encodings: list[str] = [
        "utf-8",
        "windows-1256",
        "iso-8859-1",
        "windows-1252",
        "utf-16",
    ]

    # Upload Limits
    max_file_size: int = 5_242_880  # 5MB in bytes

    # Validation Rules
    min_duration_ms: int = 1000
    max_duration_ms: int = 7000
    max_cpl: int = 42  # characters per line
    max_cps: float = 21.0  # characters per second
    max_lines: int = 2
    overlap_gap_ms: int = 50  # gap left between cues when resolving overlaps

    # Logging
    log_level: str = "INFO"
    enable_log_redaction: bool = True  # Redact sensitive data from logs
    log_dir: str = "./logs"
    log_file: str = "subtitle-qc.log"
    log_max_bytes: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


# Global settings instance
# Pydantic Settings loads from environment variables automatically
settings = get_settings()
