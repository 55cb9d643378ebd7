"""Logging configuration."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from app.core.config import Settings, get_settings
from app.core.log_filter import SensitiveDataFilter


def build_handlers(settings: Settings) -> list[logging.Handler]:
    """Create the stdout and rotating file handlers described by settings."""
    # Create logs directory
    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Configure handlers
    handlers: list[logging.Handler] = [
        # Stdout handler for console output
        logging.StreamHandler(sys.stdout),
        # Rotating file handler (size and backups from settings)
        RotatingFileHandler(
            logs_dir / settings.log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        ),
    ]

    # Apply sensitive data filter to all handlers if enabled
    if settings.enable_log_redaction:
        log_filter = SensitiveDataFilter()
        for handler in handlers:
            handler.addFilter(log_filter)

    return handlers


def setup_logging(settings: Settings | None = None) -> None:
    """Configure application logging with stdout and rotating file handlers."""
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=build_handlers(settings),
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module."""
    return logging.getLogger(name)
