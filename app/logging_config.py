"""Central logging configuration for the strength metrics service."""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from app.config import get_settings

_configured = False

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def build_logging_config(log_dir: Path, level: str, debug: bool = False) -> dict:
    """Return the dictConfig payload for console and rotating file output."""

    app_level = "DEBUG" if debug else level
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": app_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_dir / "strength.log"),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 3,
                "encoding": "utf-8",
                "formatter": "standard",
                "level": app_level,
            },
        },
        "loggers": {
            "app": {
                "level": app_level,
            },
            "uvicorn.access": {
                "level": "WARNING",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def configure_logging() -> None:
    """Configure application logging once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir = settings.log_dir
        level = settings.log_level
        debug = settings.debug
    except ValidationError:
        # Invalid environment (e.g. a bad LOG_LEVEL) still gets default logging
        log_dir = Path("logs")
        level = "INFO"
        debug = False
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(build_logging_config(log_dir, level, debug))
    _configured = True
