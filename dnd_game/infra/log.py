"""Logging configuration for the CLI and application processes."""

from __future__ import annotations

import logging.config
from pathlib import Path

from dnd_game.infra.config import settings

_FILE_MAX_BYTES = 5 * 1024 * 1024
_FILE_BACKUPS = 5


def setup_logging(level: str | None = None, log_dir: str | Path | None = None) -> None:
    """Console logging always; rotating app.log / error.log when a log dir is set."""
    level = (level or settings.log_level).upper()
    log_dir = log_dir if log_dir is not None else settings.log_dir

    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "filename": str(directory / "app.log"),
            "maxBytes": _FILE_MAX_BYTES,
            "backupCount": _FILE_BACKUPS,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "level": "ERROR",
            "filename": str(directory / "error.log"),
            "maxBytes": _FILE_MAX_BYTES,
            "backupCount": _FILE_BACKUPS,
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "file": {
                "format": "%(asctime)s %(levelname)-5.5s [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {
            "sqlalchemy.engine": {"level": "WARNING"},
            "alembic": {"level": "INFO"},
        },
    })
