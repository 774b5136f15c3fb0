"""Logging setup for the image filter tools."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def _resolve_log_path(filename: str) -> Path:
    expanded = Path(os.path.expandvars(filename)).expanduser()
    try:
        expanded.parent.mkdir(parents=True, exist_ok=True)
        return expanded
    except OSError:
        fallback_dir = Path("./logs")
        fallback_dir.mkdir(parents=True, exist_ok=True)
        return fallback_dir / expanded.name


def _has_console_handler(root_logger: logging.Logger) -> bool:
    # RotatingFileHandler is a StreamHandler subclass too.
    return any(
        type(handler) is logging.StreamHandler for handler in root_logger.handlers
    )


def _add_file_handler(root_logger: logging.Logger, file_settings: Mapping[str, Any]) -> None:
    filename = file_settings.get("filename")
    if not filename:
        raise ValueError("File logging enabled but no filename provided.")
    log_path = _resolve_log_path(str(filename))
    for handler in root_logger.handlers:
        if (
            isinstance(handler, RotatingFileHandler)
            and Path(handler.baseFilename).resolve() == log_path.resolve()
        ):
            return
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=int(file_settings.get("rotate_bytes", 1_048_576)),
        backupCount=int(file_settings.get("backups", 3)),
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(file_settings.get("format", DEFAULT_FORMAT)))
    root_logger.addHandler(file_handler)


def setup_logging(settings: Mapping[str, Any], *, force: bool = False) -> None:
    """Configure root logging from the ``logging`` section of the config.

    With ``force`` existing root handlers are closed and removed first, which
    lets repeated CLI invocations in one process start from a clean slate.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(str(settings.get("level", "INFO")).upper())

    if force:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

    console_settings = settings.get("console", {}) or {}
    if console_settings.get("enabled", True) and not _has_console_handler(root_logger):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter(console_settings.get("format", CONSOLE_FORMAT))
        )
        root_logger.addHandler(console_handler)

    file_settings = settings.get("file", {}) or {}
    if file_settings.get("enabled", False):
        _add_file_handler(root_logger, file_settings)


__all__ = ["setup_logging", "DEFAULT_FORMAT", "CONSOLE_FORMAT"]
