"""Logging initialization helpers."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from smartsummary.config import LoggingSettings, Settings

_ROOT_LOGGER = "smartsummary"


def _level(cfg: LoggingSettings) -> int:
    name = str(cfg.level or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _file_handler(cfg: LoggingSettings, log_dir: str) -> RotatingFileHandler:
    file_path = Path(str(cfg.file))
    if not file_path.is_absolute():
        file_path = Path(log_dir) / file_path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        file_path,
        maxBytes=int(cfg.max_bytes),
        backupCount=int(cfg.backup_count),
        encoding="utf-8",
    )


def setup_logging(settings: Settings, *, force: bool = False) -> logging.Logger:
    """Configure the `smartsummary` logger tree from Settings.

    Framework loggers (uvicorn, fastapi) are left alone. Calling this twice is
    a no-op unless `force` is set.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    if getattr(logger, "_smartsummary_configured", False) and not force:
        return logger

    cfg = settings.logging
    level = _level(cfg)
    formatter = logging.Formatter(fmt=str(cfg.format), datefmt=str(cfg.datefmt))

    handlers: list[logging.Handler] = []
    if cfg.console:
        handlers.append(logging.StreamHandler())
    if cfg.file:
        handlers.append(_file_handler(cfg, settings.log_dir))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    setattr(logger, "_smartsummary_configured", True)
    return logger
