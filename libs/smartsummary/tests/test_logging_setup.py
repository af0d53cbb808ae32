from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from smartsummary.config import LoggingSettings, Settings
from smartsummary.utils.logging_setup import setup_logging


@pytest.fixture()
def pristine_logger():
    logger = logging.getLogger("smartsummary")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
    if hasattr(logger, "_smartsummary_configured"):
        delattr(logger, "_smartsummary_configured")


def test_file_logging_lands_in_log_dir(tmp_path, pristine_logger) -> None:
    settings = Settings(
        upload_dir=str(tmp_path / "u"),
        log_dir=str(tmp_path / "logs"),
        logging=LoggingSettings(level="debug", console=False, file="api.log"),
    )

    logger = setup_logging(settings, force=True)
    logging.getLogger("smartsummary.pipeline").debug("hello from the pipeline")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert [type(h) for h in logger.handlers] == [RotatingFileHandler]
    assert "hello from the pipeline" in (tmp_path / "logs" / "api.log").read_text("utf-8")


def test_second_call_is_a_no_op(tmp_path, pristine_logger) -> None:
    settings = Settings(upload_dir=str(tmp_path / "u"), log_dir=str(tmp_path / "l"))
    first = setup_logging(settings, force=True)
    handlers = list(first.handlers)

    assert setup_logging(settings) is first
    assert first.handlers == handlers


def test_unknown_level_falls_back_to_info(tmp_path, pristine_logger) -> None:
    settings = Settings(
        upload_dir=str(tmp_path / "u"),
        log_dir=str(tmp_path / "l"),
        logging=LoggingSettings(level="chatty"),
    )
    assert setup_logging(settings, force=True).level == logging.INFO
