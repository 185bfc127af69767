"""Tests for logging configuration."""

import logging

from diet_optimizer.app_logging import configure_logging, set_debug_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("diet_optimizer")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_debug_logging_writes_to_file(tmp_path) -> None:
    logger = logging.getLogger("diet_optimizer")
    log_file = tmp_path / "diet.log"

    set_debug_logging(True, str(log_file))
    logging.getLogger("diet_optimizer.services.diet").debug("trial 7 kept")
    set_debug_logging(False)

    assert "trial 7 kept" in log_file.read_text(encoding="utf-8")
    assert logger.level == logging.INFO
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
