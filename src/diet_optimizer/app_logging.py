"""Logging configuration helpers."""

import logging

_LOGGER_NAME = "diet_optimizer"
_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    if any(_is_stream_handler(handler) for handler in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False


def set_debug_logging(enabled: bool, log_file_path: str | None = None) -> None:
    """Switch verbose diagnostics on or off.

    When enabled, the package logger drops to DEBUG and, if a path is given,
    also writes to that file.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        logger.removeHandler(handler)
        handler.close()
    if not enabled:
        logger.setLevel(logging.INFO)
        return
    logger.setLevel(logging.DEBUG)
    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s: " + _FORMAT))
        logger.addHandler(file_handler)


def _is_stream_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )
