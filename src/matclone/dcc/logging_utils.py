"""Logging setup for the editor integration.

Every module logs through ``logging.getLogger(__name__)``; the records reach
the host console through one stdout handler on the ``matclone`` logger.
"""

from __future__ import annotations

import logging
import sys

BASE_LOGGER_NAME = "matclone"
_HANDLER_NAME = "matclone_stdout"
_FORMAT = "[MatClone] %(levelname)s: %(message)s"


def _has_stdout_handler(base_logger: logging.Logger) -> bool:
    return any(handler.name == _HANDLER_NAME for handler in base_logger.handlers)


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach the stdout handler to the ``matclone`` logger once.

    Records stop at the ``matclone`` logger and do not reach the root logger.
    """
    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if not _has_stdout_handler(base_logger):
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.name = _HANDLER_NAME
        base_logger.addHandler(handler)
    base_logger.setLevel(level)
    base_logger.propagate = False
    return base_logger


def set_base_log_level(level: int) -> None:
    logging.getLogger(BASE_LOGGER_NAME).setLevel(level)
