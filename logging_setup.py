#!/usr/bin/env python3
"""
logging_setup.py
================
Log configuration for the evaluator process.

The root logger writes to the console and to a rotating ``LOG_FILE``.
The ``prediction.evaluator`` logger additionally keeps per-obstacle DEBUG
traces in ``EVALUATOR_DEBUG_LOG`` without raising the root level.

:func:`setup_logging` replaces the handlers it owns, so calling it again
(tests, notebooks, a reloaded server) does not duplicate output.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import config

EVALUATOR_LOGGER = "prediction.evaluator"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)


def _rotating_file(path: str, max_bytes: int, fmt: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=2)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    evaluator_debug: bool = True,
) -> None:
    """Configure console, main log file and the evaluator debug file.

    Parameters
    ----------
    level : int
        Minimum severity for the console and the main log file.
    log_dir : str, optional
        Directory for both log files; defaults to ``config.LOG_DIR``.
    evaluator_debug : bool
        When false the evaluator logger only propagates to the root handlers.
    """
    log_dir = log_dir or config.LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    fmt = logging.Formatter(_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    _replace_handlers(
        root,
        console,
        _rotating_file(os.path.join(log_dir, config.LOG_FILE), 1_000_000, fmt),
    )

    evaluator_logger = logging.getLogger(EVALUATOR_LOGGER)
    if not evaluator_debug:
        evaluator_logger.setLevel(logging.NOTSET)
        _replace_handlers(evaluator_logger)
        return

    debug_file = _rotating_file(
        os.path.join(log_dir, config.EVALUATOR_DEBUG_LOG), 5_000_000, fmt,
    )
    debug_file.setLevel(logging.DEBUG)
    evaluator_logger.setLevel(logging.DEBUG)
    _replace_handlers(evaluator_logger, debug_file)
