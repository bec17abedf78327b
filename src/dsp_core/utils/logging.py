"""
Logging helpers for the transform engines and ``dsp-bench``.

Library modules only call :func:`get_logger`; handlers are attached once by
the benchmark command line through :func:`setup_logging`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
PACKAGE_LOGGER = 'dsp_core'


def setup_logging(
    log_file: Optional[str] = None,
    verbose: bool = False,
    name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Attach a console handler and an optional file handler to the package logger.

    The console only shows warnings, since rich renders the results. The log
    file receives INFO records, or DEBUG records when ``verbose`` is set, which
    includes the per-call records of :func:`dsp_core.fdft` and friends.
    Calling this again replaces (and closes) the handlers of the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [(logging.StreamHandler(sys.stderr), logging.WARNING)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append((logging.FileHandler(path, mode='a', encoding='utf-8'), level))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
