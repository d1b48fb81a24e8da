"""
Logging utilities for curvecleaner.

Library code only asks for a logger:
    ```python
    from curvecleaner.utils.logging import get_logger
    logger = get_logger(__name__)
    ```

Scripts and applications may enable console output:
    ```python
    from curvecleaner.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

curvecleaner never writes log files and never touches the root logger.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "curvecleaner"
LEVEL_ENV_VAR = "CURVECLEANER_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Attach a stderr handler to the curvecleaner logger.

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        CURVECLEANER_LOG_LEVEL env var, or "INFO" if unset.
    fmt, datefmt:
        Formatter settings; standard defaults when omitted.
    force:
        If True, remove existing handlers first. If False, do nothing when a
        stderr handler is already attached.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return logging.getLogger(name), or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
