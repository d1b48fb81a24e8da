"""
curvecleaner: exclude scatter-plot samples with a drawn curve and export the
excluded periods as consolidated time intervals.

For logging configuration in scripts:
    ```python
    from curvecleaner.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from curvecleaner.utils.logging import configure_logging, get_logger

from curvecleaner.core import (
    Curve,
    Dataset,
    ExclusionRecord,
    Series,
    classify_containment,
    consolidate_exclusions,
)
from curvecleaner.config import CleanerConfig
from curvecleaner.io import export_exclusions, load_dataset
from curvecleaner.session import CleaningSession, SessionError

# Logs go nowhere until an application configures logging.
_logger = logging.getLogger("curvecleaner")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "CleanerConfig",
    "CleaningSession",
    "Curve",
    "Dataset",
    "ExclusionRecord",
    "Series",
    "SessionError",
    "classify_containment",
    "configure_logging",
    "consolidate_exclusions",
    "export_exclusions",
    "get_logger",
    "load_dataset",
]

__version__ = "0.1.0"
