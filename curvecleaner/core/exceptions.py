# curvecleaner/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all core-domain exceptions."""


# ---- Geometry / precondition errors ----
class InvalidCurve(CoreError):
    """Raised when a Curve is malformed or too short to bound a region."""


class CurveNotClosed(InvalidCurve):
    """Raised when an open Curve is used as a containment boundary."""


class InvalidBuffer(CoreError, ValueError):
    """Raised when the consolidation time buffer is negative or not finite."""


# ---- Validation / construction errors ----
class InvalidSample(CoreError):
    """Raised on a forbidden Sample state transition."""


class InvalidSeries(CoreError):
    """Raised when a Series is constructed with invalid inputs."""


class InvalidSeriesName(InvalidSeries):
    """Raised when a series name cannot be split into (source, sensor)."""


class InvalidDataset(CoreError):
    """Raised when a Dataset / DatasetMeta is constructed with invalid inputs."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class SeriesNotFound(CoreError, KeyError):
    """Raised when a requested series name is not present."""
