# curvecleaner/core/__init__.py
"""
Core domain objects and algorithms for curvecleaner.

This module defines the file-format-agnostic data model and the two pure
algorithms operating on it:
- Sample / Series: tagged readings (Valid, Missing, Excluded) of one sensor
- Dataset: Series aligned on a shared timestamp index
- Curve: closed polyline drawn over a scatter of two Series
- classify_containment: inside/outside test of points against a Curve
- consolidate_exclusions: merge excluded timestamps into disjoint intervals

The core layer is independent from I/O and presentation.
"""

from .geometry import (
    Orientation,
    Point,
    do_intersect,
    on_segment,
    orientation,
    segments_intersect,
)
from .curve import Curve
from .containment import LEGACY_REFERENCE, classify_containment
from .consolidate import (
    ExclusionEvent,
    ExclusionRecord,
    GroupKey,
    consolidate_exclusions,
    merge_intervals,
)
from .series import Sample, SampleState, Series, split_series_name
from .dataset import Dataset
from .metadata import SeriesMeta, DatasetMeta
from .exceptions import (
    CoreError,
    InvalidCurve,
    CurveNotClosed,
    InvalidBuffer,
    InvalidSample,
    InvalidSeries,
    InvalidSeriesName,
    InvalidDataset,
    SeriesNotFound,
)


__all__ = [
    # geometry
    "Point",
    "Orientation",
    "orientation",
    "on_segment",
    "do_intersect",
    "segments_intersect",

    # algorithms
    "Curve",
    "LEGACY_REFERENCE",
    "classify_containment",
    "GroupKey",
    "ExclusionEvent",
    "ExclusionRecord",
    "consolidate_exclusions",
    "merge_intervals",

    # data model
    "Sample",
    "SampleState",
    "Series",
    "split_series_name",
    "Dataset",

    # metadata
    "SeriesMeta",
    "DatasetMeta",

    # exceptions
    "CoreError",
    "InvalidCurve",
    "CurveNotClosed",
    "InvalidBuffer",
    "InvalidSample",
    "InvalidSeries",
    "InvalidSeriesName",
    "InvalidDataset",
    "SeriesNotFound",
]
