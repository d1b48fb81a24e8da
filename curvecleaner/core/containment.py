# curvecleaner/core/containment.py
"""
Containment classifier: ray casting by counting edge crossings.

For each query point a segment is cast from a reference point lying outside
the curve to the query point; the point is inside iff that segment crosses an
odd number of curve edges.

Query points are given as an (n, 2) array. Rows containing NaN (or ``None``
entries in a plain sequence) stand for sample pairs that are not both valid;
they are always reported as outside.
"""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from curvecleaner.utils.logging import get_logger

from .curve import MIN_CURVE_POINTS, Curve
from .exceptions import CurveNotClosed, InvalidCurve
from .geometry import PointLike, segments_intersect

logger = get_logger(__name__)

# Classic fixed origin; only valid when curves and data stay clear of it.
LEGACY_REFERENCE = (-100.0, -100.0)

_SKEW = np.array([1.0, (1.0 + 5.0 ** 0.5) / 2.0])


def as_query_points(points: np.ndarray | Iterable[Optional[PointLike]]) -> np.ndarray:
    """Normalise query points to a float (n, 2) array; ``None`` becomes a NaN row."""
    if isinstance(points, np.ndarray):
        pts = points.astype(float, copy=False)
    else:
        rows = [(np.nan, np.nan) if p is None else p for p in points]
        pts = np.asarray(rows, dtype=float)

    if pts.size == 0:
        return pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Query points must have shape (n, 2), got {pts.shape}")
    return pts


def reference_point(curve: Curve) -> np.ndarray:
    """
    A point strictly outside the bounding box of `curve`.

    The offset is skewed so that cast segments do not run along the
    diagonals through axis-aligned vertices.
    """
    lo = curve.points.min(axis=0)
    hi = curve.points.max(axis=0)
    margin = max(float((hi - lo).max()), 1.0)
    return lo - margin * _SKEW


def _check_curve(curve: Curve) -> None:
    if not isinstance(curve, Curve):
        raise InvalidCurve(f"Expected a Curve, got {type(curve).__name__}")
    if len(curve) < MIN_CURVE_POINTS:
        raise InvalidCurve(
            f"At least {MIN_CURVE_POINTS} points are needed to define an exclusion area"
        )
    if not curve.closed:
        raise CurveNotClosed("The exclusion area must be closed")


def classify_containment(
    curve: Curve,
    points: np.ndarray | Iterable[Optional[PointLike]],
    *,
    reference: PointLike | None = None,
) -> np.ndarray:
    """
    Classify each query point as inside (True) or outside (False) `curve`.

    Parameters
    ----------
    curve:
        A closed Curve with at least 3 points.
    points:
        (n, 2) array or sequence of points; NaN rows / ``None`` are outside.
    reference:
        Origin of the cast segments. Defaults to a point computed outside
        the bounding box of the curve. A caller supplied reference must lie
        outside the curve.

    Returns
    -------
    np.ndarray
        Boolean mask of length n, in input order.
    """
    _check_curve(curve)
    pts = as_query_points(points)
    valid = np.isfinite(pts).all(axis=1)

    ref = reference_point(curve) if reference is None else np.asarray(reference, dtype=float)

    # Invalid rows collapse onto the origin; their result is masked below.
    safe = np.where(valid[:, None], pts, ref)

    crossings = np.zeros(pts.shape[0], dtype=np.int64)
    starts, ends = curve.edges()
    for a, b in zip(starts, ends):
        crossings += segments_intersect(ref, safe, a, b)

    inside = (crossings % 2 == 1) & valid
    logger.debug(
        "classified %d points against %d edges: %d inside, %d skipped",
        pts.shape[0],
        len(curve),
        int(inside.sum()),
        int((~valid).sum()),
    )
    return inside
