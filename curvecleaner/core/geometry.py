# curvecleaner/core/geometry.py
"""
Segment-intersection primitive.

All predicates broadcast over leading axes, so a single call can test one
segment against many (the containment classifier relies on this). The scalar
wrappers ``orientation``, ``on_segment`` and ``do_intersect`` return plain
Python values.

Collinearity is decided by an exact zero comparison of the cross product.
Points that are collinear in exact arithmetic but not after floating-point
rounding are classified by the general branch.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

Point = Tuple[float, float]
PointLike = Union[Point, Sequence[float], np.ndarray]


class Orientation(Enum):
    COLINEAR = 0
    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1


def _xy(a: PointLike) -> np.ndarray:
    return np.asarray(a, dtype=float)


def orientation_sign(p: PointLike, q: PointLike, r: PointLike) -> np.ndarray:
    """
    Sign of the turn p -> q -> r.

    Returns +1 (clockwise), -1 (counterclockwise) or 0 (colinear), with the
    shape of the broadcast leading axes of the inputs.
    """
    p, q, r = _xy(p), _xy(q), _xy(r)
    val = (q[..., 1] - p[..., 1]) * (r[..., 0] - q[..., 0]) - (
        q[..., 0] - p[..., 0]
    ) * (r[..., 1] - q[..., 1])
    return np.sign(val).astype(np.int8)


def on_segment_mask(p: PointLike, q: PointLike, r: PointLike) -> np.ndarray:
    """True where q lies in the closed bounding box spanned by p and r."""
    p, q, r = _xy(p), _xy(q), _xy(r)
    lo = np.minimum(p, r)
    hi = np.maximum(p, r)
    return ((q >= lo) & (q <= hi)).all(axis=-1)


def segments_intersect(
    p1: PointLike, q1: PointLike, p2: PointLike, q2: PointLike
) -> np.ndarray:
    """Vectorised intersection test of segments (p1, q1) and (p2, q2)."""
    o1 = orientation_sign(p1, q1, p2)
    o2 = orientation_sign(p1, q1, q2)
    o3 = orientation_sign(p2, q2, p1)
    o4 = orientation_sign(p2, q2, q1)

    general = (o1 != o2) & (o3 != o4)

    # Collinear endpoints lying on the other segment
    touching = (
        ((o1 == 0) & on_segment_mask(p1, p2, q1))
        | ((o2 == 0) & on_segment_mask(p1, q2, q1))
        | ((o3 == 0) & on_segment_mask(p2, p1, q2))
        | ((o4 == 0) & on_segment_mask(p2, q1, q2))
    )
    return general | touching


def orientation(p: PointLike, q: PointLike, r: PointLike) -> Orientation:
    return Orientation(int(orientation_sign(p, q, r)))


def on_segment(p: PointLike, q: PointLike, r: PointLike) -> bool:
    """Given collinear p, q, r: does q lie on segment pr?"""
    return bool(on_segment_mask(p, q, r))


def do_intersect(p1: PointLike, q1: PointLike, p2: PointLike, q2: PointLike) -> bool:
    return bool(segments_intersect(p1, q1, p2, q2))
