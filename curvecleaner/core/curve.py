# curvecleaner/core/curve.py
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .exceptions import InvalidCurve
from .geometry import PointLike


MIN_CURVE_POINTS = 3


def _empty_points() -> np.ndarray:
    return np.empty((0, 2), dtype=float)


@dataclass(frozen=True, slots=True)
class Curve:
    """
    Polyline drawn by the user, implicitly closed by an edge from the last
    point back to the first.

    Only a curve flagged ``closed`` can bound a containment region. The
    closing click is not stored as a vertex; the closing edge is implied.
    """

    points: np.ndarray = field(default_factory=_empty_points, repr=False)
    closed: bool = False

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=float)
        if pts.size == 0:
            pts = pts.reshape(0, 2)

        if pts.ndim != 2 or pts.shape[1] != 2:
            raise InvalidCurve(f"Curve points must have shape (n, 2), got {pts.shape}")
        if not np.isfinite(pts).all():
            raise InvalidCurve("Curve points contain non-finite coordinates.")
        if self.closed and pts.shape[0] < MIN_CURVE_POINTS:
            raise InvalidCurve(
                f"A closed curve needs at least {MIN_CURVE_POINTS} points, got {pts.shape[0]}"
            )

        object.__setattr__(self, "points", pts)
        object.__setattr__(self, "closed", bool(self.closed))

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def edges(self) -> tuple[np.ndarray, np.ndarray]:
        """Edge start and end points, closing edge included."""
        return self.points, np.roll(self.points, -1, axis=0)

    def add_point(self, point: PointLike, *, close_threshold: float = 0.3) -> "Curve":
        """
        Return a new Curve with `point` appended.

        Once the curve has at least 3 points, a point closer than
        `close_threshold` to the first one closes the curve instead.
        """
        if self.closed:
            raise InvalidCurve("Curve is already closed; clear it to draw a new one.")

        p = np.asarray(point, dtype=float)
        if p.shape != (2,) or not np.isfinite(p).all():
            raise InvalidCurve(f"Expected a finite (x, y) point, got {point!r}")

        if len(self) >= MIN_CURVE_POINTS:
            if float(np.hypot(*(p - self.points[0]))) < close_threshold:
                return Curve(points=self.points, closed=True)

        return Curve(points=np.vstack([self.points, p]), closed=False)

    def close(self) -> "Curve":
        if len(self) < MIN_CURVE_POINTS:
            raise InvalidCurve(
                f"At least {MIN_CURVE_POINTS} points are needed to close a curve, got {len(self)}"
            )
        return Curve(points=self.points, closed=True)

    def reversed(self) -> "Curve":
        return Curve(points=self.points[::-1].copy(), closed=self.closed)
