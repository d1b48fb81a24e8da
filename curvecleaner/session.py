# curvecleaner/session.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from curvecleaner.config import CleanerConfig
from curvecleaner.core import CoreError, Curve, Dataset, ExclusionRecord
from curvecleaner.core.curve import MIN_CURVE_POINTS
from curvecleaner.core.geometry import PointLike
from curvecleaner.io import export_exclusions, load_dataset
from curvecleaner.utils.logging import get_logger

logger = get_logger(__name__)


class SessionError(CoreError):
    """Raised when a session action is requested in a state that forbids it."""


@dataclass(slots=True)
class CleaningSession:
    """
    Mutable state of one interactive cleaning session.

    The dataset snapshot, the curve being drawn and the user's choices live
    here; the core algorithms stay pure and receive them as arguments.
    Every action either completes or raises SessionError leaving the state
    as it was (only `message` is updated).
    """

    config: CleanerConfig = field(default_factory=CleanerConfig)
    dataset: Dataset | None = None
    x_axis: str | None = None
    y_axis: str | None = None
    exclude_x: bool = True
    exclude_y: bool = True
    reason: str = ""
    curve: Curve = field(default_factory=Curve)
    message: str = ""

    def _fail(self, message: str) -> SessionError:
        self.message = message
        logger.warning(message)
        return SessionError(message)

    def _require_dataset(self) -> Dataset:
        if self.dataset is None:
            raise self._fail("No file loaded")
        return self.dataset

    # ---- loading ----
    def load(self, path: str | Path) -> Dataset:
        try:
            dataset = load_dataset(path, self.config)
        except (CoreError, OSError) as e:
            self.message = f"Load error: {e}"
            raise

        self.dataset = dataset
        names = list(dataset.keys())
        self.x_axis = names[0] if names else None
        self.y_axis = names[1] if len(names) > 1 else self.x_axis
        self.clear_curve()
        self.message = "File loaded successfully"
        return dataset

    def select_axes(self, x: str, y: str) -> None:
        dataset = self._require_dataset()
        for name in (x, y):
            if name not in dataset:
                raise self._fail(f"Unknown series '{name}'")
        self.x_axis, self.y_axis = x, y

    @property
    def reasons(self) -> list[str]:
        return [] if self.dataset is None else self.dataset.reasons

    # ---- drawing ----
    def add_point(self, point: PointLike) -> Curve:
        self.curve = self.curve.add_point(point, close_threshold=self.config.close_threshold)
        if self.curve.closed:
            logger.debug("exclusion curve closed with %d points", len(self.curve))
        return self.curve

    def clear_curve(self) -> None:
        self.curve = Curve()

    # ---- actions ----
    def exclude(self) -> Dataset:
        """Apply the closed curve to the selected axes with the current reason."""
        dataset = self._require_dataset()
        if not self.reason.strip():
            raise self._fail("Write a reason for exclusion")
        if len(self.curve) < MIN_CURVE_POINTS:
            raise self._fail(
                f"At least {MIN_CURVE_POINTS} points are needed to define an exclusion area"
            )
        if not self.curve.closed:
            raise self._fail("The exclusion area must be closed")
        if self.x_axis is None or self.y_axis is None:
            raise self._fail("Select the X and Y axes first")

        self.dataset = dataset.exclude(
            self.x_axis,
            self.y_axis,
            self.curve,
            self.reason,
            exclude_x=self.exclude_x,
            exclude_y=self.exclude_y,
        )
        self.clear_curve()
        self.message = f"Data excluded by '{self.reason}' reason"
        return self.dataset

    def export(
        self,
        path: str | Path,
        buffer_minutes: float | None = None,
        *,
        now: datetime | None = None,
    ) -> list[ExclusionRecord]:
        dataset = self._require_dataset()
        try:
            records = export_exclusions(
                dataset, path, buffer_minutes, config=self.config, now=now
            )
        except (CoreError, OSError) as e:
            self.message = f"Export error: {e}"
            raise
        self.message = "Exclusions exported successfully"
        return records
