# curvecleaner/core/dataset.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

import numpy as np

from curvecleaner.utils.logging import get_logger

from .consolidate import ExclusionEvent, GroupKey
from .containment import classify_containment
from .curve import Curve
from .exceptions import InvalidDataset, SeriesNotFound
from .metadata import DatasetMeta
from .series import NAME_SEPARATOR, Series

logger = get_logger(__name__)


def _empty_index() -> np.ndarray:
    return np.array([], dtype="datetime64[ns]")


@dataclass(frozen=True, slots=True)
class Dataset:
    """
    Dataset = Series aligned positionally on one shared timestamp index.

    Design goals:
    - dict-like access: ds["M1~WS80"]
    - safe + predictable: immutable, validated, equal lengths everywhere
    - exclusions return a new Dataset; the caller owns the current snapshot
    """
    index: np.ndarray = field(default_factory=_empty_index, repr=False)
    series: Mapping[str, Series] = field(default_factory=dict, repr=False)
    meta: DatasetMeta = field(default_factory=DatasetMeta, repr=False)

    def __post_init__(self) -> None:
        try:
            idx = np.asarray(self.index, dtype="datetime64[ns]")
        except (TypeError, ValueError) as e:
            raise InvalidDataset(f"Dataset.index must hold timestamps: {e}") from e
        if idx.ndim != 1:
            raise InvalidDataset(f"Dataset.index must be 1D, got shape {idx.shape}")
        if np.isnat(idx).any():
            raise InvalidDataset("Dataset.index contains missing timestamps (NaT).")

        if not isinstance(self.series, Mapping):
            raise InvalidDataset("Dataset.series must be a mapping (e.g., dict).")
        if not isinstance(self.meta, DatasetMeta):
            raise InvalidDataset("Dataset.meta must be a DatasetMeta instance.")

        normalized: dict[str, Series] = {}
        for key, s in self.series.items():
            if not isinstance(key, str) or not key.strip():
                raise InvalidDataset("Dataset.series keys must be non-empty strings.")
            if not isinstance(s, Series):
                raise InvalidDataset("Dataset.series values must be Series instances.")
            if s.name != key:
                raise InvalidDataset(
                    f"Series name mismatch: key '{key}' but Series.name is '{s.name}'."
                )
            if len(s) != idx.size:
                raise InvalidDataset(
                    f"Series '{key}' has {len(s)} samples but the index has {idx.size}."
                )
            normalized[key] = s

        object.__setattr__(self, "index", idx)
        object.__setattr__(self, "series", normalized)

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.series)

    def __iter__(self) -> Iterator[str]:
        return iter(self.series)

    def __contains__(self, name: object) -> bool:
        return name in self.series

    def keys(self) -> Iterable[str]:
        return self.series.keys()

    def items(self) -> Iterable[tuple[str, Series]]:
        return self.series.items()

    def values(self) -> Iterable[Series]:
        return self.series.values()

    def __getitem__(self, name: str) -> Series:
        try:
            return self.series[name]
        except KeyError as e:
            raise SeriesNotFound(name) from e

    def get(self, name: str, default: Series | None = None) -> Series | None:
        return self.series.get(name, default)

    @property
    def n(self) -> int:
        """Number of rows (timestamps)."""
        return int(self.index.size)

    @property
    def reasons(self) -> list[str]:
        """Exclusion reasons in use, in order of first appearance."""
        seen: dict[str, None] = {}
        for s in self.series.values():
            for reason in s.reasons[s.excluded_mask]:
                seen.setdefault(reason, None)
        return list(seen)

    # ---- transformations ----
    def add(self, series: Series, *, overwrite: bool = False) -> "Dataset":
        """
        Return a new Dataset with `series` added.

        If overwrite=False and the series already exists, raises InvalidDataset.
        """
        if not isinstance(series, Series):
            raise InvalidDataset("add() expects a Series instance.")

        name = series.name
        if (name in self.series) and not overwrite:
            raise InvalidDataset(f"Series '{name}' already exists (overwrite=False).")

        new_series = dict(self.series)
        new_series[name] = series
        return Dataset(index=self.index, series=new_series, meta=self.meta.copy())

    # ---- scatter views ----
    def pair_points(self, x: str, y: str) -> np.ndarray:
        """
        (n, 2) array of (x, y) readings for every row.

        Rows where the two samples are not both Valid are NaN.
        """
        xs, ys = self[x], self[y]
        both = xs.valid_mask & ys.valid_mask
        pts = np.column_stack([xs.values, ys.values])
        pts[~both] = np.nan
        return pts

    def valid_points(self, x: str, y: str) -> np.ndarray:
        xs, ys = self[x], self[y]
        both = xs.valid_mask & ys.valid_mask
        return np.column_stack([xs.values[both], ys.values[both]])

    def excluded_points(self, x: str, y: str) -> np.ndarray:
        xs, ys = self[x], self[y]
        both = xs.excluded_mask & ys.excluded_mask
        return np.column_stack([xs.values[both], ys.values[both]])

    def exclude(
        self,
        x: str,
        y: str,
        curve: Curve,
        reason: str,
        *,
        exclude_x: bool = True,
        exclude_y: bool = True,
    ) -> "Dataset":
        """
        Exclude every (x, y) pair lying inside `curve`.

        Only Valid samples of the selected axes change state. The curve is
        validated before anything else; on error nothing is applied.
        """
        inside = classify_containment(curve, self.pair_points(x, y))

        new_series = dict(self.series)
        axes = [name for name, flag in ((x, exclude_x), (y, exclude_y)) if flag]
        for name in dict.fromkeys(axes):
            new_series[name] = new_series[name].exclude(inside, reason)

        logger.info(
            "excluded %d points of (%s, %s) with reason '%s' on %s",
            int(inside.sum()),
            x,
            y,
            reason,
            ", ".join(axes) or "no axis",
        )
        return Dataset(index=self.index, series=new_series, meta=self.meta.copy())

    # ---- export ----
    def exclusion_events(self, separator: str = NAME_SEPARATOR) -> list[ExclusionEvent]:
        """One event per Excluded sample, keyed by (source, sensor, reason)."""
        stamps = self.index.astype("datetime64[us]").astype(object)
        events: list[ExclusionEvent] = []
        for s in self.series.values():
            mask = s.excluded_mask
            if not mask.any():
                continue
            source, sensor = s.source_key(separator)
            for i in np.flatnonzero(mask):
                events.append(
                    ExclusionEvent(
                        key=GroupKey(source, sensor, s.reasons[i]),
                        timestamp=stamps[i],
                    )
                )
        return events
