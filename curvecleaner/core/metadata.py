# curvecleaner/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidSeries, InvalidDataset


@dataclass(frozen=True, slots=True)
class SeriesMeta:
    """
    Metadata attached to a Series.

    - unit: display/physical unit (m/s, deg, ...)
    - description: human-friendly description
    - source: origin (file column, computed, ...)
    - attrs: arbitrary additional fields
    """
    unit: str | None = None
    description: str | None = None
    source: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidSeries("SeriesMeta.attrs must be a dict.")

    def copy(self) -> "SeriesMeta":
        return SeriesMeta(
            unit=self.unit,
            description=self.description,
            source=self.source,
            attrs=self.attrs.copy(),
        )


@dataclass(frozen=True, slots=True)
class DatasetMeta:
    """
    Metadata attached to a Dataset (one loaded table).

    missing_value is the sentinel that was classified as Missing at load time.
    """
    description: str | None = None
    source: str | None = None
    missing_value: float | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidDataset("DatasetMeta.attrs must be a dict.")

    def copy(self) -> "DatasetMeta":
        return DatasetMeta(
            description=self.description,
            source=self.source,
            missing_value=self.missing_value,
            attrs=self.attrs.copy(),
        )
