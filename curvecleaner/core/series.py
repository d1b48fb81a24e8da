# curvecleaner/core/series.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

import numpy as np

from .exceptions import InvalidSample, InvalidSeries, InvalidSeriesName
from .metadata import SeriesMeta


NAME_SEPARATOR = "~"


class SampleState(IntEnum):
    VALID = 0
    MISSING = 1
    EXCLUDED = 2


@dataclass(frozen=True, slots=True)
class Sample:
    """
    A single reading: Valid(x), Missing, or Excluded(x, reason).

    The only allowed transition is Valid -> Excluded.
    """

    state: SampleState
    value: float | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        state = SampleState(self.state)
        object.__setattr__(self, "state", state)

        if state is SampleState.MISSING:
            if self.value is not None or self.reason is not None:
                raise InvalidSample("A missing sample carries neither value nor reason.")
            return

        if self.value is None or np.isnan(self.value):
            raise InvalidSample(f"A {state.name.lower()} sample needs a numeric value.")
        object.__setattr__(self, "value", float(self.value))

        if state is SampleState.VALID and self.reason is not None:
            raise InvalidSample("A valid sample carries no reason.")
        if state is SampleState.EXCLUDED and not (isinstance(self.reason, str) and self.reason.strip()):
            raise InvalidSample("An excluded sample needs a non-empty reason.")

    @classmethod
    def valid(cls, value: float) -> "Sample":
        return cls(SampleState.VALID, value)

    @classmethod
    def missing(cls) -> "Sample":
        return cls(SampleState.MISSING)

    @property
    def is_valid(self) -> bool:
        return self.state is SampleState.VALID

    @property
    def is_excluded(self) -> bool:
        return self.state is SampleState.EXCLUDED

    def exclude(self, reason: str) -> "Sample":
        """Valid samples become Excluded(reason); any other sample is returned unchanged."""
        if self.state is not SampleState.VALID:
            return self
        return Sample(SampleState.EXCLUDED, self.value, reason)


def split_series_name(name: str, separator: str = NAME_SEPARATOR) -> tuple[str, str]:
    """
    Split a series name into (source, sensor).

    Examples
    --------
    "M1~WS80"        -> ("M1", "WS80")
    "M1~WS80~Mean"   -> ("M1", "WS80")
    "WS80"           -> InvalidSeriesName
    """
    tokens = name.split(separator)
    if len(tokens) not in (2, 3):
        raise InvalidSeriesName(
            f"Series name '{name}' must have 2 or 3 '{separator}'-separated tokens, got {len(tokens)}"
        )
    return tokens[0], tokens[1]


@dataclass(frozen=True, slots=True)
class Series:
    """
    Named sequence of Samples stored column-wise.

    - values : float array; NaN where the sample is missing
    - states : SampleState codes (int8)
    - reasons: object array; the exclusion reason or None

    Immutable: `exclude` returns a new Series.
    """

    name: str
    values: np.ndarray = field(repr=False)
    states: np.ndarray | None = field(default=None, repr=False)
    reasons: np.ndarray | None = field(default=None, repr=False)
    meta: SeriesMeta = field(default_factory=SeriesMeta, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidSeries("Series.name must be a non-empty string.")
        if not isinstance(self.meta, SeriesMeta):
            raise InvalidSeries("Series.meta must be a SeriesMeta instance.")

        v = np.asarray(self.values, dtype=float)
        if v.ndim != 1:
            raise InvalidSeries(f"`values` must be 1D, got shape {v.shape}")

        if self.states is None:
            s = np.where(np.isnan(v), SampleState.MISSING, SampleState.VALID).astype(np.int8)
        else:
            s = np.asarray(self.states, dtype=np.int8)
        if s.shape != v.shape:
            raise InvalidSeries(
                f"`states` and `values` must have same length, got {s.size} vs {v.size}"
            )
        if not np.isin(s, [int(state) for state in SampleState]).all():
            raise InvalidSeries("`states` contains unknown sample state codes.")

        if self.reasons is None:
            r = np.full(v.shape, None, dtype=object)
        else:
            r = np.asarray(self.reasons, dtype=object)
        if r.shape != v.shape:
            raise InvalidSeries(
                f"`reasons` and `values` must have same length, got {r.size} vs {v.size}"
            )

        missing = s == SampleState.MISSING
        excluded = s == SampleState.EXCLUDED
        if np.isnan(v[~missing]).any():
            raise InvalidSeries("Valid and excluded samples must have a numeric value.")
        if any(reason is not None for reason in r[~excluded]):
            raise InvalidSeries("Only excluded samples may carry a reason.")
        if any(not (isinstance(reason, str) and reason.strip()) for reason in r[excluded]):
            raise InvalidSeries("Every excluded sample needs a non-empty reason.")

        # Missing samples carry no value
        v = np.where(missing, np.nan, v)

        object.__setattr__(self, "values", v)
        object.__setattr__(self, "states", s)
        object.__setattr__(self, "reasons", r)

    @classmethod
    def from_raw(
        cls,
        name: str,
        raw: np.ndarray,
        *,
        missing_value: float | None = None,
        meta: SeriesMeta | None = None,
    ) -> "Series":
        """Classify raw readings: NaN or `missing_value` are Missing, the rest Valid."""
        v = np.asarray(raw, dtype=float)
        missing = np.isnan(v)
        if missing_value is not None:
            missing |= v == missing_value
        states = np.where(missing, SampleState.MISSING, SampleState.VALID).astype(np.int8)
        return cls(
            name=name,
            values=np.where(missing, np.nan, v),
            states=states,
            meta=meta if meta is not None else SeriesMeta(),
        )

    # ---- sequence API ----
    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def n(self) -> int:
        return len(self)

    def __getitem__(self, i: int) -> Sample:
        state = SampleState(int(self.states[i]))
        if state is SampleState.MISSING:
            return Sample.missing()
        return Sample(state, float(self.values[i]), self.reasons[i])

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self)):
            yield self[i]

    # ---- state masks ----
    @property
    def valid_mask(self) -> np.ndarray:
        return self.states == SampleState.VALID

    @property
    def missing_mask(self) -> np.ndarray:
        return self.states == SampleState.MISSING

    @property
    def excluded_mask(self) -> np.ndarray:
        return self.states == SampleState.EXCLUDED

    def source_key(self, separator: str = NAME_SEPARATOR) -> tuple[str, str]:
        return split_series_name(self.name, separator)

    # ---- transformations ----
    def exclude(self, mask: np.ndarray, reason: str) -> "Series":
        """
        Return a new Series where Valid samples selected by `mask` become
        Excluded(reason). Missing and already excluded samples are kept.
        """
        if not isinstance(reason, str) or not reason.strip():
            raise InvalidSample("An exclusion needs a non-empty reason.")

        m = np.asarray(mask, dtype=bool)
        if m.shape != self.values.shape:
            raise InvalidSeries(
                f"Exclusion mask must have length {len(self)}, got shape {m.shape}"
            )

        hit = m & self.valid_mask
        states = self.states.copy()
        reasons = self.reasons.copy()
        states[hit] = SampleState.EXCLUDED
        reasons[hit] = reason
        return Series(
            name=self.name,
            values=self.values,
            states=states,
            reasons=reasons,
            meta=self.meta.copy(),
        )
