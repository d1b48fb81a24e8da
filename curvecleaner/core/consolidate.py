# curvecleaner/core/consolidate.py
"""
Interval consolidation of exclusion events.

Each event timestamp is widened by a symmetric buffer; the resulting intervals
are grouped by (source, sensor, reason) and merged into disjoint ranges.
Intervals that merely touch (start == current end) are merged.
"""
from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, NamedTuple, Union

import numpy as np

from curvecleaner.utils.logging import get_logger

from .exceptions import InvalidBuffer

logger = get_logger(__name__)

Interval = tuple[datetime, datetime]


class GroupKey(NamedTuple):
    source: str
    sensor: str
    reason: str


@dataclass(frozen=True, slots=True)
class ExclusionEvent:
    key: GroupKey
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class ExclusionRecord:
    key: GroupKey
    start: datetime
    end: datetime
    generated: datetime

    @property
    def source(self) -> str:
        return self.key.source

    @property
    def sensor(self) -> str:
        return self.key.sensor

    @property
    def reason(self) -> str:
        return self.key.reason


EventLike = Union[ExclusionEvent, tuple]


def as_buffer(buffer: float | timedelta) -> timedelta:
    """Normalise a buffer given in minutes (or as a timedelta) and check it is >= 0."""
    if isinstance(buffer, timedelta):
        delta = buffer
    else:
        minutes = float(buffer)
        if not math.isfinite(minutes):
            raise InvalidBuffer(f"Time buffer must be finite, got {buffer!r}")
        delta = timedelta(minutes=minutes)

    if delta < timedelta(0):
        raise InvalidBuffer(f"Time buffer must be non-negative, got {buffer!r}")
    return delta


def _as_datetime(ts) -> datetime:
    if isinstance(ts, np.datetime64):
        return ts.astype("datetime64[us]").item()
    if isinstance(ts, datetime):
        return ts
    raise TypeError(f"Expected a datetime timestamp, got {type(ts).__name__}")


def _unpack(event: EventLike) -> tuple[GroupKey, datetime]:
    if isinstance(event, ExclusionEvent):
        key, ts = event.key, event.timestamp
    else:
        key, ts = event
    return GroupKey(*key), _as_datetime(ts)


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """
    Merge intervals into disjoint ranges ordered by start.

    Sorting is by (start, end); overlap is inclusive of the boundary.
    """
    ordered = sorted(intervals)
    if not ordered:
        return []

    merged: list[Interval] = []
    current_start, current_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= current_end:
            current_end = max(current_end, end)
        else:
            merged.append((current_start, current_end))
            current_start, current_end = start, end
    merged.append((current_start, current_end))
    return merged


def consolidate_exclusions(
    events: Iterable[EventLike],
    buffer: float | timedelta,
    *,
    now: datetime | None = None,
) -> list[ExclusionRecord]:
    """
    Turn exclusion events into merged, non-overlapping records per group.

    Parameters
    ----------
    events:
        ExclusionEvent objects or ``(key, timestamp)`` pairs, where `key` is a
        GroupKey or any 3-sequence ``(source, sensor, reason)``.
    buffer:
        Minutes (or a timedelta) added on each side of every timestamp.
    now:
        Generation time stamped on every record. Defaults to the local time
        captured once per call.

    Returns
    -------
    list[ExclusionRecord]
        Groups in sorted key order; records within a group by increasing start.
    """
    delta = as_buffer(buffer)
    generated = datetime.now() if now is None else now

    groups: dict[GroupKey, list[Interval]] = defaultdict(list)
    n_events = 0
    for event in events:
        key, ts = _unpack(event)
        groups[key].append((ts - delta, ts + delta))
        n_events += 1

    records = [
        ExclusionRecord(key=key, start=start, end=end, generated=generated)
        for key in sorted(groups)
        for start, end in merge_intervals(groups[key])
    ]

    logger.info(
        "consolidated %d events into %d records across %d groups (buffer=%s)",
        n_events,
        len(records),
        len(groups),
        delta,
    )
    return records
