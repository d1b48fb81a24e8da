from __future__ import annotations

from datetime import datetime
from pathlib import Path

from curvecleaner.config import CleanerConfig
from curvecleaner.core import Dataset, ExclusionRecord, consolidate_exclusions
from curvecleaner.io.record_writer import write_records
from curvecleaner.io.table_reader import read_table


def load_dataset(path: str | Path, config: CleanerConfig | None = None) -> Dataset:
    cfg = config or CleanerConfig()
    return read_table(
        path,
        missing_value=cfg.missing_value,
        timestamp_format=cfg.timestamp_format,
        delimiter=cfg.delimiter,
    )


def export_exclusions(
    dataset: Dataset,
    path: str | Path,
    buffer_minutes: float | None = None,
    *,
    config: CleanerConfig | None = None,
    now: datetime | None = None,
) -> list[ExclusionRecord]:
    """
    Consolidate every excluded sample of `dataset` and write the records.

    Nothing is written if consolidation fails (e.g. negative buffer or a
    series name without (source, sensor) tokens).
    """
    cfg = config or CleanerConfig()
    buffer = cfg.time_buffer_minutes if buffer_minutes is None else buffer_minutes

    events = dataset.exclusion_events(separator=cfg.name_separator)
    records = consolidate_exclusions(events, buffer, now=now)
    write_records(
        records,
        path,
        time_format=cfg.record_time_format,
        delimiter=cfg.delimiter,
    )
    return records
