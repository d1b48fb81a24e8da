from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from curvecleaner.core import ExclusionRecord
from curvecleaner.utils.logging import get_logger

logger = get_logger(__name__)

RECORD_COLUMNS = ["source", "sensor", "reason", "start", "end", "generated"]


def records_to_frame(records: Iterable[ExclusionRecord]) -> pd.DataFrame:
    """One row per record, times kept as timestamps."""
    rows = [
        (r.source, r.sensor, r.reason, r.start, r.end, r.generated)
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def render_records(
    records: Iterable[ExclusionRecord],
    *,
    time_format: str = "%Y-%m-%d %H:%M:%S",
    delimiter: str = "\t",
) -> str:
    """Render records as header-less delimited text, one line per record."""
    df = records_to_frame(records)
    if df.empty:
        return ""
    for col in ("start", "end", "generated"):
        df[col] = [t.strftime(time_format) for t in df[col]]
    return df.to_csv(sep=delimiter, header=False, index=False, lineterminator="\n")


def write_records(
    records: Iterable[ExclusionRecord],
    path: str | Path,
    *,
    time_format: str = "%Y-%m-%d %H:%M:%S",
    delimiter: str = "\t",
) -> Path:
    """
    Write records to `path`.

    The whole file is rendered in memory first, so a rendering error leaves
    any existing file untouched.
    """
    records = list(records)
    text = render_records(records, time_format=time_format, delimiter=delimiter)
    path = Path(path)
    path.write_text(text, encoding="utf-8")
    logger.info("wrote %d exclusion records to %s", len(records), path)
    return path
