from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from curvecleaner.core import CoreError, Dataset, DatasetMeta, Series, SeriesMeta
from curvecleaner.utils.logging import get_logger

logger = get_logger(__name__)

# Spellings accepted as NaN in a numeric cell
_NAN_TOKENS = {"nan", "+nan", "-nan"}


class TableFormatError(CoreError, ValueError):
    """Raised when a delimited table cannot be turned into a Dataset."""

    def __init__(self, message: str, *, line: int | None = None, column: str | None = None):
        self.line = line
        self.column = column
        prefix = f"Line {line}: " if line is not None else ""
        super().__init__(prefix + message)


def _line_number(row: int) -> int:
    # 1-based, header on line 1
    return row + 2


def _parse_index(raw: pd.Series, timestamp_format: str) -> np.ndarray:
    stamps = pd.to_datetime(raw.str.strip(), format=timestamp_format, errors="coerce")
    bad = np.flatnonzero(stamps.isna().to_numpy())
    if bad.size:
        row = int(bad[0])
        raise TableFormatError(
            f"Invalid timestamp '{raw.iloc[row]}' (expected format '{timestamp_format}')",
            line=_line_number(row),
            column=str(raw.name),
        )
    return stamps.to_numpy(dtype="datetime64[ns]")


def _parse_numeric(raw: pd.Series) -> np.ndarray:
    cells = raw.str.strip()
    nums = pd.to_numeric(cells, errors="coerce")
    bad = np.flatnonzero((nums.isna() & ~cells.str.lower().isin(_NAN_TOKENS)).to_numpy())
    if bad.size:
        row = int(bad[0])
        raise TableFormatError(
            f"Invalid numeric value '{raw.iloc[row]}' in column '{raw.name}'",
            line=_line_number(row),
            column=str(raw.name),
        )
    return nums.to_numpy(dtype=float)


def read_table(
    path: str | Path,
    *,
    missing_value: float | None = 99999.0,
    timestamp_format: str = "%Y-%m-%d %H:%M",
    delimiter: str = "\t",
) -> Dataset:
    """
    Read a delimited table into a Dataset.

    Layout: a header row; the first column holds timestamps, every other
    column is one Series. Cells equal to `missing_value` or NaN are Missing.

    Raises
    ------
    FileNotFoundError
        If `path` does not exist.
    TableFormatError
        On an empty file, a ragged row, or a cell that does not parse.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    # The header is read as a data row so every row must match its field count.
    try:
        raw = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise TableFormatError("Empty file") from e
    except pd.errors.ParserError as e:
        raise TableFormatError(f"Malformed table: {e}") from e

    headers = [str(h) for h in raw.iloc[0].fillna("")]
    duplicated = {h for h in headers if headers.count(h) > 1}
    if duplicated:
        raise TableFormatError(f"Duplicate column names: {sorted(duplicated)}", line=1)

    df = raw.iloc[1:].reset_index(drop=True).fillna("")
    df.columns = headers

    index_col = df.columns[0]
    index = _parse_index(df[index_col], timestamp_format)

    series: dict[str, Series] = {}
    for pos, col in enumerate(df.columns[1:], start=1):
        values = _parse_numeric(df[col])
        name = str(col)
        series[name] = Series.from_raw(
            name,
            values,
            missing_value=missing_value,
            meta=SeriesMeta(source=f"{path.name}:column {pos}"),
        )

    ds = Dataset(
        index=index,
        series=series,
        meta=DatasetMeta(source=str(path), missing_value=missing_value),
    )
    logger.info("loaded %s: %d rows, %d series", path, ds.n, len(ds))
    return ds
