# test/test_load.py
from datetime import datetime

import pytest

from curvecleaner import CleanerConfig
from curvecleaner.core import Curve, InvalidBuffer
from curvecleaner.io import export_exclusions, load_dataset


NOW = datetime(2024, 5, 1, 12, 0, 0)

TABLE = (
    "Timestamp\tM1~WS80~Mean\tM1~WS60~Mean\n"
    "2024-01-01 10:00\t5\t5\n"
    "2024-01-01 10:10\t6\t6\n"
    "2024-01-01 11:00\t7\t7\n"
    "2024-01-01 12:00\t50\t50\n"
    "2024-01-01 12:10\t-999\t5\n"
)

SQUARE = Curve(points=[(0, 0), (0, 10), (10, 10), (10, 0)], closed=True)


@pytest.fixture
def table_path(tmp_path):
    path = tmp_path / "mast.txt"
    path.write_text(TABLE, encoding="utf-8")
    return path


def test_load_dataset_uses_config(table_path):
    ds = load_dataset(table_path, CleanerConfig(missing_value=-999.0))
    assert ds["M1~WS80~Mean"].missing_mask.tolist() == [False, False, False, False, True]


def test_export_round_trip(table_path, tmp_path):
    ds = load_dataset(table_path, CleanerConfig(missing_value=-999.0))
    ds = ds.exclude("M1~WS80~Mean", "M1~WS60~Mean", SQUARE, "icing", exclude_y=False)

    out = tmp_path / "exclusions.txt"
    records = export_exclusions(ds, out, 10, now=NOW)

    assert [(r.start, r.end) for r in records] == [
        (datetime(2024, 1, 1, 9, 50), datetime(2024, 1, 1, 10, 20)),
        (datetime(2024, 1, 1, 10, 50), datetime(2024, 1, 1, 11, 10)),
    ]
    assert out.read_text(encoding="utf-8").splitlines() == [
        "M1\tWS80\ticing\t2024-01-01 09:50:00\t2024-01-01 10:20:00\t2024-05-01 12:00:00",
        "M1\tWS80\ticing\t2024-01-01 10:50:00\t2024-01-01 11:10:00\t2024-05-01 12:00:00",
    ]


def test_export_default_buffer_from_config(table_path, tmp_path):
    cfg = CleanerConfig(time_buffer_minutes=30.0)
    ds = load_dataset(table_path, cfg)
    ds = ds.exclude("M1~WS80~Mean", "M1~WS60~Mean", SQUARE, "icing", exclude_y=False)

    records = export_exclusions(ds, tmp_path / "e.txt", config=cfg, now=NOW)
    assert len(records) == 1
    assert records[0].start == datetime(2024, 1, 1, 9, 30)
    assert records[0].end == datetime(2024, 1, 1, 11, 30)


def test_export_rejected_buffer_writes_nothing(table_path, tmp_path):
    ds = load_dataset(table_path)
    out = tmp_path / "e.txt"
    with pytest.raises(InvalidBuffer):
        export_exclusions(ds, out, -5, now=NOW)
    assert not out.exists()
