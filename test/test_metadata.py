# test/test_metadata.py
import pytest

from curvecleaner.core import SeriesMeta, DatasetMeta
from curvecleaner.core import InvalidSeries, InvalidDataset


def test_seriesmeta_accepts_dict_and_normalizes_none():
    m = SeriesMeta(unit="m/s", attrs={"k": 1})
    assert m.attrs == {"k": 1}

    m2 = SeriesMeta(attrs=None)
    assert m2.attrs == {}


def test_seriesmeta_rejects_non_dict_attrs():
    with pytest.raises(InvalidSeries):
        SeriesMeta(attrs=["not", "a", "dict"])  # type: ignore[arg-type]


def test_datasetmeta_accepts_dict_and_normalizes_none():
    m = DatasetMeta(description="x", missing_value=-999.0, attrs={"hello": "world"})
    assert m.attrs == {"hello": "world"}
    assert m.missing_value == -999.0

    m2 = DatasetMeta(attrs=None)
    assert m2.attrs == {}


def test_datasetmeta_rejects_non_dict_attrs():
    with pytest.raises(InvalidDataset):
        DatasetMeta(attrs=123)  # type: ignore[arg-type]


def test_copy_is_independent():
    m = DatasetMeta(source="f.txt", attrs={"a": 1})
    c = m.copy()
    assert c == m
    assert c.attrs is not m.attrs
