# test/test_series.py
import numpy as np
import pytest

from curvecleaner.core import (
    InvalidSample,
    InvalidSeries,
    InvalidSeriesName,
    Sample,
    SampleState,
    Series,
    SeriesMeta,
    split_series_name,
)


def test_default_states_follow_nan():
    s = Series(name="M1~WS80", values=np.array([1.0, np.nan, 3.0]))
    assert s.n == 3
    assert s.valid_mask.tolist() == [True, False, True]
    assert s.missing_mask.tolist() == [False, True, False]
    assert not s.excluded_mask.any()


def test_from_raw_classifies_sentinel_as_missing():
    s = Series.from_raw("M1~WS80", [1.0, 99999.0, np.nan, 4.0], missing_value=99999.0)
    assert s.missing_mask.tolist() == [False, True, True, False]
    assert np.isnan(s.values[1])
    assert s[0] == Sample.valid(1.0)
    assert s[1] == Sample.missing()


def test_rejects_bad_inputs():
    with pytest.raises(InvalidSeries):
        Series(name="", values=np.array([1.0]))
    with pytest.raises(InvalidSeries):
        Series(name="a~b", values=np.zeros((2, 2)))
    with pytest.raises(InvalidSeries):
        Series(name="a~b", values=np.array([1.0, 2.0]), states=np.array([0]))
    with pytest.raises(InvalidSeries):
        Series(name="a~b", values=np.array([1.0]), states=np.array([7]))


def test_rejects_inconsistent_reasons():
    with pytest.raises(InvalidSeries):
        Series(
            name="a~b",
            values=np.array([1.0]),
            states=np.array([SampleState.VALID]),
            reasons=np.array(["oops"], dtype=object),
        )
    with pytest.raises(InvalidSeries):
        Series(
            name="a~b",
            values=np.array([1.0]),
            states=np.array([SampleState.EXCLUDED]),
        )
    with pytest.raises(InvalidSeries):
        Series(
            name="a~b",
            values=np.array([np.nan]),
            states=np.array([SampleState.VALID]),
        )


def test_exclude_only_touches_valid_samples():
    s = Series.from_raw("M1~WS80", [1.0, np.nan, 3.0, 4.0])
    s2 = s.exclude(np.array([True, True, True, False]), "icing")

    assert s2.states.tolist() == [
        SampleState.EXCLUDED,
        SampleState.MISSING,
        SampleState.EXCLUDED,
        SampleState.VALID,
    ]
    assert s2[0] == Sample(SampleState.EXCLUDED, 1.0, "icing")
    assert s2[1] == Sample.missing()
    # original untouched
    assert s.valid_mask.tolist() == [True, False, True, True]


def test_exclusion_is_one_way_and_keeps_first_reason():
    s = Series.from_raw("M1~WS80", [1.0, 2.0]).exclude(np.array([True, False]), "icing")
    s2 = s.exclude(np.array([True, True]), "shadow")
    assert s2.reasons.tolist() == ["icing", "shadow"]


def test_exclude_requires_reason_and_matching_mask():
    s = Series.from_raw("M1~WS80", [1.0, 2.0])
    with pytest.raises(InvalidSample):
        s.exclude(np.array([True, False]), "  ")
    with pytest.raises(InvalidSeries):
        s.exclude(np.array([True]), "icing")


def test_exclude_keeps_meta_copy():
    s = Series.from_raw("M1~WS80", [1.0], meta=SeriesMeta(unit="m/s", attrs={"h": 80}))
    s2 = s.exclude(np.array([True]), "icing")
    assert s2.meta.unit == "m/s"
    assert s2.meta.attrs == {"h": 80}
    assert s2.meta.attrs is not s.meta.attrs


def test_iteration_yields_samples():
    s = Series.from_raw("a~b", [1.0, np.nan])
    assert list(s) == [Sample.valid(1.0), Sample.missing()]


def test_sample_transitions():
    assert Sample.valid(2.0).exclude("icing") == Sample(SampleState.EXCLUDED, 2.0, "icing")
    assert Sample.missing().exclude("icing") == Sample.missing()

    ex = Sample.valid(2.0).exclude("icing")
    assert ex.exclude("other").reason == "icing"
    assert ex.is_excluded and not ex.is_valid


def test_sample_validation():
    with pytest.raises(InvalidSample):
        Sample(SampleState.VALID, float("nan"))
    with pytest.raises(InvalidSample):
        Sample(SampleState.EXCLUDED, 1.0, "")
    with pytest.raises(InvalidSample):
        Sample(SampleState.MISSING, 1.0)
    with pytest.raises(InvalidSample):
        Sample(SampleState.VALID, 1.0, "reason")


def test_split_series_name():
    assert split_series_name("M1~WS80") == ("M1", "WS80")
    assert split_series_name("M1~WS80~Mean") == ("M1", "WS80")
    assert split_series_name("M1|WS80", separator="|") == ("M1", "WS80")
    with pytest.raises(InvalidSeriesName):
        split_series_name("WS80")
    with pytest.raises(InvalidSeriesName):
        split_series_name("a~b~c~d")


def test_source_key():
    assert Series.from_raw("M1~WS80~Mean", [1.0]).source_key() == ("M1", "WS80")
