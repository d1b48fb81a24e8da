# test/test_config.py
import pytest

from curvecleaner.config import CleanerConfig


def test_defaults():
    cfg = CleanerConfig()
    assert cfg.missing_value == 99999.0
    assert cfg.time_buffer_minutes == 10.0
    assert cfg.close_threshold == 0.3
    assert cfg.timestamp_format == "%Y-%m-%d %H:%M"
    assert cfg.delimiter == "\t"
    assert cfg.name_separator == "~"


def test_validation():
    with pytest.raises(ValueError):
        CleanerConfig(time_buffer_minutes=-1)
    with pytest.raises(ValueError):
        CleanerConfig(close_threshold=0)
    with pytest.raises(ValueError):
        CleanerConfig(delimiter="")


def test_from_env_overrides_and_casts():
    env = {
        "CURVECLEANER_MISSING_VALUE": "-999",
        "CURVECLEANER_TIME_BUFFER_MINUTES": "7.5",
        "CURVECLEANER_NAME_SEPARATOR": "|",
        "UNRELATED": "x",
    }
    cfg = CleanerConfig.from_env(env)
    assert cfg.missing_value == -999.0
    assert cfg.time_buffer_minutes == 7.5
    assert cfg.name_separator == "|"
    assert cfg.close_threshold == 0.3


def test_from_env_custom_prefix():
    cfg = CleanerConfig.from_env({"MDC_CLOSE_THRESHOLD": "1.5"}, prefix="MDC_")
    assert cfg.close_threshold == 1.5


def test_from_env_invalid_value():
    with pytest.raises(ValueError):
        CleanerConfig.from_env({"CURVECLEANER_MISSING_VALUE": "lots"})


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("CURVECLEANER_TIMESTAMP_FORMAT", "%d/%m/%Y %H:%M")
    assert CleanerConfig.from_env().timestamp_format == "%d/%m/%Y %H:%M"
