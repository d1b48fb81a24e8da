# curvecleaner/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping


ENV_PREFIX = "CURVECLEANER_"


@dataclass(frozen=True, slots=True)
class CleanerConfig:
    """
    Tunable settings of a cleaning session.

    - missing_value: raw reading classified as Missing (besides NaN)
    - time_buffer_minutes: default buffer around each excluded timestamp
    - close_threshold: click distance to the first point that closes a curve
    - timestamp_format: format of the input index column
    - record_time_format: format of the times written on export
    - delimiter: column separator of input and export files
    - name_separator: separator of the (source, sensor) tokens in series names
    """
    missing_value: float = 99999.0
    time_buffer_minutes: float = 10.0
    close_threshold: float = 0.3
    timestamp_format: str = "%Y-%m-%d %H:%M"
    record_time_format: str = "%Y-%m-%d %H:%M:%S"
    delimiter: str = "\t"
    name_separator: str = "~"

    def __post_init__(self) -> None:
        if self.time_buffer_minutes < 0:
            raise ValueError("time_buffer_minutes must be non-negative.")
        if self.close_threshold <= 0:
            raise ValueError("close_threshold must be positive.")
        if not self.delimiter:
            raise ValueError("delimiter must be a non-empty string.")
        if not self.name_separator:
            raise ValueError("name_separator must be a non-empty string.")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = ENV_PREFIX,
    ) -> "CleanerConfig":
        """
        Build a config from defaults overridden by environment variables,
        e.g. CURVECLEANER_MISSING_VALUE=-999.
        """
        env = os.environ if environ is None else environ
        base = cls()
        overrides = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None:
                continue
            cast = type(getattr(base, f.name))
            try:
                overrides[f.name] = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {prefix}{f.name.upper()}: {raw!r}") from e
        return replace(base, **overrides)
