"""Delimited-file input and exclusion-record output."""

from .table_reader import TableFormatError, read_table
from .record_writer import records_to_frame, render_records, write_records
from .load import export_exclusions, load_dataset

__all__ = [
    "TableFormatError",
    "read_table",
    "records_to_frame",
    "render_records",
    "write_records",
    "load_dataset",
    "export_exclusions",
]
