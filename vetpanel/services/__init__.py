"""Service layer: record source and import/export helpers."""

from .record_source import RecordBatch, RecordSource, extract_records
from .transfer import ImportReport, TransferFormatError, import_records, parse_upload

__all__ = [
    "RecordBatch",
    "RecordSource",
    "extract_records",
    "ImportReport",
    "TransferFormatError",
    "import_records",
    "parse_upload",
]
