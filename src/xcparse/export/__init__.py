"""Exporters: JSON, CSV, HTML and plain-text renderings of a ParsedResult."""

from xcparse.export.attachments import attachment_metadata, export_attachments
from xcparse.export.exporter import (
    COVERAGE_FILENAMES,
    TEST_RESULTS_FILENAMES,
    ExportFormat,
    export_coverage,
    export_test_results,
)
from xcparse.export.json_report import decode_result, encode_result
from xcparse.export.text_report import format_coverage, format_summary, format_tags

__all__ = [
    "COVERAGE_FILENAMES",
    "TEST_RESULTS_FILENAMES",
    "ExportFormat",
    "attachment_metadata",
    "decode_result",
    "encode_result",
    "export_attachments",
    "export_coverage",
    "export_test_results",
    "format_coverage",
    "format_summary",
    "format_tags",
]
