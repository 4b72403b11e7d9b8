"""Format dispatch for coverage and test-result exports."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from xcparse.core.errors import ExportError
from xcparse.export import csv_report, html_report, json_report
from xcparse.report.models import FileCoverage, ParsedResult


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    HTML = "html"

    @classmethod
    def parse(cls, value: ExportFormat | str) -> ExportFormat:
        """Look up a format by name, case-insensitively.

        Raises:
            ExportError: If the name is not a known format.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise ExportError.unsupported_format(value) from None


# Output file names used by the export command
COVERAGE_FILENAMES = {
    ExportFormat.JSON: "coverage.json",
    ExportFormat.CSV: "coverage.csv",
    ExportFormat.HTML: "coverage_report.html",
}
TEST_RESULTS_FILENAMES = {
    ExportFormat.JSON: "test_results.json",
    ExportFormat.CSV: "test_results.csv",
    ExportFormat.HTML: "test_report.html",
}


def export_coverage(
    result: ParsedResult,
    fmt: ExportFormat | str = ExportFormat.JSON,
    files: Iterable[FileCoverage] = (),
) -> bytes:
    """Render the coverage view of a result."""
    match ExportFormat.parse(fmt):
        case ExportFormat.JSON:
            return json_report.encode_coverage_report(result, files)
        case ExportFormat.CSV:
            return csv_report.encode_coverage(files)
        case ExportFormat.HTML:
            return html_report.encode_coverage(result, files)


def export_test_results(
    result: ParsedResult, fmt: ExportFormat | str = ExportFormat.JSON
) -> bytes:
    """Render the test-result view of a result."""
    match ExportFormat.parse(fmt):
        case ExportFormat.JSON:
            return json_report.encode_test_results(result)
        case ExportFormat.CSV:
            return csv_report.encode_test_results(result)
        case ExportFormat.HTML:
            return html_report.encode_test_results(result)
