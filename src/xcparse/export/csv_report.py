"""CSV exports for test results and per-file coverage."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from typing import Any

from xcparse.report.models import FileCoverage, ParsedResult

TEST_HEADER = ("Test Suite", "Test Name", "Status", "Duration", "Tags")
COVERAGE_HEADER = (
    "File",
    "Line Coverage",
    "Function Coverage",
    "Executable Lines",
    "Covered Lines",
)

TAG_SEPARATOR = ";"


def _write_rows(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def encode_test_results(result: ParsedResult) -> bytes:
    """One row per test case, in suite order."""
    return _write_rows(
        TEST_HEADER,
        (
            (
                suite.name,
                case.name,
                case.status.value,
                case.duration,
                TAG_SEPARATOR.join(case.tags),
            )
            for suite in result.test_suites
            for case in suite.tests
        ),
    )


def encode_coverage(files: Iterable[FileCoverage] = ()) -> bytes:
    """One row per file; header only when no rows are given."""
    return _write_rows(
        COVERAGE_HEADER,
        (
            (
                file.name,
                file.line_coverage,
                file.function_coverage,
                file.executable_lines,
                file.covered_lines,
            )
            for file in files
        ),
    )
