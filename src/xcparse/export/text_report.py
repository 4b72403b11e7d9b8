"""Plain-text rendering of parsed results for the terminal."""

from __future__ import annotations

from collections.abc import Sequence

from xcparse.core.formatting import format_bytes, format_duration, format_percent, pluralize
from xcparse.report.models import CoverageSummary, ParsedResult, Tag

NO_COVERAGE = "No coverage data available"


def _heading(title: str) -> list[str]:
    return [title, "=" * len(title), ""]


def format_coverage(coverage: CoverageSummary | None, title: str = "Overall Coverage") -> str:
    """Coverage block; a placeholder line when there is no coverage."""
    lines = _heading("Coverage Summary")
    if coverage is None:
        lines.append(NO_COVERAGE)
        return "\n".join(lines) + "\n"

    lines += [
        f"{title}:",
        f"  Line Coverage: {format_percent(coverage.line_coverage)}%",
        f"  Function Coverage: {format_percent(coverage.function_coverage)}%",
        f"  Executable Lines: {coverage.executable_lines}",
        f"  Covered Lines: {coverage.covered_lines}",
        f"  Functions: {coverage.covered_functions}/{coverage.executable_functions}",
    ]
    return "\n".join(lines) + "\n"


def format_test_summary(result: ParsedResult, slowest: int = 0) -> str:
    lines = _heading("Test Summary")
    lines += [
        f"Total Tests: {result.total_tests}",
        f"Passed: {len(result.passed_tests)}",
        f"Failed: {len(result.failed_tests)}",
        f"Skipped: {len(result.skipped_tests)}",
        f"Success Rate: {result.success_rate:.2f}%",
        f"Duration: {format_duration(result.total_duration)}",
        f"Test Suites: {len(result.test_suites)}",
        f"Tags: {len(result.tags)}",
    ]

    failed = result.failed_tests
    if failed:
        lines += ["", "Failures:"]
        for case in failed:
            message = f": {case.failure_message}" if case.failure_message else ""
            lines.append(f"  - {case.name}{message}")

    if slowest > 0 and result.total_tests:
        lines += ["", "Slowest Tests:"]
        for case in result.slowest_tests(slowest):
            lines.append(f"  {format_duration(case.duration):>8}  {case.name}")

    return "\n".join(lines) + "\n"


def format_attachment_summary(result: ParsedResult) -> str:
    lines = _heading("Attachments Summary")
    lines.append(
        f"Total Attachments: {len(result.attachments)} ({format_bytes(result.attachments_size)})"
    )
    for uti, attachments in result.attachments_by_type().items():
        lines.append(f"  {uti}: {len(attachments)}")
    return "\n".join(lines) + "\n"


def format_summary(result: ParsedResult, slowest: int = 0) -> str:
    """Full report: header, coverage, tests and attachment histogram.

    Args:
        result: Parsed bundle.
        slowest: Number of slowest tests to list; 0 omits the section.
    """
    metadata = result.metadata
    header = _heading("XCResult Parse Summary")
    header += [
        f"Path: {metadata.source_path}",
        f"Parse Date: {metadata.parse_timestamp.isoformat()}",
        f"Xcode Version: {metadata.tool_version or 'Unknown'}",
        "",
    ]
    sections = [
        "\n".join(header),
        format_coverage(result.overall_coverage),
        format_test_summary(result, slowest),
        format_attachment_summary(result),
    ]
    return "\n".join(sections)


def format_tags(tags: Sequence[Tag], preview: int = 5) -> str:
    """Tag listing with up to ``preview`` identifiers per tag."""
    lines = _heading("Test Tags")
    if not tags:
        lines.append("No tags found")
        return "\n".join(lines) + "\n"

    for tag in tags:
        count = len(tag.test_identifiers)
        lines.append(f"{tag.name} ({pluralize(count, 'test')})")
        for identifier in tag.test_identifiers[:preview]:
            lines.append(f"  - {identifier}")
        if count > preview:
            lines.append(f"  ... and {count - preview} more")
        lines.append("")
    return "\n".join(lines) + "\n"
