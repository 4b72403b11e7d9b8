"""JSON encoding of parsed results.

Output is deterministic: snake_case keys, sorted, two-space indent.
Datetimes are UTC with microseconds and a trailing ``Z``; attachment
payloads are base64; enums are written by value. decode_result reverses
encode_result.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from xcparse.core.errors import ExportError
from xcparse.report.models import (
    Attachment,
    CoverageSummary,
    FileCoverage,
    Metadata,
    ParsedResult,
    Tag,
    TestCase,
    TestStatus,
    TestSuite,
    TestType,
)

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def _dumps(obj: Any) -> bytes:
    return json.dumps(obj, sort_keys=True, indent=2).encode("utf-8")


def format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> datetime:
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=UTC)


# =============================================================================
# Encoding
# =============================================================================


def coverage_to_dict(coverage: CoverageSummary) -> dict[str, Any]:
    return {
        "line_coverage": coverage.line_coverage,
        "function_coverage": coverage.function_coverage,
        "branch_coverage": coverage.branch_coverage,
        "executable_lines": coverage.executable_lines,
        "covered_lines": coverage.covered_lines,
        "executable_functions": coverage.executable_functions,
        "covered_functions": coverage.covered_functions,
    }


def _attachment_to_dict(attachment: Attachment) -> dict[str, Any]:
    return {
        "name": attachment.name,
        "filename": attachment.filename,
        "uniform_type_identifier": attachment.uniform_type_identifier,
        "timestamp": format_date(attachment.timestamp) if attachment.timestamp else None,
        "data": base64.b64encode(attachment.data).decode("ascii"),
        "test_identifier": attachment.test_identifier,
        "activity_title": attachment.activity_title,
    }


def _case_to_dict(case: TestCase) -> dict[str, Any]:
    return {
        "name": case.name,
        "identifier": case.identifier,
        "duration": case.duration,
        "status": case.status.value,
        "tags": list(case.tags),
        "attachments": [_attachment_to_dict(a) for a in case.attachments],
        "failure_message": case.failure_message,
    }


def _suite_to_dict(suite: TestSuite) -> dict[str, Any]:
    return {
        "name": suite.name,
        "test_type": suite.test_type.value,
        "tests": [_case_to_dict(case) for case in suite.tests],
        "duration": suite.duration,
    }


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    return {"name": tag.name, "test_identifiers": list(tag.test_identifiers)}


def result_to_dict(result: ParsedResult) -> dict[str, Any]:
    def optional(coverage: CoverageSummary | None) -> dict[str, Any] | None:
        return coverage_to_dict(coverage) if coverage is not None else None

    return {
        "metadata": {
            "source_path": result.metadata.source_path,
            "parse_timestamp": format_date(result.metadata.parse_timestamp),
            "tool_version": result.metadata.tool_version,
        },
        "overall_coverage": optional(result.overall_coverage),
        "unit_coverage": optional(result.unit_coverage),
        "ui_coverage": optional(result.ui_coverage),
        "test_suites": [_suite_to_dict(suite) for suite in result.test_suites],
        "attachments": [_attachment_to_dict(a) for a in result.attachments],
        "tags": [tag_to_dict(tag) for tag in result.tags],
    }


def encode_result(result: ParsedResult) -> bytes:
    """Encode the full report."""
    return _dumps(result_to_dict(result))


def encode_coverage(coverage: CoverageSummary | None) -> bytes:
    """Encode one coverage summary; ``{}`` when there is none."""
    return _dumps(coverage_to_dict(coverage) if coverage is not None else {})


def encode_tags(tags: Iterable[Tag]) -> bytes:
    return _dumps([tag_to_dict(tag) for tag in tags])


def encode_coverage_report(result: ParsedResult, files: Iterable[FileCoverage] = ()) -> bytes:
    """Coverage view: the three buckets plus optional per-file rows."""
    data: dict[str, Any] = {
        key: coverage_to_dict(coverage) if coverage is not None else None
        for key, coverage in (
            ("overall_coverage", result.overall_coverage),
            ("unit_coverage", result.unit_coverage),
            ("ui_coverage", result.ui_coverage),
        )
    }
    data["files"] = [
        {
            "name": file.name,
            "path": file.path,
            "line_coverage": file.line_coverage,
            "function_coverage": file.function_coverage,
            "executable_lines": file.executable_lines,
            "covered_lines": file.covered_lines,
        }
        for file in files
    ]
    return _dumps(data)


def encode_test_results(result: ParsedResult) -> bytes:
    """Test view: suites and tags with the headline counts."""
    return _dumps(
        {
            "summary": {
                "total": result.total_tests,
                "passed": len(result.passed_tests),
                "failed": len(result.failed_tests),
                "skipped": len(result.skipped_tests),
                "success_rate": result.success_rate,
                "duration": result.total_duration,
            },
            "test_suites": [_suite_to_dict(suite) for suite in result.test_suites],
            "tags": [tag_to_dict(tag) for tag in result.tags],
        }
    )


# =============================================================================
# Decoding
# =============================================================================


def _coverage_from_dict(data: dict[str, Any] | None) -> CoverageSummary | None:
    if data is None:
        return None
    return CoverageSummary(
        line_coverage=data["line_coverage"],
        function_coverage=data["function_coverage"],
        branch_coverage=data.get("branch_coverage"),
        executable_lines=data["executable_lines"],
        covered_lines=data["covered_lines"],
        executable_functions=data["executable_functions"],
        covered_functions=data["covered_functions"],
    )


def _attachment_from_dict(data: dict[str, Any]) -> Attachment:
    timestamp = data.get("timestamp")
    return Attachment(
        name=data["name"],
        filename=data.get("filename"),
        uniform_type_identifier=data.get("uniform_type_identifier"),
        timestamp=parse_date(timestamp) if timestamp else None,
        data=base64.b64decode(data.get("data", ""), validate=True),
        test_identifier=data["test_identifier"],
        activity_title=data.get("activity_title"),
    )


def _case_from_dict(data: dict[str, Any]) -> TestCase:
    return TestCase(
        name=data["name"],
        identifier=data["identifier"],
        duration=data["duration"],
        status=TestStatus(data["status"]),
        tags=tuple(data.get("tags", [])),
        attachments=tuple(_attachment_from_dict(a) for a in data.get("attachments", [])),
        failure_message=data.get("failure_message"),
    )


def _suite_from_dict(data: dict[str, Any]) -> TestSuite:
    return TestSuite(
        name=data["name"],
        test_type=TestType(data["test_type"]),
        tests=tuple(_case_from_dict(case) for case in data["tests"]),
        duration=data["duration"],
    )


def result_from_dict(data: dict[str, Any]) -> ParsedResult:
    metadata = data["metadata"]
    return ParsedResult(
        metadata=Metadata(
            source_path=metadata["source_path"],
            parse_timestamp=parse_date(metadata["parse_timestamp"]),
            tool_version=metadata.get("tool_version"),
        ),
        overall_coverage=_coverage_from_dict(data.get("overall_coverage")),
        unit_coverage=_coverage_from_dict(data.get("unit_coverage")),
        ui_coverage=_coverage_from_dict(data.get("ui_coverage")),
        test_suites=tuple(_suite_from_dict(s) for s in data.get("test_suites", [])),
        attachments=tuple(_attachment_from_dict(a) for a in data.get("attachments", [])),
        tags=tuple(
            Tag(name=t["name"], test_identifiers=tuple(t["test_identifiers"]))
            for t in data.get("tags", [])
        ),
    )


def decode_result(payload: bytes | str) -> ParsedResult:
    """Decode a document produced by encode_result.

    Raises:
        ExportError: If the payload is not a valid encoded report.
    """
    try:
        data = json.loads(payload)
        return result_from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ExportError.decode_failed(f"{type(e).__name__}: {e}") from e
