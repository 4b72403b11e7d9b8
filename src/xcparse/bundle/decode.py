"""Decoders for xcresulttool and xccov JSON.

xcresulttool's object output (``get object --format json``, the "legacy"
API on Xcode 16+) wraps every value in a typed envelope::

    {"_type": {"_name": "String"}, "_value": "MyTests"}
    {"_type": {"_name": "Array"}, "_values": [...]}
    {"_type": {"_name": "Reference"}, "id": {"_type": ..., "_value": "0~ab"}}

xccov's ``view --report --json`` output is plain camelCase JSON.

Decoders are lenient: missing keys become defaults and unknown node types
are skipped. Only a root that is not a mapping yields None.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog

from xcparse.bundle.models import (
    ActionRecord,
    Activity,
    AttachmentRecord,
    InvocationRecord,
    RawCoverage,
    RawCoverageFile,
    RawCoverageFunction,
    RawCoverageTarget,
    Reference,
    TestableSummary,
    TestGroup,
    TestLeaf,
    TestNode,
    TestPlanRunSummaries,
    TestPlanRunSummary,
    TestRef,
)

log = structlog.get_logger(__name__)

_DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S%z")

# =============================================================================
# Envelope helpers
# =============================================================================


def type_name(node: Any) -> str | None:
    if not isinstance(node, dict):
        return None
    t = node.get("_type")
    if isinstance(t, dict):
        name = t.get("_name")
        return name if isinstance(name, str) else None
    return None


def _str(node: dict[str, Any], key: str) -> str | None:
    field = node.get(key)
    if isinstance(field, dict):
        raw = field.get("_value")
        return raw if isinstance(raw, str) else None
    return None


def _float(node: dict[str, Any], key: str) -> float:
    raw = _str(node, key)
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        return 0.0


def parse_date(raw: str | None) -> datetime | None:
    """Parse an xcresult timestamp such as 2024-03-01T10:15:00.123+0000."""
    if not raw:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        log.debug("unparseable_date", value=raw)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _date(node: dict[str, Any], key: str) -> datetime | None:
    return parse_date(_str(node, key))


def _values(node: dict[str, Any], key: str) -> list[dict[str, Any]]:
    field = node.get(key)
    if not isinstance(field, dict):
        return []
    values = field.get("_values")
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, dict)]


def _object(node: dict[str, Any], key: str) -> dict[str, Any]:
    field = node.get(key)
    return field if isinstance(field, dict) else {}


def _ref(node: dict[str, Any], key: str) -> Reference | None:
    ref_id = _str(_object(node, key), "id")
    return Reference(id=ref_id) if ref_id else None


# =============================================================================
# Invocation record
# =============================================================================


def decode_invocation_record(data: Any) -> InvocationRecord | None:
    if not isinstance(data, dict):
        return None
    return InvocationRecord(actions=[decode_action(a) for a in _values(data, "actions")])


def decode_action(node: dict[str, Any]) -> ActionRecord:
    result = _object(node, "actionResult")
    coverage = _object(result, "coverage")
    return ActionRecord(
        name=_str(node, "title"),
        scheme_command=_str(node, "schemeCommandName"),
        tests_ref=_ref(result, "testsRef"),
        coverage_ref=_ref(coverage, "reportRef") or _ref(coverage, "archiveRef"),
        log_ref=_ref(result, "logRef") or _ref(_object(node, "buildResult"), "logRef"),
    )


# =============================================================================
# Test plan summaries
# =============================================================================


def decode_test_plan_summaries(data: Any) -> TestPlanRunSummaries | None:
    if not isinstance(data, dict):
        return None
    return TestPlanRunSummaries(
        summaries=[
            TestPlanRunSummary(
                name=_str(summary, "name"),
                testable_summaries=[
                    _decode_testable(testable)
                    for testable in _values(summary, "testableSummaries")
                ],
            )
            for summary in _values(data, "summaries")
        ]
    )


def _decode_testable(node: dict[str, Any]) -> TestableSummary:
    groups: list[TestGroup] = []
    for test in _values(node, "tests"):
        decoded = decode_test_node(test)
        if isinstance(decoded, TestGroup):
            groups.append(decoded)
        else:
            log.debug("skipping_top_level_node", type=type_name(test))
    return TestableSummary(
        name=_str(node, "name"),
        target_name=_str(node, "targetName"),
        tests=groups,
    )


def decode_test_node(node: dict[str, Any]) -> TestNode | None:
    match type_name(node):
        case "ActionTestSummaryGroup":
            subtests = [decode_test_node(sub) for sub in _values(node, "subtests")]
            return TestGroup(
                name=_str(node, "name"),
                identifier=_str(node, "identifier"),
                duration=_float(node, "duration"),
                subtests=[sub for sub in subtests if sub is not None],
            )
        case "ActionTestSummary":
            return decode_test_summary(node)
        case "ActionTestMetadata":
            return TestRef(
                name=_str(node, "name"),
                identifier=_str(node, "identifier"),
                duration=_float(node, "duration"),
                test_status=_str(node, "testStatus") or "",
                summary_ref=_ref(node, "summaryRef"),
            )
        case other:
            log.debug("unknown_test_node", type=other)
            return None


def decode_test_summary(data: Any) -> TestLeaf | None:
    if not isinstance(data, dict):
        return None
    return TestLeaf(
        name=_str(data, "name"),
        identifier=_str(data, "identifier"),
        duration=_float(data, "duration"),
        test_status=_str(data, "testStatus") or "",
        activities=[decode_activity(a) for a in _values(data, "activitySummaries")],
    )


def decode_activity(node: dict[str, Any]) -> Activity:
    return Activity(
        title=_str(node, "title") or "",
        activity_type=_str(node, "activityType"),
        start=_date(node, "start"),
        attachments=[decode_attachment(a) for a in _values(node, "attachments")],
        subactivities=[decode_activity(a) for a in _values(node, "subactivities")],
    )


def decode_attachment(node: dict[str, Any]) -> AttachmentRecord:
    return AttachmentRecord(
        name=_str(node, "name"),
        filename=_str(node, "filename"),
        uniform_type_identifier=_str(node, "uniformTypeIdentifier"),
        timestamp=_date(node, "timestamp"),
        payload_ref=_ref(node, "payloadRef"),
    )


# =============================================================================
# xccov report
# =============================================================================


def _int(data: dict[str, Any], key: str) -> int:
    raw = data.get(key)
    return int(raw) if isinstance(raw, int | float) else 0


def _ratio(data: dict[str, Any], key: str) -> float:
    raw = data.get(key)
    return float(raw) if isinstance(raw, int | float) else 0.0


def _dicts(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key)
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]


def decode_coverage_report(data: Any) -> RawCoverage | None:
    """Decode ``xccov view --report --json`` output."""
    if not isinstance(data, dict):
        return None
    return RawCoverage(
        executable_lines=_int(data, "executableLines"),
        covered_lines=_int(data, "coveredLines"),
        line_coverage=_ratio(data, "lineCoverage"),
        targets=[
            RawCoverageTarget(
                name=str(target.get("name", "")),
                executable_lines=_int(target, "executableLines"),
                covered_lines=_int(target, "coveredLines"),
                line_coverage=_ratio(target, "lineCoverage"),
                files=[_decode_coverage_file(f) for f in _dicts(target, "files")],
            )
            for target in _dicts(data, "targets")
        ],
    )


def _decode_coverage_file(data: dict[str, Any]) -> RawCoverageFile:
    return RawCoverageFile(
        path=str(data.get("path", "")),
        name=str(data.get("name", "")),
        executable_lines=_int(data, "executableLines"),
        covered_lines=_int(data, "coveredLines"),
        line_coverage=_ratio(data, "lineCoverage"),
        functions=[
            RawCoverageFunction(
                name=str(fn.get("name", "")),
                line_number=_int(fn, "lineNumber"),
                execution_count=_int(fn, "executionCount"),
                executable_lines=_int(fn, "executableLines"),
                covered_lines=_int(fn, "coveredLines"),
                line_coverage=_ratio(fn, "lineCoverage"),
            )
            for fn in _dicts(data, "functions")
        ],
    )
