"""Normalized report model.

A ParsedResult is built once per parse and never mutated: every type here
is a frozen dataclass and collections are tuples. Derived views (totals,
filters, slowest tests, deltas) are computed from the stored tuples on
access.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TestStatus(Enum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    UNKNOWN = "unknown"


class TestType(Enum):
    __test__ = False

    UNIT = "unit"
    UI = "ui"
    INTEGRATION = "integration"
    PERFORMANCE = "performance"
    UNKNOWN = "unknown"


class AttachmentKind(Enum):
    SCREENSHOT = "screenshot"
    LOG = "log"
    DATA = "data"


def ratio(covered: int, total: int) -> float:
    """covered / total, or exactly 0.0 when total is zero."""
    return covered / total if total > 0 else 0.0


# =============================================================================
# Coverage
# =============================================================================


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage for one bucket (overall, unit, or UI tests)."""

    line_coverage: float
    function_coverage: float
    executable_lines: int
    covered_lines: int
    executable_functions: int
    covered_functions: int
    branch_coverage: float | None = None

    @property
    def percentage(self) -> float:
        return self.line_coverage * 100

    @classmethod
    def from_counts(
        cls,
        *,
        executable_lines: int,
        covered_lines: int,
        executable_functions: int,
        covered_functions: int,
    ) -> CoverageSummary:
        """Build a summary whose ratios are recomputed from raw counts."""
        return cls(
            line_coverage=ratio(covered_lines, executable_lines),
            function_coverage=ratio(covered_functions, executable_functions),
            executable_lines=executable_lines,
            covered_lines=covered_lines,
            executable_functions=executable_functions,
            covered_functions=covered_functions,
        )


@dataclass(frozen=True, slots=True)
class CoverageDelta:
    """Signed difference between UI and unit coverage (ui - unit)."""

    line_coverage: float
    function_coverage: float
    executable_lines: int
    covered_lines: int
    executable_functions: int
    covered_functions: int

    @classmethod
    def between(cls, ui: CoverageSummary, unit: CoverageSummary) -> CoverageDelta:
        return cls(
            line_coverage=ui.line_coverage - unit.line_coverage,
            function_coverage=ui.function_coverage - unit.function_coverage,
            executable_lines=ui.executable_lines - unit.executable_lines,
            covered_lines=ui.covered_lines - unit.covered_lines,
            executable_functions=ui.executable_functions - unit.executable_functions,
            covered_functions=ui.covered_functions - unit.covered_functions,
        )


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Per-file coverage row for the file-level exports."""

    name: str
    line_coverage: float
    function_coverage: float
    executable_lines: int
    covered_lines: int
    path: str | None = None


# =============================================================================
# Tests
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attachment:
    """An attachment recorded by a test activity.

    data is read from the bundle once, at parse time.
    """

    name: str
    test_identifier: str
    data: bytes = b""
    filename: str | None = None
    uniform_type_identifier: str | None = None
    timestamp: datetime | None = None
    activity_title: str | None = None

    @property
    def kind(self) -> AttachmentKind:
        uti = self.uniform_type_identifier
        if uti is None:
            return AttachmentKind.DATA
        if "image" in uti:
            return AttachmentKind.SCREENSHOT
        if "log" in uti or "text" in uti:
            return AttachmentKind.LOG
        return AttachmentKind.DATA

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class TestCase:
    __test__ = False

    name: str
    identifier: str
    duration: float
    status: TestStatus
    tags: tuple[str, ...] = ()
    # Attachments live in ParsedResult.attachments, keyed by test_identifier
    attachments: tuple[Attachment, ...] = ()
    failure_message: str | None = None


@dataclass(frozen=True, slots=True)
class TestSuite:
    __test__ = False

    name: str
    test_type: TestType
    tests: tuple[TestCase, ...]
    duration: float

    @classmethod
    def from_cases(cls, name: str, test_type: TestType, tests: Iterable[TestCase]) -> TestSuite:
        """Build a suite whose duration is the sum of its cases' durations."""
        cases = tuple(tests)
        return cls(
            name=name,
            test_type=test_type,
            tests=cases,
            duration=sum(case.duration for case in cases),
        )


@dataclass(frozen=True, slots=True)
class Tag:
    """One tag occurrence; records with the same name are not merged."""

    name: str
    test_identifiers: tuple[str, ...]


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True, slots=True)
class Metadata:
    source_path: str
    parse_timestamp: datetime
    tool_version: str | None = None


@dataclass(frozen=True, slots=True)
class ParsedResult:
    """Everything extracted from one result bundle."""

    metadata: Metadata
    test_suites: tuple[TestSuite, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    tags: tuple[Tag, ...] = ()
    overall_coverage: CoverageSummary | None = None
    unit_coverage: CoverageSummary | None = None
    ui_coverage: CoverageSummary | None = None

    # -- tests ---------------------------------------------------------------

    @property
    def all_tests(self) -> list[TestCase]:
        """Every case of every suite, in encounter order."""
        return [case for suite in self.test_suites for case in suite.tests]

    @property
    def total_tests(self) -> int:
        return sum(len(suite.tests) for suite in self.test_suites)

    @property
    def passed_tests(self) -> list[TestCase]:
        return self.tests_with_status(TestStatus.PASSED)

    @property
    def failed_tests(self) -> list[TestCase]:
        return self.tests_with_status(TestStatus.FAILED)

    @property
    def skipped_tests(self) -> list[TestCase]:
        return self.tests_with_status(TestStatus.SKIPPED)

    @property
    def success_rate(self) -> float:
        """Percentage of passed cases; 0.0 when there are none."""
        return ratio(len(self.passed_tests), self.total_tests) * 100

    @property
    def total_duration(self) -> float:
        return sum(suite.duration for suite in self.test_suites)

    @property
    def average_duration(self) -> float:
        total = self.total_tests
        return self.total_duration / total if total > 0 else 0.0

    def slowest_tests(self, count: int) -> list[TestCase]:
        """Cases by duration, longest first; ties keep encounter order."""
        if count <= 0:
            return []
        return sorted(self.all_tests, key=lambda case: case.duration, reverse=True)[:count]

    def filter_tests(
        self,
        *,
        tag: str | None = None,
        status: TestStatus | None = None,
        test_type: TestType | None = None,
    ) -> list[TestCase]:
        """Cases matching every given criterion."""
        return [
            case
            for suite in self.test_suites
            if test_type is None or suite.test_type == test_type
            for case in suite.tests
            if (tag is None or tag in case.tags) and (status is None or case.status == status)
        ]

    def tests_with_tag(self, tag: str) -> list[TestCase]:
        return self.filter_tests(tag=tag)

    def tests_with_status(self, status: TestStatus) -> list[TestCase]:
        return self.filter_tests(status=status)

    def suites_of_type(self, test_type: TestType) -> list[TestSuite]:
        return [suite for suite in self.test_suites if suite.test_type == test_type]

    # -- tags ----------------------------------------------------------------

    def merged_tags(self) -> list[Tag]:
        """Tag records combined by name, first-seen order.

        Identifiers are concatenated as-is; a test tagged twice appears twice.
        """
        merged: dict[str, list[str]] = {}
        for tag in self.tags:
            merged.setdefault(tag.name, []).extend(tag.test_identifiers)
        return [Tag(name=name, test_identifiers=tuple(ids)) for name, ids in merged.items()]

    # -- attachments ---------------------------------------------------------

    def attachments_for_test(self, test_identifier: str) -> list[Attachment]:
        return [a for a in self.attachments if a.test_identifier == test_identifier]

    def attachments_by_type(self) -> dict[str, list[Attachment]]:
        """Attachments grouped by UTI ("unknown" when absent), first-seen order."""
        groups: dict[str, list[Attachment]] = {}
        for attachment in self.attachments:
            groups.setdefault(attachment.uniform_type_identifier or "unknown", []).append(
                attachment
            )
        return groups

    @property
    def screenshots(self) -> list[Attachment]:
        return [
            a
            for a in self.attachments
            if a.kind is AttachmentKind.SCREENSHOT or "screenshot" in a.name.lower()
        ]

    @property
    def logs(self) -> list[Attachment]:
        return [
            a
            for a in self.attachments
            if a.kind is AttachmentKind.LOG or "log" in a.name.lower()
        ]

    @property
    def attachments_size(self) -> int:
        return sum(a.size for a in self.attachments)

    # -- coverage ------------------------------------------------------------

    @property
    def coverage_delta(self) -> CoverageDelta | None:
        if self.ui_coverage is None or self.unit_coverage is None:
            return None
        return CoverageDelta.between(self.ui_coverage, self.unit_coverage)
