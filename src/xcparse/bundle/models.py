"""Record model for the contents of an .xcresult bundle.

These mirror the object graph xcresulttool exposes: an invocation record
with actions, test plan run summaries holding testable summaries, test
groups, test leaves and their activity trees, plus the xccov coverage
report. Records are plain data; resolving references (test summaries,
payloads) goes through a ResultBundle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Reference:
    """Opaque id of an object stored elsewhere in the bundle."""

    id: str


# =============================================================================
# Invocation
# =============================================================================


@dataclass(slots=True)
class ActionRecord:
    """One recorded action (build, test, archive) of an invocation."""

    name: str | None = None
    scheme_command: str | None = None
    tests_ref: Reference | None = None
    coverage_ref: Reference | None = None  # set iff the action produced coverage
    log_ref: Reference | None = None


@dataclass(slots=True)
class InvocationRecord:
    """Root record of a bundle."""

    actions: list[ActionRecord] = field(default_factory=list)


# =============================================================================
# Activities and attachments
# =============================================================================


@dataclass(slots=True)
class AttachmentRecord:
    name: str | None = None
    filename: str | None = None
    uniform_type_identifier: str | None = None
    timestamp: datetime | None = None
    payload_ref: Reference | None = None


@dataclass(slots=True)
class Activity:
    """A recorded step of a test; forms a tree through subactivities."""

    title: str = ""
    activity_type: str | None = None
    start: datetime | None = None
    attachments: list[AttachmentRecord] = field(default_factory=list)
    subactivities: list[Activity] = field(default_factory=list)


# =============================================================================
# Test tree
# =============================================================================


@dataclass(slots=True)
class TestLeaf:
    """A single executed test method with its full activity tree."""

    __test__ = False

    name: str | None = None
    identifier: str | None = None
    duration: float = 0.0
    test_status: str = ""
    activities: list[Activity] = field(default_factory=list)


@dataclass(slots=True)
class TestRef:
    """Test metadata stub pointing at the full TestLeaf by reference."""

    __test__ = False

    name: str | None = None
    identifier: str | None = None
    duration: float = 0.0
    test_status: str = ""
    summary_ref: Reference | None = None


@dataclass(slots=True)
class TestGroup:
    """A group of tests (bundle, class, or any intermediate grouping)."""

    __test__ = False

    name: str | None = None
    identifier: str | None = None
    duration: float = 0.0
    subtests: list[TestNode] = field(default_factory=list)


TestNode = TestLeaf | TestGroup | TestRef


@dataclass(slots=True)
class TestableSummary:
    """Results for one test target."""

    __test__ = False

    name: str | None = None
    target_name: str | None = None
    tests: list[TestGroup] = field(default_factory=list)


@dataclass(slots=True)
class TestPlanRunSummary:
    __test__ = False

    name: str | None = None
    testable_summaries: list[TestableSummary] = field(default_factory=list)


@dataclass(slots=True)
class TestPlanRunSummaries:
    __test__ = False

    summaries: list[TestPlanRunSummary] = field(default_factory=list)

    @property
    def target_names(self) -> list[str]:
        """Target names of every testable summary, in document order."""
        return [
            testable.target_name
            for summary in self.summaries
            for testable in summary.testable_summaries
            if testable.target_name
        ]


# =============================================================================
# Coverage (xccov report)
# =============================================================================


@dataclass(slots=True)
class RawCoverageFunction:
    name: str = ""
    line_number: int = 0
    execution_count: int = 0
    executable_lines: int = 0
    covered_lines: int = 0
    line_coverage: float = 0.0


@dataclass(slots=True)
class RawCoverageFile:
    path: str = ""
    name: str = ""
    executable_lines: int = 0
    covered_lines: int = 0
    line_coverage: float = 0.0
    functions: list[RawCoverageFunction] = field(default_factory=list)


@dataclass(slots=True)
class RawCoverageTarget:
    name: str = ""
    executable_lines: int = 0
    covered_lines: int = 0
    line_coverage: float = 0.0
    files: list[RawCoverageFile] = field(default_factory=list)


@dataclass(slots=True)
class RawCoverage:
    """Coverage numbers as computed by xccov for a whole bundle."""

    executable_lines: int = 0
    covered_lines: int = 0
    line_coverage: float = 0.0
    targets: list[RawCoverageTarget] = field(default_factory=list)
