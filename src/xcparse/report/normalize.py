"""Test tree normalization.

Walks testable summaries -> test groups -> leaves and flattens them into
TestSuite/TestCase values plus tag records:

- Each top-level group of a testable becomes one suite, named after the
  group; nested groups contribute their cases to that suite.
- TestRef stubs are resolved through the bundle; unresolvable stubs are
  skipped.
- Suite durations are recomputed from their cases, ignoring the group
  durations recorded in the bundle.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import assert_never

import structlog

from xcparse.bundle.base import ResultBundle
from xcparse.bundle.models import (
    Activity,
    TestableSummary,
    TestGroup,
    TestLeaf,
    TestNode,
    TestPlanRunSummaries,
    TestRef,
)
from xcparse.report.models import Tag, TestCase, TestStatus, TestSuite, TestType
from xcparse.report.tags import extract_tags

log = structlog.get_logger(__name__)

UNKNOWN_TEST_NAME = "UnknownTest"
UNKNOWN_GROUP_NAME = "Unknown Test Group"

_FAILURE_MARKERS = ("failed", "error")

# Checked in order; "ui" wins over "unit" for names such as "UnitUITests".
_TYPE_MARKERS: tuple[tuple[tuple[str, ...], TestType], ...] = (
    (("ui", "uitest"), TestType.UI),
    (("unit", "unittest"), TestType.UNIT),
    (("integration",), TestType.INTEGRATION),
    (("performance",), TestType.PERFORMANCE),
)


def leaf_identifier(leaf: TestLeaf) -> str:
    """Identifier a leaf's case, tags and attachments are keyed by."""
    return leaf.name or UNKNOWN_TEST_NAME


def classify_status(raw_status: str) -> TestStatus:
    match raw_status.lower():
        case "success":
            return TestStatus.PASSED
        case "failure":
            return TestStatus.FAILED
        case _:
            return TestStatus.SKIPPED


def classify_test_type(group_name: str | None, target_name: str | None) -> TestType:
    """Infer a suite's test type from its group name, else its target name."""
    name = (group_name or target_name or "").lower()
    for markers, test_type in _TYPE_MARKERS:
        if any(marker in name for marker in markers):
            return test_type
    return TestType.UNIT


def failure_message(activities: Sequence[Activity]) -> str | None:
    """Title of the first top-level activity mentioning a failure or error."""
    for activity in activities:
        if any(marker in activity.title for marker in _FAILURE_MARKERS):
            return activity.title
    return None


def _activity_tags(activities: Sequence[Activity]) -> list[str]:
    tags: list[str] = []
    for activity in activities:
        tags.extend(extract_tags(activity.title))
        tags.extend(_activity_tags(activity.subactivities))
    return tags


def normalize_leaf(leaf: TestLeaf) -> tuple[TestCase, list[Tag]]:
    """Convert one leaf into a case and its tag records.

    Tags come from the test name first, then from every activity title in
    pre-order. Each extracted tag is its own record.
    """
    identifier = leaf_identifier(leaf)
    names = extract_tags(identifier) + _activity_tags(leaf.activities)
    tags = [Tag(name=name, test_identifiers=(identifier,)) for name in names]

    status = classify_status(leaf.test_status)
    case = TestCase(
        name=identifier,
        identifier=identifier,
        duration=max(leaf.duration, 0.0),
        status=status,
        tags=tuple(names),
        failure_message=failure_message(leaf.activities) if status is TestStatus.FAILED else None,
    )
    return case, tags


def iter_leaves(group: TestGroup, bundle: ResultBundle) -> Iterator[TestLeaf]:
    """Every leaf under a group in document order, resolving TestRef stubs."""
    for node in group.subtests:
        resolved = _resolve(node, bundle)
        if isinstance(resolved, TestGroup):
            yield from iter_leaves(resolved, bundle)
        elif resolved is not None:
            yield resolved


def _resolve(node: TestNode, bundle: ResultBundle) -> TestLeaf | TestGroup | None:
    match node:
        case TestLeaf() | TestGroup():
            return node
        case TestRef(summary_ref=None):
            log.debug("test_ref_without_summary", name=node.name)
            return None
        case TestRef(summary_ref=ref):
            resolved = bundle.action_test_summary(ref)
            if resolved is None:
                log.debug("test_ref_unresolved", name=node.name, ref=ref.id)
            return resolved
        case _:
            assert_never(node)


def normalize_group(
    group: TestGroup, bundle: ResultBundle, target_name: str | None
) -> tuple[TestSuite | None, list[Tag]]:
    """Flatten a top-level group into a suite.

    Returns no suite when the group holds no tests at any depth.
    """
    cases: list[TestCase] = []
    tags: list[Tag] = []
    for leaf in iter_leaves(group, bundle):
        case, leaf_tags = normalize_leaf(leaf)
        cases.append(case)
        tags.extend(leaf_tags)

    if not cases:
        return None, tags

    suite = TestSuite.from_cases(
        name=group.name or UNKNOWN_GROUP_NAME,
        test_type=classify_test_type(group.name, target_name),
        tests=cases,
    )
    return suite, tags


def normalize_testable(
    testable: TestableSummary, bundle: ResultBundle
) -> tuple[list[TestSuite], list[Tag]]:
    suites: list[TestSuite] = []
    tags: list[Tag] = []
    for group in testable.tests:
        suite, group_tags = normalize_group(group, bundle, testable.target_name)
        if suite is not None:
            suites.append(suite)
        tags.extend(group_tags)
    return suites, tags


def normalize(
    plans: TestPlanRunSummaries, bundle: ResultBundle
) -> tuple[list[TestSuite], list[Tag]]:
    """Suites and tag records for every testable of every test plan run."""
    suites: list[TestSuite] = []
    tags: list[Tag] = []
    for summary in plans.summaries:
        for testable in summary.testable_summaries:
            testable_suites, testable_tags = normalize_testable(testable, bundle)
            suites.extend(testable_suites)
            tags.extend(testable_tags)
    return suites, tags
