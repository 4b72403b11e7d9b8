"""Tests for report/normalize.py."""

import pytest

from xcparse.bundle import (
    Activity,
    InMemoryBundle,
    Reference,
    TestableSummary,
    TestGroup,
    TestLeaf,
    TestPlanRunSummaries,
    TestPlanRunSummary,
    TestRef,
)
from xcparse.report.models import TestStatus, TestType
from xcparse.report.normalize import (
    UNKNOWN_GROUP_NAME,
    UNKNOWN_TEST_NAME,
    classify_status,
    classify_test_type,
    failure_message,
    normalize,
    normalize_group,
    normalize_leaf,
)


def plans_with(*groups: TestGroup, target_name: str | None = None) -> TestPlanRunSummaries:
    return TestPlanRunSummaries(
        summaries=[
            TestPlanRunSummary(
                testable_summaries=[TestableSummary(target_name=target_name, tests=list(groups))]
            )
        ]
    )


class TestClassifyStatus:
    """Tests for classify_status."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Success", TestStatus.PASSED),
            ("SUCCESS", TestStatus.PASSED),
            ("Failure", TestStatus.FAILED),
            ("Skipped", TestStatus.SKIPPED),
            ("Expected Failure", TestStatus.SKIPPED),
            ("", TestStatus.SKIPPED),
        ],
    )
    def test_mapping(self, raw: str, expected: TestStatus) -> None:
        assert classify_status(raw) is expected


class TestClassifyTestType:
    """Tests for classify_test_type."""

    @pytest.mark.parametrize(
        ("group", "target", "expected"),
        [
            ("LoginUITests", None, TestType.UI),
            ("LoginUnitTests", None, TestType.UNIT),
            ("UnitUITests", None, TestType.UI),
            ("CheckoutIntegrationTests", None, TestType.INTEGRATION),
            ("LaunchPerformanceTests", None, TestType.PERFORMANCE),
            ("LoginTests", "MyAppUITests", TestType.UNIT),
            (None, "MyAppUITests", TestType.UI),
            (None, None, TestType.UNIT),
        ],
    )
    def test_classification(
        self, group: str | None, target: str | None, expected: TestType
    ) -> None:
        assert classify_test_type(group, target) is expected


class TestFailureMessage:
    """Tests for failure_message."""

    def test_first_matching_title(self) -> None:
        activities = [
            Activity(title="Start"),
            Activity(title="XCTAssertEqual failed"),
            Activity(title="Unexpected error"),
        ]
        assert failure_message(activities) == "XCTAssertEqual failed"

    def test_no_match(self) -> None:
        assert failure_message([Activity(title="Start")]) is None

    def test_nested_titles_ignored(self) -> None:
        activities = [Activity(title="Step", subactivities=[Activity(title="request failed")])]
        assert failure_message(activities) is None


class TestNormalizeLeaf:
    """Tests for normalize_leaf."""

    def test_tags_from_name_and_activities(self) -> None:
        """One tag record per extracted tag, all bound to the leaf."""
        leaf = TestLeaf(
            name="test_checkout_@smoke",
            test_status="Success",
            duration=1.0,
            activities=[
                Activity(title="Open #cart", subactivities=[Activity(title="Pay [slow] @smoke")])
            ],
        )

        case, tags = normalize_leaf(leaf)

        assert case.tags == ("smoke", "cart", "smoke", "slow")
        assert [t.name for t in tags] == ["smoke", "cart", "smoke", "slow"]
        assert all(t.test_identifiers == ("test_checkout_@smoke",) for t in tags)

    def test_failed_leaf_has_message(self) -> None:
        leaf = TestLeaf(
            name="testPay",
            test_status="Failure",
            activities=[Activity(title="Payment error: declined")],
        )

        case, _ = normalize_leaf(leaf)

        assert case.status is TestStatus.FAILED
        assert case.failure_message == "Payment error: declined"

    def test_passed_leaf_has_no_message(self) -> None:
        leaf = TestLeaf(
            name="testPay", test_status="Success", activities=[Activity(title="retry failed")]
        )

        case, _ = normalize_leaf(leaf)

        assert case.failure_message is None

    def test_unnamed_leaf(self) -> None:
        case, tags = normalize_leaf(TestLeaf())

        assert case.name == UNKNOWN_TEST_NAME
        assert case.identifier == UNKNOWN_TEST_NAME
        assert case.status is TestStatus.SKIPPED
        assert tags == []

    def test_negative_duration_clamped(self) -> None:
        case, _ = normalize_leaf(TestLeaf(name="t", duration=-1.0))
        assert case.duration == 0.0


class TestNormalizeGroup:
    """Tests for normalize_group."""

    def test_nested_cases_spliced_into_parent(self) -> None:
        group = TestGroup(
            name="Outer",
            duration=100.0,
            subtests=[
                TestLeaf(name="a", duration=1.0, test_status="Success"),
                TestGroup(
                    name="Inner",
                    subtests=[TestGroup(subtests=[TestLeaf(name="b", duration=2.5)])],
                ),
                TestLeaf(name="c", duration=0.5, test_status="Failure"),
            ],
        )

        suite, _ = normalize_group(group, InMemoryBundle(), None)

        assert suite is not None
        assert suite.name == "Outer"
        assert [case.name for case in suite.tests] == ["a", "b", "c"]
        assert suite.duration == 4.0

    def test_empty_group_has_no_suite(self) -> None:
        suite, tags = normalize_group(
            TestGroup(name="Empty", subtests=[TestGroup(name="AlsoEmpty")]), InMemoryBundle(), None
        )
        assert suite is None
        assert tags == []

    def test_unnamed_group(self) -> None:
        suite, _ = normalize_group(TestGroup(subtests=[TestLeaf(name="t")]), InMemoryBundle(), None)
        assert suite is not None
        assert suite.name == UNKNOWN_GROUP_NAME

    def test_refs_resolved_or_skipped(self) -> None:
        bundle = InMemoryBundle(summaries={"s1": TestLeaf(name="resolved", test_status="Success")})
        group = TestGroup(
            name="G",
            subtests=[
                TestRef(name="resolved", summary_ref=Reference("s1")),
                TestRef(name="dangling", summary_ref=Reference("nope")),
                TestRef(name="stub"),
            ],
        )

        suite, _ = normalize_group(group, bundle, None)

        assert suite is not None
        assert [case.name for case in suite.tests] == ["resolved"]
        assert suite.tests[0].status is TestStatus.PASSED


class TestNormalize:
    """Tests for normalize over whole test plan runs."""

    def test_one_suite_per_top_level_group(self) -> None:
        plans = plans_with(
            TestGroup(name="LoginTests", subtests=[TestLeaf(name="test_a_@smoke")]),
            TestGroup(name="Empty"),
            TestGroup(subtests=[TestLeaf(name="test_b")]),
            target_name="AppUITests",
        )

        suites, tags = normalize(plans, InMemoryBundle())

        assert [s.name for s in suites] == ["LoginTests", UNKNOWN_GROUP_NAME]
        assert suites[0].test_type is TestType.UNIT
        assert suites[1].test_type is TestType.UI
        assert [(t.name, t.test_identifiers) for t in tags] == [("smoke", ("test_a_@smoke",))]

    def test_empty_plans(self) -> None:
        assert normalize(TestPlanRunSummaries(), InMemoryBundle()) == ([], [])
