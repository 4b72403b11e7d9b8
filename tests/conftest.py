"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides a small in-memory result bundle shared by the pipeline, export and
CLI tests.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from xcparse.bundle import (  # noqa: E402
    ActionRecord,
    Activity,
    AttachmentRecord,
    InMemoryBundle,
    InvocationRecord,
    RawCoverage,
    RawCoverageFile,
    RawCoverageFunction,
    RawCoverageTarget,
    Reference,
    TestableSummary,
    TestGroup,
    TestLeaf,
    TestPlanRunSummaries,
    TestPlanRunSummary,
    TestRef,
)

SCREENSHOT_TIME = datetime(2024, 5, 1, 12, 30, 0, 250000, tzinfo=UTC)


def _raw_coverage(executable: int, covered: int, executions: list[int]) -> RawCoverage:
    functions = [
        RawCoverageFunction(name=f"fn{i}()", line_number=i * 10, execution_count=count)
        for i, count in enumerate(executions)
    ]
    source = RawCoverageFile(
        path="/src/App/Login.swift",
        name="Login.swift",
        executable_lines=executable,
        covered_lines=covered,
        line_coverage=covered / executable,
        functions=functions,
    )
    target = RawCoverageTarget(
        name="App.app",
        executable_lines=executable,
        covered_lines=covered,
        line_coverage=covered / executable,
        files=[source],
    )
    return RawCoverage(
        executable_lines=executable,
        covered_lines=covered,
        line_coverage=covered / executable,
        targets=[target],
    )


@pytest.fixture
def sample_bundle() -> InMemoryBundle:
    """Two test actions (unit and UI) with coverage, attachments and tags.

    Unit action, target MyAppTests:
        LoginTests
            test_login_@smoke      passed  1.5s  activity "Tap #regression" + screenshot
            test_logout            failed  0.5s  "Assertion failed: expected true"
            Nested
                test_nested        passed  2.0s
        EmptyGroup                 (no tests)

    UI action, target MyAppUITests:
        LaunchUITests
            ref -> testLaunch      passed  3.0s  log attachment without payload
            ref -> (missing)
    """
    login = TestLeaf(
        name="test_login_@smoke",
        identifier="LoginTests/test_login_@smoke",
        duration=1.5,
        test_status="Success",
        activities=[
            Activity(
                title="Tap #regression",
                attachments=[
                    AttachmentRecord(
                        name="Screenshot",
                        filename="login.png",
                        uniform_type_identifier="public.png.image",
                        timestamp=SCREENSHOT_TIME,
                        payload_ref=Reference("payload-1"),
                    )
                ],
            )
        ],
    )
    logout = TestLeaf(
        name="test_logout",
        duration=0.5,
        test_status="Failure",
        activities=[
            Activity(title="Start Test"),
            Activity(title="Assertion failed: expected true"),
        ],
    )
    nested = TestLeaf(name="test_nested", duration=2.0, test_status="Success")
    unit_plans = TestPlanRunSummaries(
        summaries=[
            TestPlanRunSummary(
                name="Default",
                testable_summaries=[
                    TestableSummary(
                        name="MyAppTests",
                        target_name="MyAppTests",
                        tests=[
                            TestGroup(
                                name="LoginTests",
                                duration=99.0,
                                subtests=[
                                    login,
                                    logout,
                                    TestGroup(name="Nested", subtests=[nested]),
                                ],
                            ),
                            TestGroup(name="EmptyGroup"),
                        ],
                    )
                ],
            )
        ]
    )

    launch = TestLeaf(
        name="testLaunch",
        duration=3.0,
        test_status="Success",
        activities=[
            Activity(
                title="Launch",
                subactivities=[
                    Activity(
                        title="Collect logs",
                        attachments=[
                            AttachmentRecord(
                                name="Console",
                                uniform_type_identifier="public.plain-text",
                                payload_ref=Reference("payload-missing"),
                            )
                        ],
                    )
                ],
            )
        ],
    )
    ui_plans = TestPlanRunSummaries(
        summaries=[
            TestPlanRunSummary(
                name="Default",
                testable_summaries=[
                    TestableSummary(
                        name="MyAppUITests",
                        target_name="MyAppUITests",
                        tests=[
                            TestGroup(
                                name="LaunchUITests",
                                subtests=[
                                    TestRef(name="testLaunch", summary_ref=Reference("summary-1")),
                                    TestRef(name="testGone", summary_ref=Reference("missing")),
                                ],
                            )
                        ],
                    )
                ],
            )
        ]
    )

    record = InvocationRecord(
        actions=[
            ActionRecord(
                name="Unit",
                scheme_command="Test",
                tests_ref=Reference("plans-unit"),
                coverage_ref=Reference("cov-unit"),
            ),
            ActionRecord(
                name="UI",
                scheme_command="Test",
                tests_ref=Reference("plans-ui"),
                coverage_ref=Reference("cov-ui"),
            ),
        ]
    )
    return InMemoryBundle(
        record=record,
        plans={"plans-unit": unit_plans, "plans-ui": ui_plans},
        summaries={"summary-1": launch},
        coverage={
            "cov-unit": _raw_coverage(100, 80, [3, 0]),
            "cov-ui": _raw_coverage(50, 45, [1]),
        },
        payloads={"payload-1": b"\x89PNG"},
        version="xcresulttool version 23500",
    )


@pytest.fixture
def bundle_opener(sample_bundle: InMemoryBundle):  # noqa: ANN201
    """Opener that ignores the path and serves sample_bundle."""
    return lambda _path: sample_bundle


@pytest.fixture
def parsed_result(bundle_opener):  # noqa: ANN001, ANN201
    """sample_bundle run through the full parse pipeline."""
    from xcparse.report import XcresultParser

    return XcresultParser(opener=bundle_opener).parse("/tmp/Run.xcresult")
