"""Tests for export/html_report.py."""

from dataclasses import replace

import pytest

from xcparse.export.html_report import (
    coverage_class,
    render_coverage,
    render_test_results,
    status_class,
)
from xcparse.report.models import FileCoverage, ParsedResult, TestCase, TestStatus, TestSuite


class TestClasses:
    @pytest.mark.parametrize(
        ("percent", "expected"),
        [
            (100.0, "high-coverage"),
            (80.0, "high-coverage"),
            (79.99, "medium-coverage"),
            (60.0, "medium-coverage"),
            (59.9, "low-coverage"),
            (0.0, "low-coverage"),
        ],
    )
    def test_coverage_thresholds(self, percent: float, expected: str) -> None:
        assert coverage_class(percent) == expected

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (TestStatus.PASSED, "passed"),
            (TestStatus.FAILED, "failed"),
            (TestStatus.SKIPPED, "skipped"),
            (TestStatus.UNKNOWN, "skipped"),
        ],
    )
    def test_status_classes(self, status: TestStatus, expected: str) -> None:
        assert status_class(status) == expected


class TestRenderTestResults:
    """Tests for the test results page."""

    def test_summary_and_rows(self, parsed_result: ParsedResult) -> None:
        page = render_test_results(parsed_result)

        assert page.startswith("<!DOCTYPE html>")
        assert "<style>" in page
        assert "<p>Total Tests: 4</p>" in page
        assert "<p>Failed: 1</p>" in page
        assert "<p>Success Rate: 75.00%</p>" in page
        assert page.count('<tr class="passed">') == 3
        assert page.count('<tr class="failed">') == 1
        assert "<td>1.50s</td>" in page
        assert "<td>smoke, regression</td>" in page

    def test_names_escaped(self, parsed_result: ParsedResult) -> None:
        case = TestCase(
            name="<script>alert(1)</script>",
            identifier="x",
            duration=0.0,
            status=TestStatus.PASSED,
        )
        suite = TestSuite.from_cases("A & B", parsed_result.test_suites[0].test_type, [case])
        page = render_test_results(replace(parsed_result, test_suites=(suite,)))

        assert "<script>alert" not in page
        assert "&lt;script&gt;" in page
        assert "A &amp; B" in page


class TestRenderCoverage:
    """Tests for the coverage page."""

    def test_summary(self, parsed_result: ParsedResult) -> None:
        page = render_coverage(parsed_result)

        assert "<title>Coverage Report</title>" in page
        assert "<p>Line Coverage: 83.33%</p>" in page
        assert "<p>Function Coverage: 66.67%</p>" in page
        assert "<p>Executable Lines: 150</p>" in page
        assert "<tr class=" not in page

    def test_file_rows(self, parsed_result: ParsedResult) -> None:
        files = [
            FileCoverage("Good.swift", 0.9, 1.0, 10, 9),
            FileCoverage("Okay.swift", 0.6, 0.5, 10, 6),
            FileCoverage("Poor.swift", 0.1, 0.0, 10, 1),
        ]

        page = render_coverage(parsed_result, files)

        assert '<tr class="high-coverage">' in page
        assert '<tr class="medium-coverage">' in page
        assert '<tr class="low-coverage">' in page
        assert "<td>90.00%</td>" in page

    def test_without_coverage(self, parsed_result: ParsedResult) -> None:
        page = render_coverage(replace(parsed_result, overall_coverage=None))
        assert "<p>Line Coverage: 0.00%</p>" in page
