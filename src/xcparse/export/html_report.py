"""Standalone HTML pages for coverage and test results.

Both pages inline their stylesheet so the file can be opened on its own.
"""

from __future__ import annotations

from collections.abc import Iterable

from jinja2 import Environment

from xcparse.report.models import FileCoverage, ParsedResult, TestStatus

HIGH_COVERAGE = 80.0
MEDIUM_COVERAGE = 60.0

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

COVERAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Coverage Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .summary { background: #f5f5f5; padding: 20px; border-radius: 5px; margin-bottom: 20px; }
        .coverage-table { width: 100%; border-collapse: collapse; }
        .coverage-table th, .coverage-table td { border: 1px solid #ddd; padding: 8px; text-align: left; }
        .coverage-table th { background-color: #f2f2f2; }
        .high-coverage { background-color: #d4edda; }
        .medium-coverage { background-color: #fff3cd; }
        .low-coverage { background-color: #f8d7da; }
    </style>
</head>
<body>
    <h1>Coverage Report</h1>
    <div class="summary">
        <h2>Overall Coverage</h2>
        <p>Line Coverage: {{ "%.2f"|format(line_percent) }}%</p>
        <p>Function Coverage: {{ "%.2f"|format(function_percent) }}%</p>
        <p>Executable Lines: {{ executable_lines }}</p>
        <p>Covered Lines: {{ covered_lines }}</p>
    </div>

    <h2>File Coverage</h2>
    <table class="coverage-table">
        <tr>
            <th>File</th>
            <th>Line Coverage</th>
            <th>Function Coverage</th>
            <th>Executable Lines</th>
            <th>Covered Lines</th>
        </tr>
        {% for row in files %}
        <tr class="{{ row.css_class }}">
            <td>{{ row.name }}</td>
            <td>{{ "%.2f"|format(row.line_percent) }}%</td>
            <td>{{ "%.2f"|format(row.function_percent) }}%</td>
            <td>{{ row.executable_lines }}</td>
            <td>{{ row.covered_lines }}</td>
        </tr>
        {% endfor %}
    </table>
</body>
</html>
"""

TEST_RESULTS_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Test Results</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .summary { background: #f5f5f5; padding: 20px; border-radius: 5px; margin-bottom: 20px; }
        .test-table { width: 100%; border-collapse: collapse; }
        .test-table th, .test-table td { border: 1px solid #ddd; padding: 8px; text-align: left; }
        .test-table th { background-color: #f2f2f2; }
        .passed { background-color: #d4edda; }
        .failed { background-color: #f8d7da; }
        .skipped { background-color: #e2e3e5; }
    </style>
</head>
<body>
    <h1>Test Results</h1>
    <div class="summary">
        <h2>Summary</h2>
        <p>Total Tests: {{ total }}</p>
        <p>Passed: {{ passed }}</p>
        <p>Failed: {{ failed }}</p>
        <p>Success Rate: {{ "%.2f"|format(success_rate) }}%</p>
    </div>

    <h2>Test Details</h2>
    <table class="test-table">
        <tr>
            <th>Test Suite</th>
            <th>Test Name</th>
            <th>Status</th>
            <th>Duration</th>
            <th>Tags</th>
        </tr>
        {% for row in tests %}
        <tr class="{{ row.css_class }}">
            <td>{{ row.suite }}</td>
            <td>{{ row.name }}</td>
            <td>{{ row.status }}</td>
            <td>{{ "%.2f"|format(row.duration) }}s</td>
            <td>{{ row.tags|join(", ") }}</td>
        </tr>
        {% endfor %}
    </table>
</body>
</html>
"""

_coverage_template = _env.from_string(COVERAGE_TEMPLATE)
_test_results_template = _env.from_string(TEST_RESULTS_TEMPLATE)


def coverage_class(line_percent: float) -> str:
    """Row class for a file's line coverage percentage."""
    if line_percent >= HIGH_COVERAGE:
        return "high-coverage"
    if line_percent >= MEDIUM_COVERAGE:
        return "medium-coverage"
    return "low-coverage"


def status_class(status: TestStatus) -> str:
    match status:
        case TestStatus.PASSED:
            return "passed"
        case TestStatus.FAILED:
            return "failed"
        case _:
            return "skipped"


def render_coverage(result: ParsedResult, files: Iterable[FileCoverage] = ()) -> str:
    """Coverage page: overall summary plus one row per file."""
    overall = result.overall_coverage
    rows = []
    for file in files:
        line_percent = file.line_coverage * 100
        rows.append(
            {
                "name": file.name,
                "line_percent": line_percent,
                "function_percent": file.function_coverage * 100,
                "executable_lines": file.executable_lines,
                "covered_lines": file.covered_lines,
                "css_class": coverage_class(line_percent),
            }
        )
    return _coverage_template.render(
        line_percent=overall.line_coverage * 100 if overall else 0.0,
        function_percent=overall.function_coverage * 100 if overall else 0.0,
        executable_lines=overall.executable_lines if overall else 0,
        covered_lines=overall.covered_lines if overall else 0,
        files=rows,
    )


def render_test_results(result: ParsedResult) -> str:
    """Test page: pass/fail summary plus one row per case."""
    rows = [
        {
            "suite": suite.name,
            "name": case.name,
            "status": case.status.value,
            "duration": case.duration,
            "tags": case.tags,
            "css_class": status_class(case.status),
        }
        for suite in result.test_suites
        for case in suite.tests
    ]
    return _test_results_template.render(
        total=result.total_tests,
        passed=len(result.passed_tests),
        failed=len(result.failed_tests),
        success_rate=result.success_rate,
        tests=rows,
    )


def encode_coverage(result: ParsedResult, files: Iterable[FileCoverage] = ()) -> bytes:
    return render_coverage(result, files).encode("utf-8")


def encode_test_results(result: ParsedResult) -> bytes:
    return render_test_results(result).encode("utf-8")
