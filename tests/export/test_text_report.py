"""Tests for export/text_report.py."""

from dataclasses import replace

from xcparse.export.text_report import (
    NO_COVERAGE,
    format_coverage,
    format_summary,
    format_tags,
    format_test_summary,
)
from xcparse.report.models import ParsedResult, Tag


class TestFormatCoverage:
    def test_block(self, parsed_result: ParsedResult) -> None:
        text = format_coverage(parsed_result.ui_coverage, title="UI Test Coverage")

        assert text.startswith("Coverage Summary\n================\n")
        assert "UI Test Coverage:" in text
        assert "  Line Coverage: 90.00%" in text
        assert "  Functions: 1/1" in text

    def test_missing(self) -> None:
        assert NO_COVERAGE in format_coverage(None)


class TestFormatTestSummary:
    def test_counts_and_failures(self, parsed_result: ParsedResult) -> None:
        text = format_test_summary(parsed_result)

        assert "Total Tests: 4" in text
        assert "Success Rate: 75.00%" in text
        assert "Duration: 7.0s" in text
        assert "  - test_logout: Assertion failed: expected true" in text
        assert "Slowest Tests:" not in text

    def test_slowest(self, parsed_result: ParsedResult) -> None:
        text = format_test_summary(parsed_result, slowest=2)

        section = text.split("Slowest Tests:\n", 1)[1].splitlines()
        assert section[0].endswith("testLaunch")
        assert section[1].endswith("test_nested")


class TestFormatSummary:
    def test_sections(self, parsed_result: ParsedResult) -> None:
        text = format_summary(parsed_result)

        assert text.startswith("XCResult Parse Summary\n")
        assert "Path: /tmp/Run.xcresult" in text
        assert "Xcode Version: xcresulttool version 23500" in text
        assert "  Line Coverage: 83.33%" in text
        assert "Total Attachments: 2 (4 B)" in text
        assert "  public.png.image: 1" in text

    def test_unknown_version(self, parsed_result: ParsedResult) -> None:
        metadata = replace(parsed_result.metadata, tool_version=None)
        text = format_summary(replace(parsed_result, metadata=metadata))
        assert "Xcode Version: Unknown" in text


class TestFormatTags:
    def test_empty(self) -> None:
        assert "No tags found" in format_tags([])

    def test_preview_truncates(self) -> None:
        tag = Tag(name="smoke", test_identifiers=tuple(f"test{i}" for i in range(7)))

        lines = format_tags([tag], preview=5).splitlines()

        assert "smoke (7 tests)" in lines
        assert "  - test4" in lines
        assert "  - test5" not in lines
        assert "  ... and 2 more" in lines

    def test_single_test(self) -> None:
        text = format_tags([Tag(name="slow", test_identifiers=("testA",))])
        assert "slow (1 test)" in text
        assert "more" not in text
