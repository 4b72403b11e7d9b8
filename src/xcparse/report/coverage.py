"""Coverage reconciliation across the actions of an invocation.

Each action may expose the raw xccov report. Actions are sorted into
buckets (unit, UI, unclassified) by the names of the test targets they ran,
and summaries in the same bucket are combined with sum semantics:

- executable/covered lines and functions are summed
- ratios are recomputed from the summed counts, never averaged

So 80/100 lines combined with 45/50 lines is 125/150 (0.8333), not the
0.875 mean of the two ratios.

xccov reports coverage for the whole bundle, so two test actions in one
bundle receive identical numbers and their combination counts each line
twice. Downstream consumers accept this approximation.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from xcparse.bundle.models import RawCoverage
from xcparse.report.models import CoverageSummary, TestType, ratio

log = structlog.get_logger(__name__)

_UI_MARKERS = ("ui", "uitest")
_UNIT_MARKERS = ("unit", "unittest")


@dataclass(slots=True)
class ActionCoverage:
    """Coverage input for one action."""

    raw: RawCoverage | None
    target_names: list[str] = field(default_factory=list)
    has_tests: bool = False


@dataclass(frozen=True, slots=True)
class CoverageBuckets:
    overall: CoverageSummary | None = None
    unit: CoverageSummary | None = None
    ui: CoverageSummary | None = None


def summarize(raw: RawCoverage) -> CoverageSummary:
    """Summarize a raw report.

    Line coverage is the tool's own ratio. A function counts as covered when
    its execution count is positive. Branch coverage is not available.
    """
    functions = [
        fn for target in raw.targets for source in target.files for fn in source.functions
    ]
    covered_functions = sum(1 for fn in functions if fn.execution_count > 0)
    return CoverageSummary(
        line_coverage=raw.line_coverage,
        function_coverage=ratio(covered_functions, len(functions)),
        executable_lines=raw.executable_lines,
        covered_lines=raw.covered_lines,
        executable_functions=len(functions),
        covered_functions=covered_functions,
        branch_coverage=None,
    )


def combine(summaries: Iterable[CoverageSummary | None]) -> CoverageSummary | None:
    """Combine summaries by summing counts and recomputing ratios.

    A single summary is returned unchanged so the tool's own line ratio
    survives; None entries are ignored; no summaries gives None.
    """
    present = [s for s in summaries if s is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return CoverageSummary.from_counts(
        executable_lines=sum(s.executable_lines for s in present),
        covered_lines=sum(s.covered_lines for s in present),
        executable_functions=sum(s.executable_functions for s in present),
        covered_functions=sum(s.covered_functions for s in present),
    )


def classify_action(target_names: Sequence[str], has_tests: bool) -> TestType:
    """Bucket for an action's coverage, from the names of its test targets."""
    names = [name.lower() for name in target_names]
    if any(marker in name for name in names for marker in _UI_MARKERS):
        return TestType.UI
    if any(marker in name for name in names for marker in _UNIT_MARKERS):
        return TestType.UNIT
    return TestType.UNIT if has_tests else TestType.UNKNOWN


def reconcile(actions: Iterable[ActionCoverage]) -> CoverageBuckets:
    """Produce overall, unit and UI coverage for an invocation.

    Overall is the unclassified bucket when any unclassified action produced
    coverage, otherwise the combination of the unit and UI buckets. With no
    coverage anywhere, every bucket is None.
    """
    buckets: dict[TestType, list[CoverageSummary]] = {}
    for action in actions:
        if action.raw is None:
            continue
        bucket = classify_action(action.target_names, action.has_tests)
        buckets.setdefault(bucket, []).append(summarize(action.raw))
        log.debug("coverage_bucketed", bucket=bucket.value, targets=action.target_names)

    unit = combine(buckets.get(TestType.UNIT, []))
    ui = combine(buckets.get(TestType.UI, []))
    unclassified = combine(buckets.get(TestType.UNKNOWN, []))
    overall = unclassified if unclassified is not None else combine([unit, ui])
    return CoverageBuckets(overall=overall, unit=unit, ui=ui)
