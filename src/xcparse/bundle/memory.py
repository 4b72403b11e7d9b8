"""Dict-backed result bundle.

Holds already-decoded records. Useful for callers that build the record
tree themselves and for exercising the pipeline without Xcode tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xcparse.bundle.models import (
    ActionRecord,
    InvocationRecord,
    RawCoverage,
    Reference,
    TestLeaf,
    TestPlanRunSummaries,
)


@dataclass(slots=True)
class InMemoryBundle:
    """ResultBundle over in-memory records, keyed by reference id.

    Coverage is keyed by the action's coverage reference id.
    """

    record: InvocationRecord | None = None
    plans: dict[str, TestPlanRunSummaries] = field(default_factory=dict)
    summaries: dict[str, TestLeaf] = field(default_factory=dict)
    coverage: dict[str, RawCoverage] = field(default_factory=dict)
    payloads: dict[str, bytes] = field(default_factory=dict)
    version: str | None = None

    def invocation_record(self) -> InvocationRecord | None:
        return self.record

    def test_plan_summaries(self, ref: Reference) -> TestPlanRunSummaries | None:
        return self.plans.get(ref.id)

    def action_test_summary(self, ref: Reference) -> TestLeaf | None:
        return self.summaries.get(ref.id)

    def code_coverage(self, action: ActionRecord) -> RawCoverage | None:
        if action.coverage_ref is None:
            return None
        return self.coverage.get(action.coverage_ref.id)

    def payload(self, ref: Reference) -> bytes | None:
        return self.payloads.get(ref.id)

    def tool_version(self) -> str | None:
        return self.version
