"""Result bundle protocol."""

from pathlib import Path
from typing import Protocol

from xcparse.bundle.models import (
    ActionRecord,
    InvocationRecord,
    RawCoverage,
    Reference,
    TestLeaf,
    TestPlanRunSummaries,
)


class ResultBundle(Protocol):
    """Read access to the records of one result bundle.

    Every lookup returns None when the record is missing or unreadable;
    implementations do not raise for absent data.
    """

    def invocation_record(self) -> InvocationRecord | None:
        """Root record, or None if the bundle cannot be read."""
        ...

    def test_plan_summaries(self, ref: Reference) -> TestPlanRunSummaries | None:
        """Resolve an action's tests reference."""
        ...

    def action_test_summary(self, ref: Reference) -> TestLeaf | None:
        """Resolve a test metadata stub to the full test record."""
        ...

    def code_coverage(self, action: ActionRecord) -> RawCoverage | None:
        """Coverage produced by an action, if any."""
        ...

    def payload(self, ref: Reference) -> bytes | None:
        """Raw bytes of an attachment payload."""
        ...

    def tool_version(self) -> str | None:
        """Version of the tool used to read the bundle, if known."""
        ...


class BundleOpener(Protocol):
    """Callable that opens the bundle at a path.

    Raises:
        BundleError: If nothing usable exists at the path.
    """

    def __call__(self, path: Path) -> ResultBundle: ...
