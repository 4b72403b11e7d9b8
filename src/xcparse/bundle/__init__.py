"""Result bundle access.

The report pipeline only talks to the ResultBundle protocol. Two
implementations ship with the package:

- XcresultToolBundle: reads a bundle on disk through xcrun xcresulttool/xccov
- InMemoryBundle: serves already-decoded records
"""

from xcparse.bundle.base import BundleOpener, ResultBundle
from xcparse.bundle.memory import InMemoryBundle
from xcparse.bundle.models import (
    ActionRecord,
    Activity,
    AttachmentRecord,
    InvocationRecord,
    RawCoverage,
    RawCoverageFile,
    RawCoverageFunction,
    RawCoverageTarget,
    Reference,
    TestableSummary,
    TestGroup,
    TestLeaf,
    TestNode,
    TestPlanRunSummaries,
    TestPlanRunSummary,
    TestRef,
)
from xcparse.bundle.xcresulttool import XcresultToolBundle, open_bundle

__all__ = [
    # Protocol
    "BundleOpener",
    "ResultBundle",
    # Implementations
    "InMemoryBundle",
    "XcresultToolBundle",
    "open_bundle",
    # Records
    "ActionRecord",
    "Activity",
    "AttachmentRecord",
    "InvocationRecord",
    "RawCoverage",
    "RawCoverageFile",
    "RawCoverageFunction",
    "RawCoverageTarget",
    "Reference",
    "TestableSummary",
    "TestGroup",
    "TestLeaf",
    "TestNode",
    "TestPlanRunSummaries",
    "TestPlanRunSummary",
    "TestRef",
]
