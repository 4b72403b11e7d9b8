"""Report pipeline: normalization, coverage reconciliation and assembly."""

from xcparse.report.attachments import extract_attachments, walk
from xcparse.report.coverage import CoverageBuckets, reconcile
from xcparse.report.models import (
    Attachment,
    AttachmentKind,
    CoverageDelta,
    CoverageSummary,
    FileCoverage,
    Metadata,
    ParsedResult,
    Tag,
    TestCase,
    TestStatus,
    TestSuite,
    TestType,
)
from xcparse.report.normalize import normalize
from xcparse.report.parser import XcresultParser, parse
from xcparse.report.tags import extract_tags

__all__ = [
    # Parsing
    "XcresultParser",
    "parse",
    # Pipeline stages
    "extract_attachments",
    "extract_tags",
    "normalize",
    "reconcile",
    "walk",
    # Models
    "Attachment",
    "AttachmentKind",
    "CoverageBuckets",
    "CoverageDelta",
    "CoverageSummary",
    "FileCoverage",
    "Metadata",
    "ParsedResult",
    "Tag",
    "TestCase",
    "TestStatus",
    "TestSuite",
    "TestType",
]
