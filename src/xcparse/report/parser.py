"""Report assembly.

XcresultParser drives the pipeline for one bundle:

    invocation record
      └─ action ─┬─ test plan summaries ─┬─ normalize    -> suites, tags
                 │                       └─ attachments  -> attachments
                 └─ coverage ────────────── reconcile    -> overall/unit/ui

The bundle is read through the ResultBundle protocol, so the same
assembly runs over xcresulttool output and over in-memory records.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from pathlib import Path

import structlog

from xcparse.bundle.base import BundleOpener, ResultBundle
from xcparse.bundle.xcresulttool import open_bundle
from xcparse.config.models import XcparseConfig
from xcparse.core.errors import BundleError
from xcparse.core.logging import clear_parse_id, set_parse_id
from xcparse.report.attachments import extract_attachments
from xcparse.report.coverage import ActionCoverage, reconcile
from xcparse.report.models import Attachment, Metadata, ParsedResult, Tag, TestSuite
from xcparse.report.normalize import normalize

log = structlog.get_logger(__name__)


class XcresultParser:
    """Builds a ParsedResult from a result bundle.

    Args:
        opener: Opens the bundle at a path. Defaults to the xcresulttool
            reader configured from ``config.reader``.
        config: Project configuration.
    """

    def __init__(
        self,
        opener: BundleOpener | None = None,
        config: XcparseConfig | None = None,
    ) -> None:
        self.config = config or XcparseConfig()
        self._opener = opener or self._open

    def _open(self, path: Path) -> ResultBundle:
        return open_bundle(path, self.config.reader)

    def parse(self, bundle_path: Path | str) -> ParsedResult:
        """Parse the bundle at bundle_path.

        Raises:
            BundleError: If the bundle does not exist or its root record
                cannot be read.
        """
        path = Path(bundle_path)
        set_parse_id()
        log.info("parse_started", path=str(path))
        try:
            bundle = self._opener(path)
            return self.parse_bundle(bundle, str(path))
        finally:
            clear_parse_id()

    def parse_bundle(self, bundle: ResultBundle, source_path: str) -> ParsedResult:
        """Run the pipeline over an already opened bundle."""
        start = time.perf_counter()

        record = bundle.invocation_record()
        if record is None:
            raise BundleError.invalid_bundle(source_path, "invocation record is unreadable")

        suites: list[TestSuite] = []
        tags: list[Tag] = []
        attachments: list[Attachment] = []
        coverage_inputs: list[ActionCoverage] = []

        for action in record.actions:
            plans = None
            if action.tests_ref is not None:
                plans = bundle.test_plan_summaries(action.tests_ref)
                if plans is None:
                    log.debug("test_plans_unresolved", action=action.name, ref=action.tests_ref.id)

            if plans is not None:
                action_suites, action_tags = normalize(plans, bundle)
                suites.extend(action_suites)
                tags.extend(action_tags)
                attachments.extend(extract_attachments(plans, bundle))

            coverage_inputs.append(
                ActionCoverage(
                    raw=bundle.code_coverage(action),
                    target_names=plans.target_names if plans is not None else [],
                    has_tests=action.tests_ref is not None,
                )
            )

        buckets = reconcile(coverage_inputs)
        result = ParsedResult(
            metadata=Metadata(
                source_path=source_path,
                parse_timestamp=datetime.now(UTC),
                tool_version=bundle.tool_version(),
            ),
            test_suites=tuple(suites),
            attachments=tuple(attachments),
            tags=tuple(tags),
            overall_coverage=buckets.overall,
            unit_coverage=buckets.unit,
            ui_coverage=buckets.ui,
        )

        log.info(
            "parse_completed",
            actions=len(record.actions),
            suites=len(result.test_suites),
            tests=result.total_tests,
            attachments=len(result.attachments),
            tags=len(result.tags),
            has_coverage=result.overall_coverage is not None,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return result


def parse(bundle_path: Path | str, config: XcparseConfig | None = None) -> ParsedResult:
    """Parse a bundle on disk with the default reader."""
    return XcresultParser(config=config).parse(bundle_path)
