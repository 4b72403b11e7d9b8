"""Attachment extraction from test activity trees."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC

from xcparse.bundle.base import ResultBundle
from xcparse.bundle.models import Activity, AttachmentRecord, TestPlanRunSummaries
from xcparse.report.models import Attachment
from xcparse.report.normalize import iter_leaves, leaf_identifier

UNKNOWN_ATTACHMENT_NAME = "Unknown"


def _resolve_attachment(
    record: AttachmentRecord,
    bundle: ResultBundle,
    test_identifier: str,
    activity_title: str | None,
) -> Attachment:
    timestamp = record.timestamp
    if timestamp is not None and timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    data = b""
    if record.payload_ref is not None:
        data = bundle.payload(record.payload_ref) or b""
    return Attachment(
        name=record.name or UNKNOWN_ATTACHMENT_NAME,
        filename=record.filename,
        uniform_type_identifier=record.uniform_type_identifier,
        timestamp=timestamp,
        data=data,
        test_identifier=test_identifier,
        activity_title=activity_title,
    )


def walk(
    test_identifier: str, activities: Sequence[Activity], bundle: ResultBundle
) -> list[Attachment]:
    """Attachments of an activity tree, pre-order.

    An activity's own attachments come before those of its subactivities.
    Every attachment keeps the owning test's identifier and the title of
    the activity it was recorded on. Naive timestamps are taken as UTC.
    """
    attachments: list[Attachment] = []
    for activity in activities:
        for record in activity.attachments:
            attachments.append(
                _resolve_attachment(record, bundle, test_identifier, activity.title)
            )
        attachments.extend(walk(test_identifier, activity.subactivities, bundle))
    return attachments


def extract_attachments(plans: TestPlanRunSummaries, bundle: ResultBundle) -> list[Attachment]:
    """Attachments of every test in a test plan run, in tree order."""
    attachments: list[Attachment] = []
    for summary in plans.summaries:
        for testable in summary.testable_summaries:
            for group in testable.tests:
                for leaf in iter_leaves(group, bundle):
                    attachments.extend(walk(leaf_identifier(leaf), leaf.activities, bundle))
    return attachments
