"""Writing attachment payloads to disk."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from xcparse.export.json_report import format_date
from xcparse.report.models import Attachment

log = structlog.get_logger(__name__)

METADATA_SUFFIX = ".metadata.json"


def exported_filename(attachment: Attachment, index: int) -> str:
    """Name an attachment is written under: its own filename or attachment_<index>.

    Directory components of the recorded filename are dropped.
    """
    if attachment.filename and Path(attachment.filename).name:
        return Path(attachment.filename).name
    return f"attachment_{index}"


def attachment_metadata(attachment: Attachment, exported: str) -> dict[str, Any]:
    """Sidecar metadata describing one exported attachment."""
    return {
        "name": attachment.name,
        "test_identifier": attachment.test_identifier,
        "activity_title": attachment.activity_title,
        "uniform_type_identifier": attachment.uniform_type_identifier,
        "timestamp": format_date(attachment.timestamp) if attachment.timestamp else None,
        "original_filename": attachment.filename,
        "exported_filename": exported,
        "size": attachment.size,
    }


def export_attachments(
    attachments: Sequence[Attachment],
    directory: Path,
    include_metadata: bool = True,
) -> list[Path]:
    """Write each attachment's payload into directory.

    With include_metadata, a ``<name>.metadata.json`` sidecar is written next
    to each payload. Attachments sharing a filename overwrite each other.

    Returns:
        Paths of the payload files written, in input order.
    """
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for index, attachment in enumerate(attachments):
        name = exported_filename(attachment, index)
        path = directory / name
        path.write_bytes(attachment.data)
        written.append(path)

        if include_metadata:
            sidecar = directory / f"{name}{METADATA_SUFFIX}"
            sidecar.write_text(
                json.dumps(attachment_metadata(attachment, name), sort_keys=True, indent=2),
                encoding="utf-8",
            )

    log.debug("attachments_exported", count=len(written), directory=str(directory))
    return written
