"""ResultBundle backed by Xcode's command line tools.

Records are read with ``xcrun xcresulttool`` (object graph and payloads)
and ``xcrun xccov`` (coverage report). Xcode 16 moved the object API
behind ``--legacy``; ReaderConfig.legacy controls whether the flag is
never passed, always passed, or tried as a fallback.

Any tool failure (missing xcrun, non-zero exit, timeout, invalid JSON)
degrades to None for that lookup.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import structlog

from xcparse.bundle.decode import (
    decode_coverage_report,
    decode_invocation_record,
    decode_test_plan_summaries,
    decode_test_summary,
)
from xcparse.bundle.models import (
    ActionRecord,
    InvocationRecord,
    RawCoverage,
    Reference,
    TestLeaf,
    TestPlanRunSummaries,
)
from xcparse.config.models import ReaderConfig
from xcparse.core.errors import BundleError

log = structlog.get_logger(__name__)

_ROOT = "__root__"


class XcresultToolBundle:
    """Reads one .xcresult bundle through xcresulttool and xccov.

    Objects are fetched once per id and cached for the lifetime of the
    instance; the normalizer and attachment walker resolve the same
    references.
    """

    def __init__(self, path: Path, config: ReaderConfig | None = None) -> None:
        self.path = path
        self.config = config or ReaderConfig()
        self._objects: dict[str, Any] = {}
        self._coverage: RawCoverage | None = None
        self._coverage_loaded = False
        # Variant that last succeeded in auto mode
        self._legacy: list[str] | None = None

    # -------------------------------------------------------------------------
    # Tool invocation
    # -------------------------------------------------------------------------

    def _legacy_variants(self) -> list[list[str]]:
        match self.config.legacy:
            case "always":
                return [["--legacy"]]
            case "never":
                return [[]]
            case _ if self._legacy is not None:
                return [self._legacy]
            case _:
                return [[], ["--legacy"]]

    def _run(self, args: list[str]) -> bytes | None:
        cmd = [self.config.xcrun_path, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.config.timeout_sec,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            log.warning("tool_invocation_failed", cmd=cmd[:3], error=str(e))
            return None
        if result.returncode != 0:
            log.debug(
                "tool_nonzero_exit",
                cmd=cmd[:3],
                returncode=result.returncode,
                stderr=result.stderr.decode("utf-8", "replace").strip()[:500],
            )
            return None
        return result.stdout

    def _get_object(self, ref_id: str | None) -> Any:
        key = ref_id or _ROOT
        if key in self._objects:
            return self._objects[key]

        data: Any = None
        for legacy in self._legacy_variants():
            cmd = ["xcresulttool", "get", "object", *legacy, "--format", "json"]
            cmd += ["--path", str(self.path)]
            if ref_id:
                cmd += ["--id", ref_id]
            out = self._run(cmd)
            if out is None:
                continue
            try:
                data = json.loads(out)
            except json.JSONDecodeError as e:
                log.debug("invalid_object_json", id=ref_id, error=str(e))
                continue
            self._legacy = legacy
            break

        self._objects[key] = data
        return data

    # -------------------------------------------------------------------------
    # ResultBundle
    # -------------------------------------------------------------------------

    def invocation_record(self) -> InvocationRecord | None:
        return decode_invocation_record(self._get_object(None))

    def test_plan_summaries(self, ref: Reference) -> TestPlanRunSummaries | None:
        return decode_test_plan_summaries(self._get_object(ref.id))

    def action_test_summary(self, ref: Reference) -> TestLeaf | None:
        return decode_test_summary(self._get_object(ref.id))

    def code_coverage(self, action: ActionRecord) -> RawCoverage | None:
        if action.coverage_ref is None:
            return None
        # xccov reports coverage for the whole bundle, not per action
        if not self._coverage_loaded:
            self._coverage_loaded = True
            out = self._run(["xccov", "view", "--report", "--json", str(self.path)])
            if out is not None:
                try:
                    self._coverage = decode_coverage_report(json.loads(out))
                except json.JSONDecodeError as e:
                    log.debug("invalid_coverage_json", error=str(e))
        return self._coverage

    def payload(self, ref: Reference) -> bytes | None:
        for legacy in self._legacy_variants():
            out = self._run(
                ["xcresulttool", "get", *legacy, "--path", str(self.path), "--id", ref.id]
            )
            if out is not None:
                self._legacy = legacy
                return out
        return None

    def tool_version(self) -> str | None:
        out = self._run(["xcresulttool", "version"])
        if out is None:
            return None
        return out.decode("utf-8", "replace").strip() or None


def open_bundle(path: Path, config: ReaderConfig | None = None) -> XcresultToolBundle:
    """Open an .xcresult bundle for reading.

    Raises:
        BundleError: If the path does not exist.
    """
    if not path.exists():
        raise BundleError.not_found(str(path))
    return XcresultToolBundle(path, config)
