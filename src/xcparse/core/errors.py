"""xcparse error types with typed error codes.

Error code ranges:
- 1xxx: Bundle
- 2xxx: Config
- 3xxx: Export
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Bundle (1xxx)
    INVALID_BUNDLE = 1001
    BUNDLE_NOT_FOUND = 1002

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Export (3xxx)
    EXPORT_UNSUPPORTED_FORMAT = 3001
    EXPORT_DECODE_FAILED = 3002


@dataclass(eq=False)
class XcparseError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INVALID_BUNDLE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class BundleError(XcparseError):
    """Result bundle could not be opened or its root record read."""

    @classmethod
    def invalid_bundle(cls, path: str, reason: str) -> "BundleError":
        return cls(
            code=ErrorCode.INVALID_BUNDLE,
            message=f"Invalid result bundle at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def not_found(cls, path: str) -> "BundleError":
        return cls(
            code=ErrorCode.BUNDLE_NOT_FOUND,
            message=f"Result bundle not found: {path}",
            details={"path": path},
        )


class ConfigError(XcparseError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ExportError(XcparseError):
    """Errors raised while encoding or decoding report output."""

    @classmethod
    def unsupported_format(cls, fmt: str) -> "ExportError":
        return cls(
            code=ErrorCode.EXPORT_UNSUPPORTED_FORMAT,
            message=f"Unsupported export format: {fmt}",
            details={"format": fmt},
        )

    @classmethod
    def decode_failed(cls, reason: str) -> "ExportError":
        return cls(
            code=ErrorCode.EXPORT_DECODE_FAILED,
            message=f"Failed to decode report: {reason}",
            details={"reason": reason},
        )
