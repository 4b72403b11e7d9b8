"""Core module exports."""

from xcparse.core.errors import (
    BundleError,
    ConfigError,
    ErrorCode,
    ExportError,
    XcparseError,
)
from xcparse.core.logging import (
    clear_parse_id,
    configure_logging,
    get_logger,
    get_parse_id,
    set_parse_id,
)
from xcparse.core.progress import spinner, status

__all__ = [
    # Errors
    "BundleError",
    "ConfigError",
    "ErrorCode",
    "ExportError",
    "XcparseError",
    # Logging
    "clear_parse_id",
    "configure_logging",
    "get_logger",
    "get_parse_id",
    "set_parse_id",
    # Progress
    "spinner",
    "status",
]
