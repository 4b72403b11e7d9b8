"""Config module exports."""

from xcparse.config.loader import load_config
from xcparse.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ReaderConfig,
    ReportConfig,
    XcparseConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ReaderConfig",
    "ReportConfig",
    "XcparseConfig",
]
