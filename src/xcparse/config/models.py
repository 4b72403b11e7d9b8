"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (XCPARSE__SECTION__KEY)
3. Explicit YAML file (--config)
4. Working directory YAML (./.xcparse.yaml)
5. Global YAML (~/.config/xcparse/config.yaml)
6. Built-in defaults (this file)

Examples:
    XCPARSE__LOGGING__LEVEL=DEBUG
    XCPARSE__READER__XCRUN_PATH=/usr/bin/xcrun
    XCPARSE__READER__TIMEOUT_SEC=300
    XCPARSE__REPORT__SLOWEST_COUNT=20
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        XCPARSE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI raises this to DEBUG with --verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReaderConfig(BaseModel):
    """Result bundle reader configuration.

    Env vars:
        XCPARSE__READER__XCRUN_PATH: xcrun executable
        XCPARSE__READER__TIMEOUT_SEC: Per-invocation timeout for xcresulttool/xccov
        XCPARSE__READER__LEGACY: Pass --legacy to xcresulttool (auto, always, never)
    """

    xcrun_path: str = Field(
        default="xcrun",
        description="xcrun executable used to invoke xcresulttool and xccov.",
    )
    timeout_sec: float = Field(
        default=120.0,
        description="Timeout for a single xcresulttool/xccov invocation.",
    )
    legacy: Literal["auto", "always", "never"] = Field(
        default="auto",
        description="Xcode 16+ requires --legacy for object queries. "
        "auto tries without it first and retries with it.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report rendering defaults.

    Env vars:
        XCPARSE__REPORT__SLOWEST_COUNT: Number of slowest tests listed in summaries
        XCPARSE__REPORT__TAG_PREVIEW: Test identifiers shown per tag in text output
    """

    slowest_count: int = Field(default=5, ge=0)
    tag_preview: int = Field(default=5, ge=0)


class XcparseConfig(BaseModel):
    """Fully resolved configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
