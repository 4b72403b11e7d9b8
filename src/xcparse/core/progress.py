"""User-facing progress feedback for CLI operations.

Design principles:
- Spinner only on a TTY; pipes and CI get no decoration
- Suppress structlog console output while a spinner is live

Usage::

    from xcparse.core.progress import spinner, status

    with spinner("Parsing MyApp.xcresult"):
        result = parser.parse(path)

    status("Wrote 4 files", style="success")  # ✓ Wrote 4 files
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output; file handlers still receive logs."""
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from xcparse.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)
    _get_logger().debug("status", message=message, style=style)


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """Show a spinner on stderr for the duration of the block."""
    if _is_tty():
        with (
            suppress_console_logs(),
            _console.status(f"[cyan]{message}[/cyan]", spinner="dots"),
        ):
            yield
    else:
        _get_logger().debug("spinner", message=message)
        yield
