"""User-facing progress feedback for CLI operations.

Design principles:
- Single line updates, no spam
- Graceful degradation in non-TTY (CI, pipes)
- Suppress structlog console output during spinners to avoid line collision

Usage::

    from covmerge.core.progress import status, spinner

    status("Merged 3 revisions", style="success")  # ✓ Merged 3 revisions
    status("Oracle unavailable", style="warning")  # ! Oracle unavailable

    with spinner("Rendering report"):
        render()  # structlog console output suppressed during this block
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from covmerge.capture.models import RevisionProfiles

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
    """Suppress structlog console output; file handlers keep receiving logs."""
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


class ConsoleSuppressingFilter(logging.Filter):
    """Filter that blocks console output while a live display is running."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        return not is_console_suppressed()


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from covmerge.core.logging import get_logger

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


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 file" / "3 files" style strings."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


@contextmanager
def spinner(message: str, *, indent: int = 0) -> Iterator[None]:
    """Show a spinner while the block runs, muting console logs.

    Non-TTY output degrades to a single line.
    """
    padding = " " * indent
    if _is_tty():
        with (
            suppress_console_logs(),
            _console.status(f"{padding}[cyan]{message}[/cyan]", spinner="dots"),
        ):
            yield
    else:
        _console.print(f"{padding}{message}...", highlight=False)
        yield


def make_revision_table(revisions: list[RevisionProfiles]) -> Table:
    """Per-revision summary: revision, first capture time, files, blocks."""
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("revision", style="cyan")
    table.add_column("timestamp", justify="right")
    table.add_column("files", justify="right")
    table.add_column("blocks", justify="right")

    for rev in revisions:
        blocks = sum(len(p.blocks) for p in rev.profiles)
        table.add_row(rev.revision, str(rev.timestamp), str(len(rev.profiles)), str(blocks))

    return table
