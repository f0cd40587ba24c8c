"""Core module exports."""

from covmerge.core.errors import (
    CaptureError,
    ConfigError,
    CovMergeError,
    ErrorCode,
    MergeError,
    OutputError,
    SnapshotError,
)
from covmerge.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from covmerge.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "CaptureError",
    "ConfigError",
    "CovMergeError",
    "ErrorCode",
    "MergeError",
    "OutputError",
    "SnapshotError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
