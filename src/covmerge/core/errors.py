"""covmerge error types with typed error codes.

Error code ranges:
- 1xxx: Capture input
- 2xxx: Config
- 3xxx: Merge
- 4xxx: Source snapshots
- 5xxx: Output
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Capture (1xxx)
    CAPTURE_MALFORMED_ID = 1001
    CAPTURE_READ_ERROR = 1002
    CAPTURE_PARSE_ERROR = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Merge (3xxx)
    MERGE_MODE_MISMATCH = 3001
    MERGE_UNSUPPORTED_MODE = 3002
    MERGE_OVERLAP = 3003
    MERGE_INCONSISTENT_STMTS = 3004

    # Snapshots (4xxx)
    SNAPSHOT_FETCH_FAILED = 4001
    SNAPSHOT_WRITE_FAILED = 4002

    # Output (5xxx)
    OUTPUT_WRITE_FAILED = 5001
    REPORT_RENDER_FAILED = 5002
    REPORT_AUGMENT_FAILED = 5003


@dataclass(frozen=True)
class CovMergeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'MERGE_OVERLAP')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class CaptureError(CovMergeError):
    """Malformed or unreadable capture input."""

    @classmethod
    def malformed_id(cls, identifier: str, reason: str) -> "CaptureError":
        return cls(
            code=ErrorCode.CAPTURE_MALFORMED_ID,
            message=f"Malformed capture identifier {identifier!r}: {reason}",
            details={"identifier": identifier, "reason": reason},
        )

    @classmethod
    def read_error(cls, path: str, reason: str) -> "CaptureError":
        return cls(
            code=ErrorCode.CAPTURE_READ_ERROR,
            message=f"Failed to read capture {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str, line: int | None = None) -> "CaptureError":
        where = f"{path}:{line}" if line is not None else path
        return cls(
            code=ErrorCode.CAPTURE_PARSE_ERROR,
            message=f"Failed to parse capture {where}: {reason}",
            details={"path": path, "line": line, "reason": reason},
        )


class ConfigError(CovMergeError):
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


class MergeError(CovMergeError):
    """Coverage data that cannot be merged consistently."""

    @classmethod
    def mode_mismatch(cls, file_name: str, into_mode: str, other_mode: str) -> "MergeError":
        return cls(
            code=ErrorCode.MERGE_MODE_MISMATCH,
            message=(
                f"cannot merge profiles with different modes for {file_name}: "
                f"{into_mode!r} vs {other_mode!r}"
            ),
            details={"file": file_name, "into_mode": into_mode, "other_mode": other_mode},
        )

    @classmethod
    def unsupported_mode(cls, file_name: str, mode: str) -> "MergeError":
        return cls(
            code=ErrorCode.MERGE_UNSUPPORTED_MODE,
            message=f"unsupported cover mode {mode!r} in {file_name}",
            details={"file": file_name, "mode": mode},
        )

    @classmethod
    def overlap(cls, kind: str, file_name: str, existing: Any, incoming: Any) -> "MergeError":
        return cls(
            code=ErrorCode.MERGE_OVERLAP,
            message=f"{kind} in {file_name}: existing {existing} vs incoming {incoming}",
            details={
                "kind": kind,
                "file": file_name,
                "existing": str(existing),
                "incoming": str(incoming),
            },
        )

    @classmethod
    def inconsistent_stmts(cls, file_name: str, before: int, after: int) -> "MergeError":
        return cls(
            code=ErrorCode.MERGE_INCONSISTENT_STMTS,
            message=f"inconsistent NumStmt in {file_name}: changed from {before} to {after}",
            details={"file": file_name, "before": before, "after": after},
        )


class SnapshotError(CovMergeError):
    """Failure materializing per-revision source snapshots."""

    @classmethod
    def fetch_failed(cls, revision: str, file_name: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_FETCH_FAILED,
            message=f"Failed to fetch {file_name} at {revision}: {reason}",
            details={"revision": revision, "file": file_name, "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_WRITE_FAILED,
            message=f"Failed to write snapshot {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class OutputError(CovMergeError):
    """Failure producing the merged profile or its report."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "OutputError":
        return cls(
            code=ErrorCode.OUTPUT_WRITE_FAILED,
            message=f"Failed to write {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def render_failed(cls, command: str, reason: str) -> "OutputError":
        return cls(
            code=ErrorCode.REPORT_RENDER_FAILED,
            message=f"Report rendering failed ({command}): {reason}",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def augment_failed(cls, path: str, reason: str) -> "OutputError":
        return cls(
            code=ErrorCode.REPORT_AUGMENT_FAILED,
            message=f"Failed to augment report {path}: {reason}",
            details={"path": path, "reason": reason},
        )
