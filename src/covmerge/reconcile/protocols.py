"""Collaborator protocols for reconciliation."""

from typing import Protocol


class OracleError(Exception):
    """A content oracle could not answer for a file/revision."""

    def __init__(self, message: str, *, revision: str | None = None, file_name: str | None = None):
        super().__init__(message)
        self.revision = revision
        self.file_name = file_name


class ContentOracle(Protocol):
    """Answers questions about source file content per revision.

    File names are the logical names found in coverage profiles; mapping
    them onto repository paths is the oracle's business.
    """

    def same_content(self, rev_a: str, rev_b: str, file_name: str) -> bool:
        """True if ``file_name`` is byte-identical in both revisions.

        Raises:
            OracleError: If either side cannot be looked up.
        """
        ...

    def read_file(self, revision: str, file_name: str) -> bytes:
        """Exact content of ``file_name`` at ``revision``.

        Raises:
            OracleError: If the file cannot be read at that revision.
        """
        ...
