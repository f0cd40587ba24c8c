"""HTML report rendering via ``go tool cover``."""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from covmerge.core.errors import OutputError
from covmerge.core.logging import get_logger

log = get_logger("report")


class ReportRenderer(Protocol):
    """Turns a serialized coverage profile into a human-readable report."""

    def render(self, profile_path: Path, report_path: Path) -> None:
        """Render ``profile_path`` to ``report_path``.

        Raises:
            OutputError: If rendering fails.
        """
        ...


class GoCoverRenderer:
    """Runs ``go tool cover -html`` with GOPATH pointing at the source tree.

    Renamed variants (``pkg/a.go.<rev>``) resolve through GOPATH as well, which
    is why their snapshots are written under ``<gopath>/src``.
    """

    def __init__(self, *, go_binary: str = "go", gopath: Path, cwd: Path) -> None:
        self._go_binary = go_binary
        self._gopath = gopath
        self._cwd = cwd

    def command(self, profile_path: Path, report_path: Path) -> list[str]:
        return [
            self._go_binary,
            "tool",
            "cover",
            f"-html={profile_path}",
            "-o",
            str(report_path),
        ]

    def render(self, profile_path: Path, report_path: Path) -> None:
        cmd = self.command(profile_path, report_path)
        cmd_str = shlex.join(cmd)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self._cwd),
                capture_output=True,
                text=True,
                env={**os.environ, "GOPATH": str(self._gopath)},
            )
        except OSError as e:
            raise OutputError.render_failed(cmd_str, str(e)) from e

        if result.stdout.strip():
            log.debug("render_output", stdout=result.stdout.strip())
        if result.returncode != 0:
            reason = result.stderr.strip() or f"exit code {result.returncode}"
            raise OutputError.render_failed(cmd_str, reason)

        log.info("report_rendered", profile=str(profile_path), report=str(report_path))
