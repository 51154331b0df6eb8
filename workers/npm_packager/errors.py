"""
Exception taxonomy for npm_packager.

Missing root assets are not errors (they are logged and skipped).
Everything defined here aborts the build.
"""
from __future__ import annotations

from typing import Optional, Sequence


class PackagerError(Exception):
    """Base class for all build failures raised by npm_packager."""


class SourceNotFoundError(PackagerError, FileNotFoundError):
    """The source directory or an explicitly listed source file is missing."""


class CommandNotFoundError(PackagerError):
    """An external executable could not be resolved on PATH."""

    def __init__(self, command: Sequence[str]):
        self.command = list(command)
        super().__init__(f"{self.command[0]}: command not found")


class CommandFailedError(PackagerError):
    """
    An external command exited with a non-zero status.

    ``label`` is the short human name used in the message
    (``"npm install"``, ``"tsc"``); it defaults to the full command line.
    """

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        stdout: str,
        stderr: str,
        label: Optional[str] = None,
    ):
        self.command = list(command)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.label = label or " ".join(self.command)
        super().__init__(
            f"{self.label} failed (exit code {exit_code}):\n{stdout}\n{stderr}"
        )
