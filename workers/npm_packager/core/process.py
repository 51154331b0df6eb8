"""
External command execution and the scoped working directory.

Commands run without a shell, with stdout/stderr captured as text.
A non-zero exit raises ``CommandFailedError`` carrying both streams.
"""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from npm_packager.errors import CommandFailedError, CommandNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """A finished external command."""
    command: List[str]
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: float


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """
    Change the process working directory to *path* for the ``with`` body.

    The previous directory is restored on every exit path.
    """
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def run_command(
    command: Sequence[str],
    cwd: Optional[Path] = None,
    label: Optional[str] = None,
) -> CommandResult:
    """
    Run *command* to completion and return its result.

    Raises CommandNotFoundError when the executable is not on PATH and
    CommandFailedError on a non-zero exit.
    """
    command = list(command)
    executable = shutil.which(command[0])
    if executable is None:
        raise CommandNotFoundError(command)

    logger.info("--> Executing: %s", " ".join(command))
    t0 = time.monotonic()
    proc = subprocess.run(
        [executable, *command[1:]],
        cwd=str(cwd) if cwd is not None else None,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
    )
    duration_ms = (time.monotonic() - t0) * 1000.0

    if proc.returncode != 0:
        logger.error(
            "%s exited with code %d", label or command[0], proc.returncode,
        )
        raise CommandFailedError(
            command,
            proc.returncode,
            proc.stdout or "",
            proc.stderr or "",
            label=label,
        )

    return CommandResult(
        command=command,
        exit_code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        duration_ms=duration_ms,
    )
