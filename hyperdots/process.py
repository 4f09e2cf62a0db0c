"""Run external commands and report their outcome as a `CommandResult`.

Commands inherit the terminal: package managers need it for sudo password
prompts and progress output. Whether a failure is fatal is left to the
calling step.
"""

from __future__ import annotations

__all__ = ["detect_first", "run_command"]

import shlex
import shutil
import subprocess
from typing import TYPE_CHECKING

from .models import CommandResult, CommandStatus

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Sequence
    from pathlib import Path


def detect_first(candidates: Iterable[str]) -> str | None:
    """Return the first candidate binary found on PATH, or None."""
    for name in candidates:
        if shutil.which(name):
            return name
    return None


def run_command(
    command: Sequence[str],
    *,
    sudo: bool = False,
    cwd: Path | None = None,
    log: logging.Logger | None = None,
) -> CommandResult:
    """Run `command` synchronously.

    Args:
        command: Program and arguments
        sudo: Prefix the command with `sudo`
        cwd: Working directory
        log: Logger used to trace the command line

    Returns:
        A MISSING result if the program (or sudo) is not installed,
        FAILED on a non-zero exit code, OK otherwise
    """
    argv = (["sudo"] if sudo else []) + list(command)
    if shutil.which(argv[0]) is None:
        return CommandResult(tuple(argv), CommandStatus.MISSING)
    if log:
        log.debug("Running: %s", shlex.join(argv))
    try:
        proc = subprocess.run(argv, cwd=cwd, check=False)
    except FileNotFoundError:
        return CommandResult(tuple(argv), CommandStatus.MISSING)
    status = CommandStatus.OK if proc.returncode == 0 else CommandStatus.FAILED
    return CommandResult(tuple(argv), status, proc.returncode)
