"""Login shell selection and run-control file linking."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import SHELL_SEARCH_DIRS
from .linking import backup_if_real, force_link
from .logging_setup import success
from .models import ChoiceKind, Shell
from .process import run_command
from .prompts import ask_menu, print_menu

if TYPE_CHECKING:
    import logging

    from .models import InstallPaths, InstallState

__all__ = ["ask_shell", "link_shell_rc", "resolve_shell_path", "setup_shell"]


def ask_shell(current_shell: str) -> Shell | None:
    """Let the user pick a shell; the current one is marked.

    Returns:
        The selected shell, or None if the user chose to skip
    """
    shells = list(Shell)
    lines = []
    for i, shell in enumerate(shells, 1):
        marker = " (current) ✓" if current_shell == shell.value else ""
        lines.append(f"{i}) {shell.value}{marker}")
    print_menu("Choose your default shell:", lines)
    choice = ask_menu([str(i) for i in range(1, len(shells) + 1)], "1", f"Please enter 1-{len(shells)} or q.")
    if choice.kind is ChoiceKind.QUIT:
        return None
    return shells[int(choice.option) - 1]


def resolve_shell_path(shell: Shell) -> str | None:
    """Find the absolute path of the shell binary, preferring /bin and /usr/bin."""
    for directory in SHELL_SEARCH_DIRS:
        candidate = Path(directory) / shell.value
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return shutil.which(shell.value)


def link_shell_rc(shell: Shell, paths: InstallPaths, state: InstallState, log: logging.Logger) -> bool:
    """Link ~/.<shell>rc to the repository copy when there is one.

    Returns:
        True if the link was created
    """
    source = paths.repo_config_dir / shell.rc_name
    if not source.is_file():
        return False
    log.info("Linking %s...", shell.rc_name)
    target = paths.home / shell.rc_name
    backup_if_real(target, state.backup, log)
    if not force_link(source, target, log):
        return False
    success(log, "%s linked successfully", shell.rc_name)
    return True


def setup_shell(paths: InstallPaths, state: InstallState, log: logging.Logger) -> None:
    """Select, install and activate a login shell, then link its rc file.

    Every failure is downgraded to a log message.
    """
    log.info("Setting up shell...")
    current = paths.current_shell_name
    shell = ask_shell(current)
    if shell is None:
        log.info("Skipping shell setup...")
        return

    if shutil.which(shell.value) is None:
        log.info("Installing %s...", shell.value)
        if run_command(["pacman", "-S", "--needed", "--noconfirm", shell.value], sudo=True, log=log).ok:
            success(log, "%s installed successfully", shell.value)
        else:
            log.warning("Failed to install %s", shell.value)
            return

    if current != shell.value:
        log.info("Changing default shell from %s to %s...", current or "unknown", shell.value)
        shell_path = resolve_shell_path(shell)
        if shell_path is None:
            log.error("Could not determine %s path.", shell.value)
            return
        if run_command(["chsh", "-s", shell_path], log=log).ok:
            success(log, "Default shell changed to %s", shell.value)
        else:
            log.warning("Failed to change shell. You may need to run 'chsh -s %s' manually.", shell_path)
    else:
        log.info("%s is already the default shell", shell.value)

    state.shell = shell
    link_shell_rc(shell, paths, state, log)
    success(log, "Shell setup completed")
