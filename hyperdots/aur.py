"""Platform check and AUR helper selection."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import YAY_GIT_URL
from .logging_setup import success
from .models import AurHelper, ChoiceKind, InstallAborted, PlatformError
from .process import run_command
from .prompts import ask_menu, print_menu

if TYPE_CHECKING:
    import logging

    from .models import InstallState

__all__ = [
    "bootstrap_yay",
    "check_platform",
    "choose_package_manager",
    "detect_helpers",
]

SKIP_OPTION = "0"


def check_platform(log: logging.Logger) -> None:
    """Make sure pacman is available.

    Raises:
        PlatformError: if pacman is not on PATH
    """
    if shutil.which("pacman") is None:
        log.error("This installer is designed for Arch Linux. pacman not found.")
        msg = "pacman not found"
        raise PlatformError(msg)
    success(log, "Arch Linux detected")


def detect_helpers() -> list[AurHelper]:
    """Return the installed AUR helpers, in menu order."""
    return [helper for helper in AurHelper if shutil.which(helper.value)]


def _use_pacman(state: InstallState) -> None:
    state.package_manager = "pacman"
    state.aur_available = False


def _use_helper(state: InstallState, helper: str) -> None:
    state.package_manager = helper
    state.aur_available = True


def bootstrap_yay(log: logging.Logger) -> bool:
    """Build and install yay from the AUR.

    Returns:
        True if yay was installed
    """
    log.info("Installing yay...")
    if not run_command(["pacman", "-S", "--needed", "--noconfirm", "git", "base-devel"], sudo=True, log=log).ok:
        return False
    with tempfile.TemporaryDirectory(prefix="hyperdots-") as tmp:
        clone_dir = Path(tmp) / "yay"
        if not run_command(["git", "clone", YAY_GIT_URL, str(clone_dir)], log=log).ok:
            return False
        return run_command(["makepkg", "-si", "--noconfirm"], cwd=clone_dir, log=log).ok


def _select_among(installed: list[AurHelper], state: InstallState, log: logging.Logger) -> None:
    """Menu used when helpers of both families are installed."""
    helpers = list(AurHelper)
    lines = [f"{i}) {helper.value}{' ✓' if helper in installed else ''}" for i, helper in enumerate(helpers, 1)]
    lines.append(f"{SKIP_OPTION}) Skip AUR packages")
    print_menu("Multiple AUR helpers available. Please choose:", lines)

    options = [SKIP_OPTION] + [str(i) for i in range(1, len(helpers) + 1)]
    while True:
        choice = ask_menu(options, "1", f"Please enter 0-{len(helpers)} or q.")
        if choice.kind is ChoiceKind.QUIT:
            log.info("Quitting...")
            msg = "AUR helper selection cancelled"
            raise InstallAborted(msg)
        if choice.option == SKIP_OPTION:
            _use_pacman(state)
            log.warning("Skipping AUR packages")
            return
        helper = helpers[int(choice.option) - 1]
        if helper in installed:
            _use_helper(state, helper.value)
            success(log, "Selected %s", helper.value)
            return
        log.warning("%s not installed", helper.value)


def _offer_install(state: InstallState, log: logging.Logger) -> None:
    """Menu used when no helper is installed."""
    print_menu(
        "No AUR helper found. Install yay? (Recommended)",
        ["1) Install yay", "2) Skip AUR packages"],
    )
    choice = ask_menu(["1", "2"], "1", "Please enter 1, 2, or q.")
    if choice.kind is ChoiceKind.QUIT:
        log.info("Quitting...")
        msg = "AUR helper installation cancelled"
        raise InstallAborted(msg)
    if choice.option == "2":
        _use_pacman(state)
        log.warning("Skipping AUR packages")
        return
    if bootstrap_yay(log):
        _use_helper(state, AurHelper.YAY.value)
        success(log, "yay installed successfully")
    else:
        _use_pacman(state)
        log.warning("yay installation failed, continuing without AUR")


def choose_package_manager(state: InstallState, log: logging.Logger) -> None:
    """Set `state.package_manager` and `state.aur_available`.

    Raises:
        InstallAborted: if the user quits the menu
    """
    log.info("Choosing AUR package manager...")
    installed = detect_helpers()
    families = {helper.family for helper in installed}
    if len(families) > 1:
        _select_among(installed, state, log)
    elif installed:
        _use_helper(state, installed[0].value)
        success(log, "Using %s", installed[0].value)
    else:
        _offer_install(state, log)
