"""System and Python package installation."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from .constants import PIP_COMMANDS
from .logging_setup import success
from .models import PackagePlan
from .process import detect_first, run_command

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from .config import Settings
    from .models import InstallState

__all__ = [
    "infer_packages",
    "install_packages",
    "install_python_packages",
    "merge_packages",
    "plan_packages",
]

EXEC_LINE = re.compile(r"^\s*exec(?:-once)?\s*=\s*(.*)$")
PACMAN_INSTALL = ["-S", "--needed", "--noconfirm"]


def infer_packages(hypr_conf: Path, lookup: Mapping[str, str]) -> list[str]:
    """List the packages needed by the `exec` / `exec-once` lines of a Hyprland config.

    Args:
        hypr_conf: Path to hyprland.conf; a missing file yields no package
        lookup: Program basename to package name

    Returns:
        Package names in order of appearance, unknown programs skipped
    """
    if not hypr_conf.is_file():
        return []
    packages = []
    for line in hypr_conf.read_text(encoding="utf-8", errors="replace").splitlines():
        match = EXEC_LINE.match(line)
        if not match:
            continue
        tokens = match.group(1).split()
        if not tokens:
            continue
        program = PurePosixPath(tokens[0]).name
        if program in lookup:
            packages.append(lookup[program])
    return packages


def merge_packages(base: Iterable[str], inferred: Iterable[str]) -> list[str]:
    """Merge two package lists into a sorted list without duplicates."""
    return sorted(set(base) | set(inferred))


def plan_packages(base: Iterable[str], aur: Iterable[str], inferred: Iterable[str]) -> PackagePlan:
    """Split the wanted packages between the main repositories and the AUR.

    Inferred names listed as AUR-only go to the AUR batch only.
    """
    aur_only = set(aur)
    merged = merge_packages(base, inferred)
    return PackagePlan(
        main=[name for name in merged if name not in aur_only],
        aur=sorted(aur_only),
    )


def _install_batch(packages: list[str], state: InstallState, log: logging.Logger, warning: str) -> None:
    if not packages:
        return
    if state.aur_available:
        result = run_command([state.package_manager, *PACMAN_INSTALL, *packages], log=log)
    else:
        result = run_command(["pacman", *PACMAN_INSTALL, *packages], sudo=True, log=log)
    if not result.ok:
        log.warning(warning)


def install_packages(state: InstallState, settings: Settings, hypr_conf: Path, log: logging.Logger) -> PackagePlan:
    """Install the desktop packages with the selected package manager.

    Failures only log warnings. Without an AUR helper, the AUR-only packages
    are recorded in `state.skipped_aur` instead.
    """
    log.info("Installing required packages...")
    log.info("Analyzing hyprland configuration for dependencies...")
    inferred = infer_packages(hypr_conf, settings.autostart_packages)
    if inferred:
        log.debug("Inferred from %s: %s", hypr_conf.name, " ".join(inferred))
    plan = plan_packages(settings.base_packages, settings.aur_packages, inferred)
    log.info("Found %d packages to install", len(plan.main))

    if state.aur_available:
        log.info("Installing %d packages with %s...", len(plan.main), state.package_manager)
        _install_batch(plan.main, state, log, "Some packages failed to install, continuing...")
        if plan.aur:
            log.info("Installing AUR packages with %s...", state.package_manager)
            _install_batch(plan.aur, state, log, "Some AUR packages failed to install, continuing...")
    else:
        if plan.main:
            log.info("Installing pacman packages: %s", " ".join(plan.main))
        _install_batch(plan.main, state, log, "Some packages failed to install, continuing...")
        if plan.aur:
            state.skipped_aur = list(plan.aur)
            log.warning("Skipping AUR packages (no AUR helper available):")
            for name in plan.aur:
                log.warning("  • %s", name)
            log.info("Install yay or paru later to install these packages")

    success(log, "Package installation completed")
    return plan


def install_python_packages(packages: Iterable[str], log: logging.Logger) -> None:
    """Install Python packages for the user with pip, or pip3."""
    log.info("Installing Python packages...")
    pip = detect_first(PIP_COMMANDS)
    if pip is None:
        log.warning("pip not found, skipping Python packages installation")
        return
    for name in packages:
        log.info("Installing Python package: %s", name)
        if not run_command([pip, "install", "--user", name], log=log).ok:
            log.warning("Failed to install %s", name)
    success(log, "Python packages installation completed")
