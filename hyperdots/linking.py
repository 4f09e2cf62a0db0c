"""Filesystem steps: directories, backups, configuration and script links."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from .constants import BACKUP_ARTIFACT_SUFFIXES, SCRIPT_SUFFIX
from .logging_setup import success

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from .models import BackupDir, InstallPaths, InstallState

__all__ = [
    "backup_configs",
    "backup_if_real",
    "create_directories",
    "create_symlinks",
    "force_link",
    "iter_config_entries",
    "link_scripts",
    "make_scripts_executable",
    "script_sources",
]


def is_backup_artifact(path: Path) -> bool:
    """Tell if `path` is an editor or manual backup (`*.bak`, `*~`)."""
    return path.name.endswith(BACKUP_ARTIFACT_SUFFIXES)


def iter_config_entries(repo_config_dir: Path) -> Iterator[Path]:
    """Yield the linkable top-level entries of the repository config tree.

    Directories come first, then files; backup artifacts are skipped.
    """
    if not repo_config_dir.is_dir():
        return
    children = sorted(repo_config_dir.iterdir())
    yield from (child for child in children if child.is_dir())
    yield from (child for child in children if child.is_file() and not is_backup_artifact(child))


def force_link(source: Path, link: Path, log: logging.Logger) -> bool:
    """Point `link` at `source`, replacing an existing link or file.

    A real directory at `link` is never removed.

    Returns:
        True if the link is in place
    """
    if link.is_symlink() or link.is_file():
        link.unlink()
    elif link.exists():
        log.error("%s is a directory, not replacing it", link)
        return False
    link.symlink_to(source)
    return True


def backup_if_real(target: Path, backup: BackupDir, log: logging.Logger) -> bool:
    """Move `target` into the backup directory unless it is absent or a symlink.

    Returns:
        True if something was moved
    """
    if target.is_symlink() or not target.exists():
        return False
    if not backup.created:
        backup.ensure()
        log.warning("Creating backup at %s", backup.path)
    log.info("Backing up %s", target.name)
    destination = backup.path / target.name
    if destination.is_dir() and not destination.is_symlink():
        shutil.rmtree(destination)
    elif destination.exists() or destination.is_symlink():
        destination.unlink()
    shutil.move(str(target), str(destination))
    return True


def create_directories(paths: InstallPaths, directories: Iterable[str], log: logging.Logger) -> int:
    """Create the missing user directories.

    Returns:
        Number of directories created
    """
    log.info("Creating necessary directories...")
    created = 0
    for relative in directories:
        directory = paths.home / relative
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
            created += 1
    if created:
        success(log, "Created %d directories", created)
    else:
        log.info("All directories already exist")
    return created


def backup_configs(paths: InstallPaths, state: InstallState, log: logging.Logger) -> list[Path]:
    """Move aside every real file or directory a link would replace.

    Returns:
        The moved targets, at their original location
    """
    log.info("Checking for existing configuration files...")
    targets = [paths.config_dir / entry.name for entry in iter_config_entries(paths.repo_config_dir)]
    if state.shell is not None and (paths.repo_config_dir / state.shell.rc_name).is_file():
        targets.append(paths.home / state.shell.rc_name)

    moved = [target for target in targets if backup_if_real(target, state.backup, log)]
    if moved:
        success(log, "Backup completed")
    else:
        log.info("No existing configs to backup")
    return moved


def create_symlinks(paths: InstallPaths, state: InstallState, log: logging.Logger) -> None:
    """Link every top-level config entry of the repository into the config directory."""
    log.info("Creating symbolic links for configuration files...")
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    for entry in iter_config_entries(paths.repo_config_dir):
        log.info("Linking %s%s", "" if entry.is_dir() else "config file: ", entry.name)
        if force_link(entry, paths.config_dir / entry.name, log):
            state.linked_entries.append(entry.name)
    success(log, "Configuration symlinks created")


def _is_regular_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def make_scripts_executable(repo_dir: Path, log: logging.Logger) -> int:
    """Add the execute bits to every shell script of the repository.

    Returns:
        Number of scripts processed
    """
    log.info("Making all shell scripts executable...")
    count = 0
    for script in sorted(repo_dir.rglob(f"*{SCRIPT_SUFFIX}")):
        if not _is_regular_file(script):
            continue
        log.debug("Making executable: %s", script.name)
        script.chmod(script.stat().st_mode | 0o111)
        count += 1
    success(log, "All shell scripts are now executable")
    return count


def script_sources(paths: InstallPaths) -> list[Path]:
    """List the scripts to link, in link order: a later entry wins on a name clash.

    Order: `scripts/`, `.config/hypr/Scripts/`, then every `*.sh` below `.config`.
    """
    sources: list[Path] = []
    for directory in (paths.repo_dir / "scripts", paths.repo_config_dir / "hypr" / "Scripts"):
        if directory.is_dir():
            sources.extend(child for child in sorted(directory.iterdir()) if child.is_file())
    if paths.repo_config_dir.is_dir():
        sources.extend(script for script in sorted(paths.repo_config_dir.rglob(f"*{SCRIPT_SUFFIX}")) if _is_regular_file(script))
    return sources


def link_scripts(paths: InstallPaths, state: InstallState, log: logging.Logger) -> None:
    """Link the repository scripts into ~/.local/bin."""
    log.info("Linking scripts to %s...", paths.local_bin_dir)
    paths.local_bin_dir.mkdir(parents=True, exist_ok=True)
    for script in script_sources(paths):
        log.info("Linking script: %s", script.name)
        if force_link(script, paths.local_bin_dir / script.name, log):
            state.linked_scripts.append(script.name)
    success(log, "Scripts linked to %s", paths.local_bin_dir)
