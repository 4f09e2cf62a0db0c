"""The installation workflow, one step after the other."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .aur import check_platform, choose_package_manager
from .config import load_settings
from .linking import backup_configs, create_directories, create_symlinks, link_scripts, make_scripts_executable
from .models import BackupDir, ConfigError, InstallState
from .packages import install_packages, install_python_packages
from .shell import setup_shell
from .summary import print_banner, print_summary

if TYPE_CHECKING:
    import logging
    from datetime import datetime

    from .models import InstallPaths

__all__ = ["check_repository", "run_installer"]


def check_repository(paths: InstallPaths) -> None:
    """Make sure the repository holds a `.config` tree that is not the user's own.

    Raises:
        ConfigError: the repository has no `.config` directory, or linking it
            would replace the config directory or one of its ancestors
    """
    repo_config = paths.repo_config_dir
    if not repo_config.is_dir():
        msg = f"{paths.repo_dir} is not a dotfiles repository: {repo_config} is missing"
        raise ConfigError(msg)
    config_dir = paths.config_dir.resolve()
    if config_dir.is_relative_to(repo_config.resolve()):
        msg = f"{paths.repo_dir} holds {paths.config_dir}, set HYPERDOTS_REPO to the dotfiles repository"
        raise ConfigError(msg)


def run_installer(paths: InstallPaths, log: logging.Logger, now: datetime | None = None) -> InstallState:
    """Run every installation step in order.

    Args:
        paths: Locations of the repository and of the user's directories
        log: Logger shared by the steps
        now: Timestamp used to name the backup directory

    Returns:
        The final installation state

    Raises:
        PlatformError: pacman is missing
        ConfigError: the repository is unusable or hyperdots.toml is invalid
        InstallAborted: the user quit the AUR helper menu or cancelled a prompt
    """
    print_banner()
    check_platform(log)
    check_repository(paths)
    settings = load_settings(paths.repo_dir, log)
    state = InstallState(backup=BackupDir(paths.config_dir, now))

    choose_package_manager(state, log)
    setup_shell(paths, state, log)
    state.created_directories = create_directories(paths, settings.directories, log)
    install_packages(state, settings, paths.hypr_conf, log)
    install_python_packages(settings.python_packages, log)
    backup_configs(paths, state, log)
    create_symlinks(paths, state, log)
    make_scripts_executable(paths.repo_dir, log)
    link_scripts(paths, state, log)
    print_summary(state, paths)
    return state
