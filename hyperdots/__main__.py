"""Command line entry point: `hyperdots-install` or `python -m hyperdots`."""

from __future__ import annotations

import os
import sys

from .installer import run_installer
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode, InstallAborted, InstallPaths, PlatformError


def print_help() -> None:
    """Print minimal help message."""
    print("Usage: hyperdots-install")
    print()
    print("Install the Hyprland dotfiles of the current repository.")
    print()
    print("Environment:")
    print("  HYPERDOTS_REPO   Dotfiles repository (default: current directory)")
    print("  HYPERDOTS_LOG    Also write the log to this file")
    print("  DEBUG            Verbose output")
    print("  NO_COLOR         Disable colors")


def main(argv: list[str] | None = None) -> int:
    """Run the installer and return the exit code."""
    args = sys.argv[1:] if argv is None else argv
    if "--help" in args or "-h" in args:
        print_help()
        return ExitCode.SUCCESS

    init_logger(os.environ.get("HYPERDOTS_LOG") or None)
    log = get_logger()

    try:
        run_installer(InstallPaths.from_environ(), log)
    except PlatformError:
        return ExitCode.PLATFORM_ERROR
    except ConfigError as e:
        log.error("Invalid configuration: %s", e)
        return ExitCode.CONFIG_ERROR
    except (InstallAborted, KeyboardInterrupt):
        print("\n\nInstallation cancelled.")
        return ExitCode.ABORTED
    return ExitCode.SUCCESS


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
