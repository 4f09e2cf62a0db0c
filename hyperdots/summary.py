"""Banner and final report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import questionary

if TYPE_CHECKING:
    from .models import InstallPaths, InstallState

__all__ = ["print_banner", "print_summary"]

RULE = "========================================"


def print_banner() -> None:
    """Print the installer banner."""
    questionary.print(RULE, style="bold fg:blue")
    questionary.print("         MyHyperDots", style="bold fg:blue")
    questionary.print(RULE + "\n", style="bold fg:blue")


def print_summary(state: InstallState, paths: InstallPaths) -> None:
    """Print what was done, where the backup is and what to do next."""
    questionary.print("\n" + RULE, style="fg:green")
    questionary.print("    Installation Completed!", style="bold fg:green")
    questionary.print(RULE + "\n", style="fg:green")

    questionary.print("What was installed:", style="bold fg:blue")
    questionary.print("  • Hyprland and essential packages")
    questionary.print(f"  • {len(state.linked_entries)} configuration entries linked to {paths.config_dir}/")
    questionary.print(f"  • {len(set(state.linked_scripts))} scripts linked to {paths.local_bin_dir}/")
    questionary.print("  • All shell scripts made executable")
    if state.shell is not None:
        questionary.print(f"  • {state.shell.value} set up as default shell")
    if state.skipped_aur:
        questionary.print(f"  • {len(state.skipped_aur)} AUR packages skipped", style="fg:yellow")
    questionary.print("")

    if state.backup.created:
        questionary.print("Backup created at:", style="bold fg:yellow")
        questionary.print(f"  • {state.backup.path}\n")

    questionary.print("Next steps:", style="bold fg:blue")
    questionary.print("  1. Reboot or relogin to apply changes")
    questionary.print("  2. Run 'Hyprland' to start your session")
    questionary.print("  3. Customize your setup as needed\n")
    questionary.print("Enjoy your new Hyprland setup!", style="bold fg:green")
