"""Hyperdots - a Hyprland dotfiles installer for Arch Linux.

Selects or bootstraps an AUR helper, installs the desktop packages, backs up
existing configuration and links the repository's dotfiles and scripts into
the user's home directory.
"""
