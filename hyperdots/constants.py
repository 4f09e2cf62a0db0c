"""Shared constants for hyperdots."""

__all__ = [
    "AUR_PACKAGES",
    "AUTOSTART_PACKAGES",
    "BACKUP_ARTIFACT_SUFFIXES",
    "BACKUP_PREFIX",
    "BACKUP_STAMP_FORMAT",
    "BASE_PACKAGES",
    "CONFIG_OVERRIDE_FILE",
    "PYTHON_PACKAGES",
    "PIP_COMMANDS",
    "SCRIPT_SUFFIX",
    "SHELL_SEARCH_DIRS",
    "USER_DIRECTORIES",
    "YAY_GIT_URL",
]

BASE_PACKAGES = (
    "hyprland",
    "rofi",
    "ranger",
    "hypridle",
    "hyprlock",
    "waybar",
    "swaync",
    "kitty",
    "swww",
    "brightnessctl",
    "playerctl",
    "grim",
    "slurp",
    "jq",
    "ttf-jetbrains-mono-nerd",
    "papirus-icon-theme",
    "network-manager-applet",
    "polkit-gnome",
    "dunst",
    "fcitx5",
    "cava",
    "fastfetch",
    "starship",
    "eww",
    "qt6ct",
    "thunar",
    "wofi",
    "htop",
    "wireplumber",
    "wl-clipboard",
    "wlogout",
    "libnotify",
    "python3",
    "bc",
    "wget",
    "atool",
    "imagemagick",
    "zsh",
    "blueman",
    "nm-connection-editor",
    "ttf-firacode-nerd",
    "which",
)

# Only installable through an AUR helper
AUR_PACKAGES = (
    "rofi-lbonn-wayland-git",
    "zen-browser",
    "vesktop",
    "whatsdesk",
    "pywal-discord",
    "miku-cursor-theme",
)

# exec / exec-once program basename -> package providing it
AUTOSTART_PACKAGES = {
    "rofi": "rofi-lbonn-wayland-git",
    "ranger": "ranger",
    "waybar": "waybar",
    "swaync": "swaync",
    "nm-applet": "network-manager-applet",
    "blueman-applet": "blueman",
}

PYTHON_PACKAGES = ("pywal", "python-bidi")
PIP_COMMANDS = ("pip", "pip3")

# Relative to $HOME
USER_DIRECTORIES = (
    ".local/share/logs",
    ".local/share",
    ".local/state",
    ".local/bin",
    ".local/bin/scripts",
    ".cache",
    ".cache/wal",
    ".cache/rofi-walls",
    ".cache/swww",
    "Pictures/Screenshots",
    "Pictures/wallpaper",
    "Videos",
    "Documents",
    "Downloads",
    "Templates",
    "Public",
    "Music",
)

BACKUP_PREFIX = "backup_dots_"
BACKUP_STAMP_FORMAT = "%Y%m%d_%H%M%S"
BACKUP_ARTIFACT_SUFFIXES = (".bak", "~")

SCRIPT_SUFFIX = ".sh"

SHELL_SEARCH_DIRS = ("/bin", "/usr/bin")

YAY_GIT_URL = "https://aur.archlinux.org/yay.git"

CONFIG_OVERRIDE_FILE = "hyperdots.toml"
