"""Installer settings: built-in package lists with optional TOML overrides.

The repository may ship a `hyperdots.toml` next to its `.config` tree::

    [packages]
    base = ["hyprland", "kitty"]   # replaces the built-in list
    extra = ["neovim"]             # appended to the base list
    aur = ["zen-browser"]
    python = ["pywal"]

    [dependencies]
    my-bar = "my-bar-git"

    [directories]
    extra = ["Projects"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .constants import (
    AUR_PACKAGES,
    AUTOSTART_PACKAGES,
    BASE_PACKAGES,
    CONFIG_OVERRIDE_FILE,
    PYTHON_PACKAGES,
    USER_DIRECTORIES,
)
from .models import ConfigError

if TYPE_CHECKING:
    import logging
    from pathlib import Path

__all__ = ["Settings", "load_settings"]

KNOWN_KEYS: dict[str, set[str] | None] = {
    "packages": {"base", "extra", "aur", "python"},
    "dependencies": None,  # free-form table
    "directories": {"extra"},
}


@dataclass
class Settings:
    """Package lists and lookup tables used by the installer steps."""

    base_packages: list[str] = field(default_factory=lambda: list(BASE_PACKAGES))
    aur_packages: list[str] = field(default_factory=lambda: list(AUR_PACKAGES))
    python_packages: list[str] = field(default_factory=lambda: list(PYTHON_PACKAGES))
    autostart_packages: dict[str, str] = field(default_factory=lambda: dict(AUTOSTART_PACKAGES))
    directories: list[str] = field(default_factory=lambda: list(USER_DIRECTORIES))


def _string_list(data: dict[str, Any], section: str, key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"[{section}] {key} must be a list of strings"
        raise ConfigError(msg)
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        msg = f"[{name}] must be a table"
        raise ConfigError(msg)
    return value


def _warn_unknown_keys(raw: dict[str, Any], log: logging.Logger) -> None:
    for section, value in raw.items():
        if section not in KNOWN_KEYS:
            log.warning("Unknown section [%s] in %s", section, CONFIG_OVERRIDE_FILE)
            continue
        allowed = KNOWN_KEYS[section]
        if allowed is None or not isinstance(value, dict):
            continue
        for key in value:
            if key not in allowed:
                log.warning("Unknown key %s in [%s]", key, section)


def apply_overrides(settings: Settings, raw: dict[str, Any]) -> Settings:
    """Apply a parsed override table to `settings` and return it.

    Raises:
        ConfigError: if a value has the wrong type
    """
    packages = _section(raw, "packages")
    if (base := _string_list(packages, "packages", "base")) is not None:
        settings.base_packages = base
    if (extra := _string_list(packages, "packages", "extra")) is not None:
        settings.base_packages = settings.base_packages + extra
    if (aur := _string_list(packages, "packages", "aur")) is not None:
        settings.aur_packages = aur
    if (python := _string_list(packages, "packages", "python")) is not None:
        settings.python_packages = python

    for program, package in _section(raw, "dependencies").items():
        if not isinstance(package, str):
            msg = f"[dependencies] {program} must be a package name"
            raise ConfigError(msg)
        settings.autostart_packages[program] = package

    directories = _section(raw, "directories")
    if (extra_dirs := _string_list(directories, "directories", "extra")) is not None:
        settings.directories = settings.directories + extra_dirs
    return settings


def load_settings(repo_dir: Path, log: logging.Logger) -> Settings:
    """Load the settings, reading `hyperdots.toml` from `repo_dir` if present.

    Raises:
        ConfigError: if the file is not valid TOML or has wrong types
    """
    settings = Settings()
    fname = repo_dir / CONFIG_OVERRIDE_FILE
    if not fname.exists():
        return settings
    try:
        with fname.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"{fname}: {e}"
        raise ConfigError(msg) from e
    log.info("Using overrides from %s", fname)
    _warn_unknown_keys(raw, log)
    return apply_overrides(settings, raw)
