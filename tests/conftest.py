" generic fixtures "
from datetime import datetime

import pytest

from hyperdots.models import BackupDir, InstallPaths, InstallState

from .testtools import Answers, CommandRecorder

HYPRLAND_CONF = """\
# autostart
exec-once = waybar
exec-once = /usr/bin/rofi -show drun
exec = ~/.local/bin/nm-applet --indicator
exec-once=swaync
#exec-once = blueman-applet
exec-once = unknown-daemon --flag
bind = SUPER, R, exec, ranger
"""

BACKUP_TIME = datetime(2024, 1, 2, 3, 4, 5)


def pytest_configure():
    "Runs once before all"
    from hyperdots.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def log():
    from hyperdots.logging_setup import get_logger

    return get_logger("hyperdots.tests")


@pytest.fixture(autouse=True)
def printed(monkeypatch):
    "Collects questionary.print output"
    lines = []
    monkeypatch.setattr("questionary.print", lambda text="", **_: lines.append(text))
    return lines


@pytest.fixture
def dotfiles(tmp_path):
    "A dotfiles repository"
    repo = tmp_path / "repo"
    hypr = repo / ".config" / "hypr"
    (hypr / "Scripts").mkdir(parents=True)
    (hypr / "hyprland.conf").write_text(HYPRLAND_CONF)
    (hypr / "Scripts" / "wallpaper.sh").write_text("#!/bin/sh\n")
    (hypr / "Scripts" / "lock").write_text("#!/bin/sh\n")
    (repo / ".config" / "waybar").mkdir()
    (repo / ".config" / "waybar" / "config.jsonc").write_text("{}")
    (repo / ".config" / "rofi").mkdir()
    (repo / ".config" / "rofi" / "launcher.sh").write_text("#!/bin/sh\n")
    (repo / ".config" / ".zshrc").write_text("# zshrc\n")
    (repo / ".config" / "starship.toml").write_text("")
    (repo / ".config" / "starship.toml.bak").write_text("")
    (repo / ".config" / "notes~").write_text("")
    (repo / "scripts").mkdir()
    (repo / "scripts" / "volume").write_text("#!/bin/sh\n")
    (repo / "scripts" / "wallpaper.sh").write_text("#!/bin/sh\n")
    (repo / "tools").mkdir()
    (repo / "tools" / "setup.sh").write_text("#!/bin/sh\n")
    return repo


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def paths(dotfiles, home):
    return InstallPaths(repo_dir=dotfiles, home=home, config_dir=home / ".config", current_shell="/usr/bin/bash")


@pytest.fixture
def state(paths):
    return InstallState(backup=BackupDir(paths.config_dir, BACKUP_TIME))


@pytest.fixture
def commands(monkeypatch):
    "Replaces run_command everywhere it is used"
    recorder = CommandRecorder()
    for module in ("aur", "packages", "shell"):
        monkeypatch.setattr(f"hyperdots.{module}.run_command", recorder)
    return recorder


@pytest.fixture
def answers(monkeypatch):
    "Scripted prompt replies: append to answers.replies"
    replies = Answers()
    monkeypatch.setattr("hyperdots.prompts.ask_text", replies)
    return replies


@pytest.fixture
def binaries(monkeypatch):
    "Set of programs shutil.which can find"
    found = set()
    monkeypatch.setattr("shutil.which", lambda name, *a, **kw: f"/usr/bin/{name}" if name in found else None)
    return found
