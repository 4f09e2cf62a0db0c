import os

import pytest

from hyperdots.__main__ import main
from hyperdots.installer import check_repository, run_installer
from hyperdots.models import ConfigError, ExitCode, InstallAborted, InstallPaths, Shell

from .conftest import BACKUP_TIME


def snapshot(root):
    "Describe a tree without following links"
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = os.path.join(dirpath, name)
            rel = os.path.relpath(path, root)
            if os.path.islink(path):
                result[rel] = ("link", os.readlink(path))
            elif os.path.isdir(path):
                result[rel] = ("dir",)
            else:
                with open(path) as f:
                    result[rel] = ("file", f.read())
    return result


@pytest.fixture
def arch(binaries, commands):
    "An Arch system with zsh and without AUR helper"
    binaries.update({"pacman", "zsh"})
    return commands


def test_full_run(paths, answers, arch, log, printed):
    answers.replies += ["2", "1"]  # skip AUR, zsh
    state = run_installer(paths, log, now=BACKUP_TIME)

    assert state.aur_available is False
    assert state.shell is Shell.ZSH
    assert state.backup.created is False
    assert not state.backup.path.exists()
    assert "rofi-lbonn-wayland-git" in state.skipped_aur
    assert (paths.config_dir / "hypr").is_symlink()
    assert (paths.home / ".zshrc").is_symlink()
    assert (paths.local_bin_dir / "volume").is_symlink()
    assert (paths.home / "Pictures" / "Screenshots").is_dir()
    assert state.created_directories == 16
    assert "Backup created at:" not in printed
    assert "Installation Completed!" in "".join(printed)


def test_rerun_is_idempotent(paths, answers, arch, log):
    answers.replies += ["2", "1"]
    run_installer(paths, log, now=BACKUP_TIME)
    first = snapshot(paths.home)
    answers.replies += ["2", "1"]
    state = run_installer(paths, log, now=BACKUP_TIME)
    assert snapshot(paths.home) == first
    assert state.created_directories == 0
    assert state.backup.created is False


def test_existing_configs_are_preserved(paths, answers, arch, log, printed):
    (paths.config_dir / "waybar").mkdir(parents=True)
    (paths.config_dir / "waybar" / "style.css").write_text("mine")
    (paths.home / ".zshrc").write_text("my zshrc")
    answers.replies += ["2", "1"]
    state = run_installer(paths, log, now=BACKUP_TIME)

    assert state.backup.created is True
    assert (state.backup.path / "waybar" / "style.css").read_text() == "mine"
    assert (state.backup.path / ".zshrc").read_text() == "my zshrc"
    assert os.readlink(paths.config_dir / "waybar") == str(paths.repo_config_dir / "waybar")
    assert f"  • {state.backup.path}\n" in printed


def test_quit_at_helper_menu_changes_nothing(paths, answers, arch, log):
    before = snapshot(paths.home)
    answers.replies.append("q")
    with pytest.raises(InstallAborted):
        run_installer(paths, log, now=BACKUP_TIME)
    assert snapshot(paths.home) == before
    assert arch.calls == []


def test_aur_packages_use_helper(paths, answers, arch, binaries, log):
    binaries.add("paru")
    answers.replies.append("q")  # shell menu only
    state = run_installer(paths, log, now=BACKUP_TIME)
    assert state.package_manager == "paru"
    assert state.shell is None
    aur_batch = [c for c in arch.calls if c[0] == "paru" and "zen-browser" in c]
    assert len(aur_batch) == 1
    assert not any("zen-browser" in c for c in arch.calls if c[:2] == ("sudo", "pacman"))



def test_check_repository_accepts_dotfiles(paths):
    check_repository(paths)


def test_check_repository_without_config_tree(tmp_path, home):
    repo = tmp_path / "empty"
    repo.mkdir()
    with pytest.raises(ConfigError, match="not a dotfiles repository"):
        check_repository(InstallPaths(repo_dir=repo, home=home, config_dir=home / ".config"))


@pytest.mark.parametrize("config", [".config", ".config/xdg"])
def test_check_repository_refuses_own_config(home, config):
    (home / config).mkdir(parents=True)
    paths = InstallPaths(repo_dir=home, home=home, config_dir=home / config)
    with pytest.raises(ConfigError, match="HYPERDOTS_REPO"):
        check_repository(paths)


def test_bad_repository_changes_nothing(home, answers, arch, log):
    (home / ".config" / "kitty").mkdir(parents=True)
    paths = InstallPaths(repo_dir=home, home=home, config_dir=home / ".config")
    before = snapshot(home)
    with pytest.raises(ConfigError):
        run_installer(paths, log, now=BACKUP_TIME)
    assert snapshot(home) == before
    assert answers.questions == []
    assert arch.calls == []

@pytest.fixture
def environ(monkeypatch, paths):
    monkeypatch.setenv("HOME", str(paths.home))
    monkeypatch.setenv("SHELL", "/usr/bin/zsh")
    monkeypatch.setenv("HYPERDOTS_REPO", str(paths.repo_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("HYPERDOTS_LOG", raising=False)


def test_main_success(environ, paths, answers, arch):
    answers.replies += ["2", "1"]
    assert main([]) == ExitCode.SUCCESS
    assert (paths.home / ".zshrc").is_symlink()
    # zsh already the login shell
    assert not arch.find("chsh")


def test_main_quit(environ, paths, answers, arch):
    answers.replies.append("q")
    assert main([]) == ExitCode.ABORTED
    assert list(paths.home.iterdir()) == []


def test_main_not_arch(environ, paths, binaries, commands):
    assert main([]) == ExitCode.PLATFORM_ERROR
    assert list(paths.home.iterdir()) == []


def test_main_bad_config(environ, paths, arch):
    (paths.repo_dir / "hyperdots.toml").write_text("[packages]\nbase = 'hyprland'\n")
    assert main([]) == ExitCode.CONFIG_ERROR


def test_main_help(capsys):
    assert main(["--help"]) == ExitCode.SUCCESS
    assert "Usage: hyperdots-install" in capsys.readouterr().out


def test_main_from_home_without_repo(environ, monkeypatch, paths, answers, arch):
    "Running from $HOME must not relink ~/.config onto itself"
    home = paths.home
    (home / ".config" / "kitty").mkdir(parents=True)
    (home / ".config" / "kitty" / "kitty.conf").write_text("font_size 11")
    (home / "notes").mkdir()
    todo = home / "notes" / "todo.sh"
    todo.write_text("echo todo")
    todo.chmod(0o600)
    monkeypatch.delenv("HYPERDOTS_REPO")
    monkeypatch.chdir(home)
    answers.replies += ["2", "q"]

    assert main([]) == ExitCode.CONFIG_ERROR
    assert not (home / ".config").is_symlink()
    assert not (home / ".config" / "kitty").is_symlink()
    assert (home / ".config" / "kitty" / "kitty.conf").read_text() == "font_size 11"
    assert todo.stat().st_mode & 0o777 == 0o600
    assert not list(home.rglob("backup_dots_*"))
    assert answers.questions == []


def test_main_repo_without_config_tree(environ, monkeypatch, tmp_path, paths, answers, arch):
    repo = tmp_path / "not-dotfiles"
    (repo / "scripts").mkdir(parents=True)
    (repo / "scripts" / "run.sh").write_text("#!/bin/sh\n")
    (repo / "scripts" / "run.sh").chmod(0o644)
    monkeypatch.setenv("HYPERDOTS_REPO", str(repo))

    assert main([]) == ExitCode.CONFIG_ERROR
    assert list(paths.home.iterdir()) == []
    assert (repo / "scripts" / "run.sh").stat().st_mode & 0o777 == 0o644
    assert answers.questions == []
