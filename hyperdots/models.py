"""Types shared by the installer steps."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum, StrEnum
from pathlib import Path

from .constants import BACKUP_PREFIX, BACKUP_STAMP_FORMAT

__all__ = [
    "AurHelper",
    "BackupDir",
    "ChoiceKind",
    "CommandResult",
    "CommandStatus",
    "ConfigError",
    "ExitCode",
    "HyperdotsError",
    "InstallAborted",
    "InstallPaths",
    "InstallState",
    "MenuChoice",
    "PackagePlan",
    "PlatformError",
    "Shell",
]


class HyperdotsError(Exception):
    """Base class of the fatal installer errors."""


class PlatformError(HyperdotsError):
    """The host is not an Arch Linux system."""


class InstallAborted(HyperdotsError):
    """The user quit from an interactive prompt."""


class ConfigError(HyperdotsError):
    """The configuration override file is invalid."""


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    ABORTED = 1
    PLATFORM_ERROR = 2
    CONFIG_ERROR = 3


class Shell(StrEnum):
    """Supported login shells, in menu order."""

    ZSH = "zsh"
    FISH = "fish"
    BASH = "bash"

    @property
    def rc_name(self) -> str:
        """Run-control file name, e.g. `.zshrc`."""
        return f".{self.value}rc"


class AurHelper(StrEnum):
    """Recognized AUR helper binaries, in menu order."""

    YAY = "yay"
    PARU = "paru"
    YAY_BIN = "yay-bin"
    PARU_BIN = "paru-bin"

    @property
    def family(self) -> str:
        """Helper family: `yay` or `paru`."""
        return self.value.split("-", 1)[0]


class CommandStatus(StrEnum):
    """Outcome of an external command."""

    OK = "ok"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class CommandResult:
    """Result of `process.run_command`."""

    command: tuple[str, ...]
    status: CommandStatus
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        """True if the command ran and exited with 0."""
        return self.status == CommandStatus.OK


class ChoiceKind(Enum):
    """Tag of a parsed menu answer."""

    VALID = "valid"
    INVALID = "invalid"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuChoice:
    """A parsed menu answer. `value` is only set for VALID choices."""

    kind: ChoiceKind
    value: str | None = None

    @property
    def option(self) -> str:
        """The selected option key.

        Raises:
            ValueError: if the choice is not VALID
        """
        if self.kind is not ChoiceKind.VALID or self.value is None:
            msg = f"A {self.kind.value} menu choice has no option"
            raise ValueError(msg)
        return self.value

    @classmethod
    def valid(cls, value: str) -> MenuChoice:
        return cls(ChoiceKind.VALID, value)

    @classmethod
    def invalid(cls) -> MenuChoice:
        return cls(ChoiceKind.INVALID)

    @classmethod
    def quit(cls) -> MenuChoice:
        return cls(ChoiceKind.QUIT)


@dataclass(frozen=True)
class PackagePlan:
    """Packages to install, split by source."""

    main: list[str]
    aur: list[str]


@dataclass(frozen=True)
class InstallPaths:
    """Filesystem locations used by the installer."""

    repo_dir: Path
    home: Path
    config_dir: Path
    current_shell: str = ""

    @classmethod
    def from_environ(cls, repo_dir: Path | None = None, environ: dict[str, str] | None = None) -> InstallPaths:
        """Build the paths from `HOME`, `SHELL`, `XDG_CONFIG_HOME` and `HYPERDOTS_REPO`."""
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home())
        config_dir = Path(env.get("XDG_CONFIG_HOME") or home / ".config")
        if repo_dir is None:
            repo_dir = Path(env.get("HYPERDOTS_REPO") or Path.cwd())
        return cls(
            repo_dir=repo_dir.expanduser().resolve(),
            home=home,
            config_dir=config_dir,
            current_shell=env.get("SHELL", ""),
        )

    @property
    def repo_config_dir(self) -> Path:
        return self.repo_dir / ".config"

    @property
    def hypr_conf(self) -> Path:
        return self.repo_config_dir / "hypr" / "hyprland.conf"

    @property
    def local_bin_dir(self) -> Path:
        return self.home / ".local" / "bin"

    @property
    def current_shell_name(self) -> str:
        """Basename of `$SHELL`, empty when unset."""
        return Path(self.current_shell).name if self.current_shell else ""


class BackupDir:
    """Timestamped backup directory, created on first use only."""

    def __init__(self, parent: Path, now: datetime | None = None) -> None:
        stamp = (now or datetime.now()).strftime(BACKUP_STAMP_FORMAT)
        self.path = parent / f"{BACKUP_PREFIX}{stamp}"
        self.created = False

    def ensure(self) -> Path:
        """Create the directory if this run did not already, and return it."""
        if not self.created:
            self.path.mkdir(parents=True, exist_ok=True)
            self.created = True
        return self.path

    def __repr__(self) -> str:
        return f"BackupDir({self.path}, created={self.created})"


@dataclass
class InstallState:
    """Selections and results threaded through the installer steps."""

    backup: BackupDir
    package_manager: str = "pacman"
    aur_available: bool = False
    shell: Shell | None = None
    created_directories: int = 0
    linked_entries: list[str] = field(default_factory=list)
    linked_scripts: list[str] = field(default_factory=list)
    skipped_aur: list[str] = field(default_factory=list)
