"""Logging setup and utilities."""

import logging
import os

from .ansi import LevelStyles, colorize, should_colorize

__all__ = [
    "SUCCESS",
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "success",
]

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = bool(os.environ.get("DEBUG"))


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """Prefix each message with a colored `[LEVEL]` tag.

    Colors are dropped when `should_colorize` says so.
    """

    TAG_STYLES = {
        logging.DEBUG: (),
        logging.INFO: LevelStyles.INFO,
        SUCCESS: LevelStyles.SUCCESS,
        logging.WARNING: LevelStyles.WARNING,
        logging.ERROR: LevelStyles.ERROR,
        logging.CRITICAL: LevelStyles.CRITICAL,
    }

    def __init__(self, use_colors: bool | None = None) -> None:
        super().__init__()
        self.use_colors = should_colorize() if use_colors is None else use_colors
        self.debug_format = is_debug()

    def format(self, record: logging.LogRecord) -> str:
        tag = f"[{record.levelname}]"
        if self.use_colors:
            tag = colorize(tag, *self.TAG_STYLES.get(record.levelno, ()))
        line = f"{tag} {record.getMessage()}"
        if self.debug_format:
            line += f" // {record.filename}:{record.lineno}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "hyperdots", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.INFO)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in LogObjects.handlers:
        logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger


def success(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log `msg` at the SUCCESS level."""
    logger.log(SUCCESS, msg, *args)
