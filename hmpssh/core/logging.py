"""
Logging and console setup

Diagnostics go to the "hmpssh" logger tree on stderr through rich; the menu
itself writes to the stdout console. Nothing is logged until setup_logging
runs, so library use stays silent.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_traceback

PACKAGE_LOGGER = "hmpssh"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# file=None follows sys.stdout / sys.stderr as they are swapped
_stdout_console = Console(highlight=False)
_stderr_console = Console(stderr=True)

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def resolve_level(level: str) -> int:
    """Numeric level for a level name, WARNING for anything unknown"""
    name = level.upper()
    if name not in LOG_LEVELS:
        return logging.WARNING
    return getattr(logging, name)


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Route hmpssh diagnostics to stderr and optionally a file.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name; unknown names fall back to WARNING
        log_file: Append plain-text records here as well

    Returns:
        The package logger
    """
    log_level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(RichHandler(
        console=_stderr_console,
        level=log_level,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    ))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    if level.upper() not in LOG_LEVELS:
        logger.warning(f"Unknown log level {level!r}, using WARNING")

    # Only a DEBUG run shows locals in crash reports
    install_traceback(console=_stderr_console, show_locals=log_level <= logging.DEBUG)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for menu output"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and logs"""
    return _stderr_console
