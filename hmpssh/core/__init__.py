"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import CommandResult, RecordStore, ProcessRunner, PromptProvider
from .settings import Settings

__all__ = [
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "CommandResult",
    "RecordStore",
    "ProcessRunner",
    "PromptProvider",
    "Settings",
]
