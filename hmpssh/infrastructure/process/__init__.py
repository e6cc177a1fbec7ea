"""
External process execution
"""
from .runner import SubprocessRunner, SPAWN_FAILURE_EXIT_CODE

__all__ = ["SubprocessRunner", "SPAWN_FAILURE_EXIT_CODE"]
