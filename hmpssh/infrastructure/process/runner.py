"""
Subprocess runner for external tools

Two ways to run a tool:
- capture: output collected, nothing shown to the user
- handoff: the user's terminal is attached to the child until it exits
"""
import subprocess
import sys
from typing import List, Mapping, Optional

from ...core.interfaces import CommandResult, ProcessRunner
from ...core.logging import get_logger

logger = get_logger(__name__)

# Shell convention for "command not found / could not execute"
SPAWN_FAILURE_EXIT_CODE = 127


class SubprocessRunner(ProcessRunner):
    """ProcessRunner backed by subprocess.run"""

    def capture(self, cmd: List[str], env: Optional[Mapping[str, str]] = None) -> CommandResult:
        """
        Execute a command and capture its output.

        Args:
            cmd: Argument vector
            env: Full child environment (default: inherit)

        Returns:
            CommandResult
        """
        logger.debug(f"capture: {cmd}")
        try:
            result = subprocess.run(
                cmd,
                env=dict(env) if env is not None else None,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return CommandResult(
                exit_code=SPAWN_FAILURE_EXIT_CODE,
                stderr=f"Error executing {cmd[0]}: {e}",
            )

        return CommandResult(
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def handoff(
        self,
        cmd: List[str],
        env: Optional[Mapping[str, str]] = None,
        capture_stderr: bool = False,
    ) -> CommandResult:
        """
        Execute a command attached to the caller's terminal.

        Args:
            cmd: Argument vector
            env: Full child environment (default: inherit)
            capture_stderr: Collect stderr for inspection, then echo it

        Returns:
            CommandResult (stdout is always empty)
        """
        logger.debug(f"handoff: {cmd}")
        try:
            result = subprocess.run(
                cmd,
                env=dict(env) if env is not None else None,
                stderr=subprocess.PIPE if capture_stderr else None,
                text=True,
            )
        except OSError as e:
            return CommandResult(
                exit_code=SPAWN_FAILURE_EXIT_CODE,
                stderr=f"Error executing {cmd[0]}: {e}",
            )

        stderr = ""
        if capture_stderr and result.stderr:
            stderr = result.stderr
            sys.stderr.write(stderr)
            sys.stderr.flush()

        return CommandResult(exit_code=result.returncode, stderr=stderr)
