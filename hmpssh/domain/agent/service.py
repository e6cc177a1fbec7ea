"""
Agent service - ssh-agent and ssh-add bridge
"""
import os
from typing import Dict, Mapping, Optional

from ...core.constants import (
    AGENT_PID_ENV,
    AUTH_SOCK_ENV,
    SSH_ADD_BINARY,
    SSH_AGENT_BINARY,
)
from ...core.exceptions import AgentError, KeyAddError
from ...core.interfaces import ProcessRunner
from ...core.logging import get_logger
from ...core.settings import Settings
from .models import AgentEnvironment

logger = get_logger(__name__)


def parse_agent_output(output: str) -> Dict[str, str]:
    """
    Extract SSH_* assignments from `ssh-agent -s` output.

    The agent prints Bourne shell lines such as
    ``SSH_AUTH_SOCK=/tmp/ssh-XXXX/agent.42; export SSH_AUTH_SOCK;``.

    Args:
        output: Agent stdout

    Returns:
        Mapping of variable name to value
    """
    found: Dict[str, str] = {}
    for line in output.splitlines():
        for part in line.split(";"):
            part = part.strip()
            if not part.startswith("SSH_") or "=" not in part:
                continue
            key, value = part.split("=", 1)
            value = value.strip().strip('"\'')
            if value:
                found[key.strip()] = value
    return found


class AgentService:
    """Starts or reuses an ssh-agent and registers the private key with it"""

    def __init__(self, settings: Settings, runner: ProcessRunner):
        self.settings = settings
        self.runner = runner

    def ensure_agent(self, environ: Optional[Mapping[str, str]] = None) -> AgentEnvironment:
        """
        Locate a reachable agent, starting one if needed.

        The started agent is left running after this program exits.

        Args:
            environ: Environment to inspect (default: os.environ)

        Returns:
            AgentEnvironment to pass to register_key and the connector

        Raises:
            AgentError: If ssh-agent cannot be started or its output has no socket
        """
        if environ is None:
            environ = os.environ

        auth_sock = environ.get(AUTH_SOCK_ENV)
        if auth_sock:
            logger.debug(f"Reusing agent at {auth_sock}")
            return AgentEnvironment(auth_sock=auth_sock, agent_pid=environ.get(AGENT_PID_ENV))

        result = self.runner.capture([SSH_AGENT_BINARY, "-s"])
        if not result.success:
            raise AgentError(
                f"failed to start ssh-agent: {result.stderr.strip() or f'exit status {result.exit_code}'}",
                tool=SSH_AGENT_BINARY,
                exit_code=result.exit_code,
            )

        values = parse_agent_output(result.stdout)
        if AUTH_SOCK_ENV not in values:
            raise AgentError(
                f"ssh-agent did not report {AUTH_SOCK_ENV}",
                tool=SSH_AGENT_BINARY,
                exit_code=result.exit_code,
            )

        agent = AgentEnvironment(
            auth_sock=values[AUTH_SOCK_ENV],
            agent_pid=values.get(AGENT_PID_ENV),
            started=True,
        )
        logger.info(f"Started ssh-agent (pid {agent.agent_pid}) at {agent.auth_sock}")
        return agent

    def register_key(self, agent: AgentEnvironment) -> None:
        """
        Add the private key to the agent.

        An "already added" complaint from ssh-add counts as success.

        Raises:
            KeyAddError: If the key is missing or ssh-add fails
        """
        key_path = self.settings.key_path
        if not key_path.exists():
            raise KeyAddError(
                f"failed to add SSH key to agent: {key_path} not found, run 'Setup SSH Key' first",
                tool=SSH_ADD_BINARY,
            )

        result = self.runner.handoff(
            [SSH_ADD_BINARY, str(key_path)],
            env=agent.apply(os.environ),
            capture_stderr=True,
        )
        if result.success:
            return

        if "already" in result.stderr.lower():
            logger.debug("Key already present in agent")
            return

        raise KeyAddError(
            f"failed to add SSH key to agent: exit status {result.exit_code}",
            tool=SSH_ADD_BINARY,
            exit_code=result.exit_code,
        )
