"""
Connect service - hands the terminal over to ssh
"""
import os
from typing import List, Optional

from ...core.constants import SSH_BINARY
from ...core.exceptions import SSHConnectionError
from ...core.interfaces import ProcessRunner, RecordStore
from ...core.logging import get_logger
from ...core.settings import Settings
from ..agent.models import AgentEnvironment
from ..agent.service import AgentService
from ..records.models import ConnectionRecord

logger = get_logger(__name__)


class Connector:
    """Resolves a stored record and runs an interactive ssh session to it"""

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        agent_service: AgentService,
        runner: ProcessRunner,
    ):
        self.settings = settings
        self.store = store
        self.agent_service = agent_service
        self.runner = runner

    def build_ssh_command(self, record: ConnectionRecord) -> List[str]:
        """ssh argument vector for a record"""
        return [
            SSH_BINARY,
            "-i", str(self.settings.key_path),
            "-p", record.port,
            record.target,
        ]

    def locate_agent(self) -> AgentEnvironment:
        """Reuse the caller's agent or start one"""
        return self.agent_service.ensure_agent()

    def prepare(self, agent: Optional[AgentEnvironment] = None) -> AgentEnvironment:
        """
        Make sure an agent is reachable and holds the key.

        Callers that keep the agent across attempts should locate it first
        and pass it in, so a failed ssh-add does not lose it.

        Args:
            agent: Previously located agent, reused if given

        Returns:
            The agent in use
        """
        if agent is None:
            agent = self.locate_agent()
        self.agent_service.register_key(agent)
        return agent

    def connect(self, index: int, agent: Optional[AgentEnvironment] = None) -> ConnectionRecord:
        """
        Open an interactive session to the record at a position.

        When no agent is given, one is located and the key registered first.

        Returns:
            The record connected to

        Raises:
            RecordIndexError: If index is out of range
            AgentError, KeyAddError: If the agent cannot be prepared
            SSHConnectionError: If ssh exits non-zero
        """
        record = self.store.get(index)
        if agent is None:
            agent = self.prepare()

        logger.info(f"Connecting to {record.target}:{record.port}")
        result = self.runner.handoff(self.build_ssh_command(record), env=agent.apply(os.environ))
        if not result.success:
            raise SSHConnectionError(
                "Connection failed",
                tool=SSH_BINARY,
                exit_code=result.exit_code,
            )
        return record
