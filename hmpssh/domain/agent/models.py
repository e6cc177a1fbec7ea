"""
Agent domain models
"""
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ...core.constants import AGENT_PID_ENV, AUTH_SOCK_ENV


@dataclass(frozen=True)
class AgentEnvironment:
    """Location of a reachable ssh-agent"""
    auth_sock: str
    agent_pid: Optional[str] = None
    started: bool = False

    def apply(self, environ: Mapping[str, str]) -> Dict[str, str]:
        """Return a copy of environ pointing children at this agent"""
        env = dict(environ)
        env[AUTH_SOCK_ENV] = self.auth_sock
        if self.agent_pid:
            env[AGENT_PID_ENV] = self.agent_pid
        return env
