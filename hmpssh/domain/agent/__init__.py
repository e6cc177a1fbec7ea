"""
Agent domain module
"""
from .models import AgentEnvironment
from .service import AgentService, parse_agent_output

__all__ = ["AgentEnvironment", "AgentService", "parse_agent_output"]
