"""
hmpssh - terminal manager for saved SSH connections

Keeps named user@host:port profiles in ~/.ssh/connections.conf and provides:
- An interactive menu to add, list, delete and connect to profiles
- SSH key generation and installation on remote hosts
- ssh-agent startup and key registration
- Backup and restore of the connection list and key pair
"""

__version__ = "0.1.0"

# Export core components
from .core import (
    Settings,
    CommandResult,
    RecordStore,
    ProcessRunner,
)

# Export domain models and services
from .domain.records import ConnectionRecord, parse_selection
from .domain.keys import KeyService
from .domain.agent import AgentEnvironment, AgentService, parse_agent_output
from .domain.backup import BackupService, BackupResult
from .domain.connect import Connector

# Export infrastructure
from .infrastructure.state import FlatFileRecordStore
from .infrastructure.process import SubprocessRunner

__all__ = [
    # Version
    "__version__",
    # Core
    "Settings",
    "CommandResult",
    "RecordStore",
    "ProcessRunner",
    # Records
    "ConnectionRecord",
    "parse_selection",
    "FlatFileRecordStore",
    # Services
    "KeyService",
    "AgentEnvironment",
    "AgentService",
    "parse_agent_output",
    "BackupService",
    "BackupResult",
    "Connector",
    # Processes
    "SubprocessRunner",
]
