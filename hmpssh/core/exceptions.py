"""
Unified exception definitions
"""
from typing import Optional


class HmpsshError(Exception):
    """Base exception class"""
    pass


class StartupError(HmpsshError):
    """Unrecoverable startup condition"""
    pass


class ValidationError(HmpsshError):
    """Bad user input"""
    pass


class StoreIOError(HmpsshError, OSError):
    """Config file could not be opened, read or written"""
    pass


class RecordIndexError(HmpsshError, IndexError):
    """Selected record position is out of range"""
    pass


class ExternalToolError(HmpsshError):
    """External tool failed to spawn or exited non-zero"""

    def __init__(self, message: str, tool: str = "", exit_code: Optional[int] = None):
        super().__init__(message)
        self.tool = tool
        self.exit_code = exit_code


class KeyGenerationError(ExternalToolError):
    """ssh-keygen error"""
    pass


class KeyInstallError(ExternalToolError):
    """ssh-copy-id error"""
    pass


class AgentError(ExternalToolError):
    """ssh-agent error"""
    pass


class KeyAddError(ExternalToolError):
    """ssh-add error"""
    pass


class BackupError(ExternalToolError):
    """Archive creation error"""
    pass


class RestoreError(ExternalToolError):
    """Archive extraction error"""
    pass


class BackupNotFoundError(RestoreError):
    """Backup archive path does not exist"""
    pass


class SSHConnectionError(ExternalToolError):
    """ssh session error"""
    pass
