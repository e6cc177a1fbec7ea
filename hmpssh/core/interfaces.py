"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.records.models import ConnectionRecord


@dataclass
class CommandResult:
    """Outcome of an external tool invocation"""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class RecordStore(ABC):
    """
    Connection record storage interface.

    Records are addressed by their zero-based position in store order.
    """

    @abstractmethod
    def load(self) -> List["ConnectionRecord"]:
        """Load all records, [] when the store is empty"""
        pass

    @abstractmethod
    def append(self, record: "ConnectionRecord") -> None:
        """Validate and append a record"""
        pass

    @abstractmethod
    def delete(self, index: int) -> "ConnectionRecord":
        """Remove the record at a position and return it"""
        pass

    @abstractmethod
    def get(self, index: int) -> "ConnectionRecord":
        """Return the record at a position"""
        pass


class ProcessRunner(ABC):
    """External tool runner"""

    @abstractmethod
    def capture(self, cmd: List[str], env: Optional[Mapping[str, str]] = None) -> CommandResult:
        """Run a command with stdout/stderr captured"""
        pass

    @abstractmethod
    def handoff(
        self,
        cmd: List[str],
        env: Optional[Mapping[str, str]] = None,
        capture_stderr: bool = False,
    ) -> CommandResult:
        """
        Run a command with the caller's standard streams attached and block
        until it exits.

        With capture_stderr, stderr is collected (and echoed back) so the
        caller can inspect it; stdin and stdout stay attached.
        """
        pass


class PromptProvider(ABC):
    """User prompt interface"""

    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None) -> str:
        """Prompt user for input"""
        pass

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Prompt user for a y/n answer"""
        pass

    @abstractmethod
    def pause(self) -> None:
        """Wait for the user to acknowledge"""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass
