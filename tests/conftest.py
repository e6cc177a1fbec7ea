import io
from collections import defaultdict, deque
from pathlib import Path
from typing import List, Mapping, Optional

import pytest
from rich.console import Console

from hmpssh.core.interfaces import CommandResult, ProcessRunner
from hmpssh.core.settings import Settings


class FakeRunner(ProcessRunner):
    """Records invocations; returns queued results per binary, exit 0 otherwise"""

    def __init__(self):
        self.calls = []
        self._results = defaultdict(deque)

    def queue(self, binary: str, result: CommandResult) -> None:
        self._results[binary].append(result)

    def _next(self, cmd: List[str]) -> CommandResult:
        pending = self._results[cmd[0]]
        return pending.popleft() if pending else CommandResult(exit_code=0)

    def capture(self, cmd: List[str], env: Optional[Mapping[str, str]] = None) -> CommandResult:
        self.calls.append({"mode": "capture", "cmd": list(cmd), "env": env})
        return self._next(cmd)

    def handoff(
        self,
        cmd: List[str],
        env: Optional[Mapping[str, str]] = None,
        capture_stderr: bool = False,
    ) -> CommandResult:
        self.calls.append({
            "mode": "handoff",
            "cmd": list(cmd),
            "env": env,
            "capture_stderr": capture_stderr,
        })
        return self._next(cmd)

    def binaries(self) -> List[str]:
        return [call["cmd"][0] for call in self.calls]


AGENT_OUTPUT = (
    "SSH_AUTH_SOCK=/tmp/ssh-XXXXabcd/agent.4242; export SSH_AUTH_SOCK;\n"
    "SSH_AGENT_PID=4243; export SSH_AGENT_PID;\n"
    "echo Agent pid 4243;\n"
)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    s = Settings.for_home(tmp_path)
    s.ssh_dir.mkdir()
    return s


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None, record=True)


@pytest.fixture
def agent_output() -> str:
    return AGENT_OUTPUT
