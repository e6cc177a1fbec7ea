import os

import pytest

from hmpssh.core.exceptions import AgentError, KeyAddError
from hmpssh.core.interfaces import CommandResult
from hmpssh.domain.agent import AgentEnvironment, AgentService, parse_agent_output


def test_parse_agent_output(agent_output):
    values = parse_agent_output(agent_output)

    assert values == {
        "SSH_AUTH_SOCK": "/tmp/ssh-XXXXabcd/agent.4242",
        "SSH_AGENT_PID": "4243",
    }


def test_parse_agent_output_without_socket():
    assert parse_agent_output("echo Agent pid 1;\n") == {}


def test_existing_socket_is_reused(settings, runner):
    service = AgentService(settings, runner)

    agent = service.ensure_agent({"SSH_AUTH_SOCK": "/run/user/1000/agent.sock"})

    assert agent == AgentEnvironment(auth_sock="/run/user/1000/agent.sock")
    assert runner.calls == []


def test_agent_started_when_socket_unset(settings, runner, monkeypatch, agent_output):
    monkeypatch.delenv("SSH_AUTH_SOCK", raising=False)
    runner.queue("ssh-agent", CommandResult(exit_code=0, stdout=agent_output))
    service = AgentService(settings, runner)

    agent = service.ensure_agent({})

    assert runner.calls == [{"mode": "capture", "cmd": ["ssh-agent", "-s"], "env": None}]
    assert agent.auth_sock == "/tmp/ssh-XXXXabcd/agent.4242"
    assert agent.agent_pid == "4243"
    assert agent.started
    # The caller threads the agent through explicitly
    assert "SSH_AUTH_SOCK" not in os.environ


def test_agent_start_failure(settings, runner):
    runner.queue("ssh-agent", CommandResult(exit_code=127, stderr="Error executing ssh-agent"))

    with pytest.raises(AgentError) as exc_info:
        AgentService(settings, runner).ensure_agent({})
    assert exc_info.value.exit_code == 127


def test_agent_output_without_socket_is_an_error(settings, runner):
    runner.queue("ssh-agent", CommandResult(exit_code=0, stdout="garbage\n"))

    with pytest.raises(AgentError):
        AgentService(settings, runner).ensure_agent({})


def test_apply_does_not_touch_source_environment():
    source = {"PATH": "/usr/bin"}
    env = AgentEnvironment(auth_sock="/tmp/a.sock", agent_pid="7").apply(source)

    assert env == {"PATH": "/usr/bin", "SSH_AUTH_SOCK": "/tmp/a.sock", "SSH_AGENT_PID": "7"}
    assert source == {"PATH": "/usr/bin"}


def test_register_key(settings, runner):
    settings.key_path.write_text("private")
    agent = AgentEnvironment(auth_sock="/tmp/a.sock")

    AgentService(settings, runner).register_key(agent)

    (call,) = runner.calls
    assert call["mode"] == "handoff"
    assert call["cmd"] == ["ssh-add", str(settings.key_path)]
    assert call["env"]["SSH_AUTH_SOCK"] == "/tmp/a.sock"
    assert call["capture_stderr"] is True


def test_register_key_already_added_is_success(settings, runner):
    settings.key_path.write_text("private")
    runner.queue("ssh-add", CommandResult(exit_code=1, stderr="Identity already added\n"))

    AgentService(settings, runner).register_key(AgentEnvironment(auth_sock="/tmp/a.sock"))


def test_register_key_failure(settings, runner):
    settings.key_path.write_text("private")
    runner.queue("ssh-add", CommandResult(exit_code=2, stderr="Could not open a connection to your authentication agent.\n"))

    with pytest.raises(KeyAddError) as exc_info:
        AgentService(settings, runner).register_key(AgentEnvironment(auth_sock="/tmp/a.sock"))
    assert exc_info.value.exit_code == 2


def test_register_key_missing_key(settings, runner):
    with pytest.raises(KeyAddError):
        AgentService(settings, runner).register_key(AgentEnvironment(auth_sock="/tmp/a.sock"))
    assert runner.calls == []
