# test_manager.py
import subprocess

import pytest

from avn_nodebrew.config import ManagerConfig
from avn_nodebrew.manager import ExternalToolError, VersionManager


def fake_run(returncode: int = 0, stdout: str = "", stderr: str = "", calls: list | None = None):
    def _run(argv, **kwargs):
        if calls is not None:
            calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

    return _run


def test_list_output_runs_list_subcommand(monkeypatch) -> None:
    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run(stdout="node@4.2.0\n", calls=calls))

    output = VersionManager().list_output()

    assert output == "node@4.2.0\n"
    argv, kwargs = calls[0]
    assert argv == ["nodebrew", "list"]
    assert kwargs["capture_output"] is True
    assert kwargs["text"] is True
    assert kwargs["timeout"] == 30.0


def test_list_output_nonzero_exit_carries_stderr(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", fake_run(returncode=1, stderr="permission denied\n"))

    with pytest.raises(ExternalToolError) as excinfo:
        VersionManager().list_output()

    assert str(excinfo.value) == "nodebrew command error: permission denied"
    assert excinfo.value.stderr == "permission denied\n"
    assert excinfo.value.returncode == 1


def test_list_output_missing_binary(monkeypatch) -> None:
    def _run(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(subprocess, "run", _run)

    with pytest.raises(ExternalToolError) as excinfo:
        VersionManager(command="no-such-nodebrew").list_output()

    assert "no-such-nodebrew command error" in str(excinfo.value)
    assert excinfo.value.returncode is None


def test_list_output_timeout(monkeypatch) -> None:
    def _run(argv, **kwargs):
        raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", _run)

    with pytest.raises(ExternalToolError) as excinfo:
        VersionManager(timeout=1.5).list_output()

    assert "timed out after 1.5s" in str(excinfo.value)


def test_list_output_timeout_keeps_captured_stderr(monkeypatch) -> None:
    def _run(argv, **kwargs):
        raise subprocess.TimeoutExpired(argv, kwargs["timeout"], stderr=b"still fetching\n")

    monkeypatch.setattr(subprocess, "run", _run)

    with pytest.raises(ExternalToolError) as excinfo:
        VersionManager(timeout=1.5).list_output()

    assert excinfo.value.stderr == "still fetching\n"
    assert excinfo.value.returncode is None


def test_use_command_redirects_to_null_sink() -> None:
    assert VersionManager().use_command("node@4.2.0") == "nodebrew use node@4.2.0 > /dev/null;"
    assert VersionManager().use_command("io-1.0.0") == "nodebrew use io-1.0.0 > /dev/null;"


def test_use_command_quotes_shell_metacharacters() -> None:
    cmd = VersionManager().use_command("node@4.2.0; rm -rf ~")
    assert cmd == "nodebrew use 'node@4.2.0; rm -rf ~' > /dev/null;"


def test_from_config_uses_custom_subcommands(monkeypatch) -> None:
    cfg = ManagerConfig(
        command="/opt/nodebrew/bin/nodebrew",
        list_args=["ls"],
        use_args=["switch", "--quiet"],
        null_sink="/tmp/avn.log",
        timeout=None,
    )
    manager = VersionManager.from_config(cfg)

    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run(stdout="", calls=calls))
    manager.list_output()

    assert calls[0][0] == ["/opt/nodebrew/bin/nodebrew", "ls"]
    assert calls[0][1]["timeout"] is None
    assert manager.use_command("node@4.2.0") == (
        "/opt/nodebrew/bin/nodebrew switch --quiet node@4.2.0 > /tmp/avn.log;"
    )
