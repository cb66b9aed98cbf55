"""Tests for the agentcmd CLI."""

import pytest
from click.testing import CliRunner

from agentcmd.cli.main import EXIT_NOT_FOUND, EXIT_TIMEOUT, cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("AGENTCMD_TIMEOUT", "AGENTCMD_FALLBACK_HOME", "AGENTCMD_BIN_DIR"):
        monkeypatch.delenv(name, raising=False)


def invoke(runner, tmp_path, *args):
    return runner.invoke(cli, ["--project", str(tmp_path), *args])


class TestRun:
    def test_echo(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "run", "echo", "hello")
        assert result.exit_code == 0
        assert result.output == "hello\n"

    def test_program_options_passed_through(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "run", "sh", "-c", "echo passed")
        assert result.exit_code == 0
        assert result.output == "passed\n"

    def test_redirect(self, runner, tmp_path):
        target = tmp_path / "out.txt"
        result = invoke(runner, tmp_path, "run", "echo", "hi", f">{target}")
        assert result.exit_code == 0
        assert result.output == str(target)
        assert target.read_text() == "hi\n"

    def test_not_found(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "run", "nonexistent-binary-xyz")
        assert result.exit_code == EXIT_NOT_FOUND
        assert "not found" in result.output

    def test_timeout(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "run", "--timeout", "0.1", "sleep", "5")
        assert result.exit_code == EXIT_TIMEOUT
        assert "timed out" in result.output

    def test_invalid_timeout(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "run", "--timeout", "0", "echo")
        assert result.exit_code == 1

    def test_bad_project_config(self, runner, tmp_path):
        (tmp_path / ".agentcmd").mkdir()
        (tmp_path / ".agentcmd" / "config.json").write_text("{broken")
        result = invoke(runner, tmp_path, "run", "echo")
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestEnv:
    def test_shows_prepared_environment(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("AGENTCMD_BIN_DIR", "/opt/helpers")
        monkeypatch.delenv("HOME", raising=False)
        result = invoke(runner, tmp_path, "env")
        assert result.exit_code == 0
        assert "PATH=/opt/helpers" in result.output
        assert "HOME=/root" in result.output


class TestParse:
    def test_with_redirect(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "parse", "-v", "> out.txt", "dropped")
        assert result.exit_code == 0
        assert "Redirect: out.txt" in result.output
        assert "dropped" not in result.output

    def test_without_redirect(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "parse", "a", "b")
        assert "Redirect: (none, output captured)" in result.output
