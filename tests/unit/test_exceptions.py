"""Unit tests for the exception hierarchy and error formatting."""

import pytest

from agentcmd.core.exceptions import (
    E_KILL_FAILED,
    E_NOT_FOUND,
    E_OUTPUT_FILE,
    E_TIMEOUT,
    E_VALIDATION,
    AgentCmdException,
    CommandNotFoundError,
    CommandTimeoutError,
    ConfigurationError,
    KillProcessError,
    OutputFileError,
    format_error_for_log,
    format_error_for_user,
)


class TestAgentCmdException:
    """Test the base AgentCmdException class."""

    def test_basic_creation(self):
        exc = AgentCmdException("Test error")
        assert exc.message == "Test error"
        assert exc.error_code is None
        assert exc.metadata == {}
        assert str(exc) == "Test error"

    def test_exception_behavior(self):
        """Test that it behaves like a standard exception."""
        with pytest.raises(AgentCmdException) as exc_info:
            raise AgentCmdException("Test error", error_code=E_VALIDATION)
        assert str(exc_info.value) == "Test error"
        assert exc_info.value.error_code == E_VALIDATION


class TestTaxonomy:
    """Each classified failure gets its own code and metadata."""

    def test_not_found(self):
        exc = CommandNotFoundError("Executable file not found in $PATH", program="pt-summary")
        assert exc.error_code == E_NOT_FOUND
        assert exc.program == "pt-summary"
        assert exc.metadata["program"] == "pt-summary"
        assert isinstance(exc, AgentCmdException)

    def test_timeout(self):
        exc = CommandTimeoutError("Timeout", program="sleep", timeout=0.5)
        assert exc.error_code == E_TIMEOUT
        assert exc.metadata == {"program": "sleep", "timeout_s": 0.5}

    def test_kill_failed(self):
        exc = KillProcessError("Failed to kill process after timeout", program="sleep", pid=42)
        assert exc.error_code == E_KILL_FAILED
        assert exc.pid == 42
        assert exc.metadata["pid"] == 42

    def test_kill_failed_without_pid(self):
        exc = KillProcessError("Failed to kill process after timeout")
        assert "pid" not in exc.metadata

    def test_output_file(self):
        exc = OutputFileError("Failed to create output file", path="/nope/out.txt")
        assert exc.error_code == E_OUTPUT_FILE
        assert exc.metadata["path"] == "/nope/out.txt"

    def test_configuration(self):
        exc = ConfigurationError("bad timeout", key="timeout_s", reason="negative")
        assert exc.error_code == E_VALIDATION
        assert exc.metadata == {"config_key": "timeout_s", "reason": "negative"}

    def test_custom_error_code_kept(self):
        exc = CommandTimeoutError("Timeout", error_code="E_CUSTOM")
        assert exc.error_code == "E_CUSTOM"

    def test_metadata_not_shared(self):
        first = CommandNotFoundError("missing", program="a")
        second = CommandNotFoundError("missing", program="b")
        assert first.metadata is not second.metadata
        assert second.metadata == {"program": "b"}


class TestFormatErrorForUser:
    def test_not_found(self):
        exc = CommandNotFoundError("Executable file not found in $PATH", program="pt-summary")
        assert format_error_for_user(exc) == (
            "Command 'pt-summary' not found: Executable file not found in $PATH"
        )

    def test_timeout(self):
        exc = CommandTimeoutError("Timeout", program="sleep", timeout=0.1)
        assert format_error_for_user(exc) == "Command 'sleep' timed out after 0.1s: Timeout"

    def test_kill_failed(self):
        exc = KillProcessError("Operation not permitted", pid=7)
        assert format_error_for_user(exc) == "Process 7 could not be killed: Operation not permitted"

    def test_output_file_without_path(self):
        exc = OutputFileError("Permission denied")
        assert format_error_for_user(exc) == "Cannot create output file: Permission denied"

    def test_base_exception(self):
        assert format_error_for_user(AgentCmdException("plain")) == "plain"


class TestFormatErrorForLog:
    def test_timeout(self):
        exc = CommandTimeoutError("Timeout", program="sleep", timeout=2.0)
        data = format_error_for_log(exc)
        assert data["error_type"] == "CommandTimeoutError"
        assert data["error_code"] == E_TIMEOUT
        assert data["program"] == "sleep"
        assert data["timeout_s"] == 2.0
        assert data["metadata"] == {"program": "sleep", "timeout_s": 2.0}

    def test_kill_failed(self):
        data = format_error_for_log(KillProcessError("boom", program="sleep", pid=99))
        assert data["pid"] == 99
        assert data["program"] == "sleep"

    def test_configuration(self):
        data = format_error_for_log(ConfigurationError("bad", key="timeout_s"))
        assert data["config_key"] == "timeout_s"
        assert "reason" not in data

    def test_without_metadata(self):
        data = format_error_for_log(AgentCmdException("plain"))
        assert data == {"error_type": "AgentCmdException", "message": "plain", "error_code": None}
