"""Unit tests for structured JSON logging."""

import json
import logging

import pytest

from agentcmd.core import logger as logger_module
from agentcmd.core.executors import RealCommand
from agentcmd.core.logger import AgentCmdLogger, JSONFormatter, get_logger


@pytest.fixture
def temp_log_dir(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def logger(temp_log_dir):
    return AgentCmdLogger(log_dir=str(temp_log_dir), level="DEBUG")


def read_log_lines(logger):
    for handler in logger._logger.handlers:
        handler.flush()
    if not logger.log_file.exists():
        return []
    with logger.log_file.open() as f:
        return [json.loads(line) for line in f if line.strip()]


def test_no_file_logging_by_default(monkeypatch):
    monkeypatch.delenv("AGENTCMD_LOG_DIR", raising=False)
    logger = AgentCmdLogger()
    assert logger.log_dir is None
    assert logger.log_file is None


def test_log_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AGENTCMD_LOG_DIR", str(tmp_path / "from-env"))
    logger = AgentCmdLogger()
    assert logger.log_file == tmp_path / "from-env" / "agentcmd.log"
    assert logger.log_dir.exists()


def test_structured_logging_with_kv_pairs(logger):
    logger.info("command_completed", program="echo", returncode=0)
    lines = read_log_lines(logger)
    assert len(lines) == 1
    assert lines[0]["level"] == "INFO"
    assert lines[0]["message"] == "command_completed"
    assert lines[0]["program"] == "echo"
    assert lines[0]["returncode"] == 0
    assert lines[0]["timestamp"].endswith("Z")


def test_log_level_filtering(temp_log_dir):
    logger = AgentCmdLogger(log_dir=str(temp_log_dir), level="WARN")
    logger.debug("hidden")
    logger.info("hidden")
    logger.warn("shown")
    logger.error("shown too")
    assert [line["level"] for line in read_log_lines(logger)] == ["WARNING", "ERROR"]


def test_log_level_from_env(temp_log_dir, monkeypatch):
    monkeypatch.setenv("AGENTCMD_LOG_LEVEL", "ERROR")
    logger = AgentCmdLogger(log_dir=str(temp_log_dir))
    assert logger._logger.level == logging.ERROR


def test_operation_context_manager_with_exception(logger):
    with pytest.raises(ValueError):
        with logger.operation("command_run", program="sleep"):
            raise ValueError("boom")
    lines = read_log_lines(logger)
    assert [line["message"] for line in lines] == ["command_run_start", "command_run_end"]
    assert lines[1]["program"] == "sleep"
    assert lines[1]["duration_ms"] >= 0


def test_formatter_handles_non_json_values():
    record = logging.LogRecord("agentcmd", logging.INFO, __file__, 1, "msg", None, None)
    record.kv = {"path": object()}
    assert json.loads(JSONFormatter().format(record))["message"] == "msg"


def test_get_logger_is_shared(monkeypatch):
    monkeypatch.setattr(logger_module, "_default_logger", None)
    assert get_logger() is get_logger()


def test_command_lifecycle_logged(logger):
    RealCommand("echo", "hi", logger=logger).run()
    messages = [line["message"] for line in read_log_lines(logger)]
    assert messages == ["command_spawned", "command_completed"]
