"""Core modules for agentcmd.

Command abstraction, environment and redirection handling, process running
and timeout supervision, plus configuration, logging and exceptions.
"""

from .command import Command, CommandFactory, get_factory, make, set_factory, use_factory
from .config import CommandConfig, load_config
from .environment import prepare_environment
from .exceptions import (
    AgentCmdException,
    CommandNotFoundError,
    CommandTimeoutError,
    ConfigurationError,
    KillProcessError,
    OutputFileError,
)
from .executors import DEFAULT_TIMEOUT, RealCommand, RealCommandFactory
from .logger import AgentCmdLogger
from .redirection import Redirection, parse_redirection

__all__ = [
    "Command",
    "CommandFactory",
    "get_factory",
    "set_factory",
    "use_factory",
    "make",
    "CommandConfig",
    "load_config",
    "prepare_environment",
    "AgentCmdException",
    "CommandNotFoundError",
    "CommandTimeoutError",
    "ConfigurationError",
    "KillProcessError",
    "OutputFileError",
    "DEFAULT_TIMEOUT",
    "RealCommand",
    "RealCommandFactory",
    "AgentCmdLogger",
    "Redirection",
    "parse_redirection",
]
