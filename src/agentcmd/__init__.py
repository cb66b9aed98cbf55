"""
agentcmd

Safe execution of external helper programs for long-running agents: hard
timeouts, captured or file-redirected output, and a small error taxonomy.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from agentcmd.core.command import (
    Command,
    CommandFactory,
    get_factory,
    make,
    set_factory,
    use_factory,
)
from agentcmd.core.config import CommandConfig, load_config
from agentcmd.core.exceptions import (
    AgentCmdException,
    CommandNotFoundError,
    CommandTimeoutError,
    ConfigurationError,
    KillProcessError,
    OutputFileError,
)
from agentcmd.core.executors import RealCommand, RealCommandFactory

__all__ = [
    # Version
    "__version__",
    # Commands
    "Command",
    "CommandFactory",
    "RealCommand",
    "RealCommandFactory",
    "get_factory",
    "set_factory",
    "use_factory",
    "make",
    # Config
    "CommandConfig",
    "load_config",
    # Exceptions
    "AgentCmdException",
    "CommandNotFoundError",
    "CommandTimeoutError",
    "KillProcessError",
    "OutputFileError",
    "ConfigurationError",
]
