"""Exception hierarchy with error codes for agentcmd.

Every failure a command run can classify is raised as a subclass of
AgentCmdException carrying a stable error code and structured metadata.
Errors that the runner cannot classify (permission denied at spawn, bad
arguments, etc.) are not wrapped and propagate unchanged.
"""

from dataclasses import dataclass, field
from typing import Any

# Standard error codes
E_NOT_FOUND = "E_NOT_FOUND"
E_TIMEOUT = "E_TIMEOUT"
E_KILL_FAILED = "E_KILL_FAILED"
E_OUTPUT_FILE = "E_OUTPUT_FILE"
E_VALIDATION = "E_VALIDATION"


@dataclass
class AgentCmdException(Exception):  # noqa: N818
    """Base exception for all agentcmd-specific errors.

    Provides structured error handling with error codes and metadata for
    consistent error reporting across callers.
    """

    message: str
    error_code: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)


@dataclass
class CommandNotFoundError(AgentCmdException):
    """The named program does not exist on the effective search path."""

    program: str = ""

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_NOT_FOUND
        if self.program:
            self.metadata["program"] = self.program
        super().__post_init__()


@dataclass
class CommandTimeoutError(AgentCmdException):
    """The process outlived its timeout and was killed."""

    program: str = ""
    timeout: float = 0.0

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_TIMEOUT
        if self.program:
            self.metadata["program"] = self.program
        if self.timeout:
            self.metadata["timeout_s"] = self.timeout
        super().__post_init__()


@dataclass
class KillProcessError(AgentCmdException):
    """The process outlived its timeout and could not be killed.

    When this is raised the child process and the thread waiting on it are
    still alive; nothing in agentcmd reaps them afterwards. Repeated
    occurrences exhaust the process table, so callers should escalate
    (e.g. restart the owning module) rather than retry.
    """

    program: str = ""
    pid: int | None = None

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_KILL_FAILED
        if self.program:
            self.metadata["program"] = self.program
        if self.pid is not None:
            self.metadata["pid"] = self.pid
        super().__post_init__()


@dataclass
class OutputFileError(AgentCmdException):
    """The redirection target could not be created; nothing was spawned."""

    path: str = ""

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_OUTPUT_FILE
        if self.path:
            self.metadata["path"] = self.path
        super().__post_init__()


@dataclass
class ConfigurationError(AgentCmdException):
    """Error in agentcmd configuration.

    Raised for invalid config values or unreadable config files.
    """

    key: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with configuration-specific metadata."""
        if not self.error_code:
            self.error_code = E_VALIDATION
        if self.key:
            self.metadata["config_key"] = self.key
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


def format_error_for_user(exception: AgentCmdException) -> str:
    """Format exception for user-friendly display.

    Args:
        exception: The agentcmd exception to format

    Returns:
        Human-readable error message without internal details
    """
    if isinstance(exception, CommandNotFoundError):
        if exception.program:
            return f"Command '{exception.program}' not found: {exception.message}"
        return f"Command not found: {exception.message}"

    if isinstance(exception, CommandTimeoutError):
        if exception.program:
            return (
                f"Command '{exception.program}' timed out after "
                f"{exception.timeout:g}s: {exception.message}"
            )
        return f"Command timed out: {exception.message}"

    if isinstance(exception, KillProcessError):
        if exception.pid is not None:
            return f"Process {exception.pid} could not be killed: {exception.message}"
        return f"Process could not be killed: {exception.message}"

    if isinstance(exception, OutputFileError):
        if exception.path:
            return f"Cannot create output file '{exception.path}': {exception.message}"
        return f"Cannot create output file: {exception.message}"

    if isinstance(exception, ConfigurationError):
        if exception.key:
            return f"Configuration error '{exception.key}': {exception.message}"
        return f"Configuration error: {exception.message}"

    return str(exception.message)


def format_error_for_log(exception: AgentCmdException) -> dict[str, Any]:
    """Format exception for structured logging.

    Args:
        exception: The agentcmd exception to format

    Returns:
        Dictionary with structured error information for logs
    """
    log_data: dict[str, Any] = {
        "error_type": type(exception).__name__,
        "message": exception.message,
        "error_code": exception.error_code,
    }

    if exception.metadata:
        log_data["metadata"] = exception.metadata

    if isinstance(exception, (CommandNotFoundError, CommandTimeoutError, KillProcessError)):
        if exception.program:
            log_data["program"] = exception.program

    if isinstance(exception, CommandTimeoutError):
        log_data["timeout_s"] = exception.timeout

    elif isinstance(exception, KillProcessError):
        if exception.pid is not None:
            log_data["pid"] = exception.pid

    elif isinstance(exception, OutputFileError):
        if exception.path:
            log_data["path"] = exception.path

    elif isinstance(exception, ConfigurationError):
        if exception.key:
            log_data["config_key"] = exception.key
        if exception.reason:
            log_data["reason"] = exception.reason

    return log_data
