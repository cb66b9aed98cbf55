"""Command implementations backed by the operating system."""

from agentcmd.core.executors.subprocess_command import (
    DEFAULT_TIMEOUT,
    RealCommand,
    RealCommandFactory,
)

__all__ = ["DEFAULT_TIMEOUT", "RealCommand", "RealCommandFactory"]
