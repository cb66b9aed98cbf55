"""Command abstraction for running helper programs.

Callers never spawn processes directly: they ask the process-wide
CommandFactory for a Command and run it. The agent installs a
RealCommandFactory once at startup; tests install a fake factory so call
sites stay untouched while no real process is started.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from agentcmd.core.exceptions import ConfigurationError


class Command(ABC):
    """Something that can be run once or repeatedly, producing output."""

    @abstractmethod
    def run(self) -> str:
        """Run the command to completion.

        Returns:
            Combined stdout/stderr, or the redirection target path when the
            command's output was written to a file

        Raises:
            CommandNotFoundError: If the program is not on the search path
            CommandTimeoutError: If the program outlived its timeout and was killed
            KillProcessError: If the program outlived its timeout and could not be killed
            OutputFileError: If the redirection target could not be created
            OSError: If spawning failed for any other reason
        """
        ...


class CommandFactory(ABC):
    """Builds commands from a program name and its arguments."""

    @abstractmethod
    def make(self, name: str, *args: str) -> Command:
        """Create a command for ``name`` invoked with ``args``."""
        ...


_factory: CommandFactory | None = None


def set_factory(factory: CommandFactory | None) -> None:
    """Install the process-wide factory (done once at startup)."""
    global _factory
    _factory = factory


def get_factory() -> CommandFactory:
    """Return the process-wide factory.

    Raises:
        ConfigurationError: If no factory has been installed
    """
    if _factory is None:
        raise ConfigurationError(
            "No command factory installed; call set_factory() at startup",
            key="factory",
        )
    return _factory


def make(name: str, *args: str) -> Command:
    """Shortcut for ``get_factory().make(name, *args)``."""
    return get_factory().make(name, *args)


@contextmanager
def use_factory(factory: CommandFactory) -> Iterator[CommandFactory]:
    """Temporarily install ``factory``, restoring the previous one on exit."""
    global _factory
    previous = _factory
    _factory = factory
    try:
        yield factory
    finally:
        _factory = previous
