"""Test doubles for code that runs commands through the factory.

Install a FakeCommandFactory with ``agentcmd.core.command.use_factory`` and
queue up the results the code under test should see:

    factory = FakeCommandFactory()
    factory.queue(FakeCommand(output="ok\\n"))
    with use_factory(factory):
        collect_summary()
    assert factory.calls == [("pt-summary", ())]
"""

from collections import deque

from agentcmd.core.command import Command, CommandFactory


class FakeCommand(Command):
    """Returns a canned output or raises a canned error, without spawning."""

    def __init__(self, output: str = "", error: BaseException | None = None) -> None:
        self.output = output
        self.error = error
        self.run_count = 0

    def run(self) -> str:
        self.run_count += 1
        if self.error is not None:
            raise self.error
        return self.output


class FakeCommandFactory(CommandFactory):
    """Hands out queued FakeCommands and records what was asked for.

    When the queue is empty a fresh ``FakeCommand(default_output)`` is made.
    """

    def __init__(self, default_output: str = "") -> None:
        self.default_output = default_output
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self.made: list[FakeCommand] = []
        self._pending: deque[FakeCommand] = deque()

    def queue(self, *commands: FakeCommand) -> None:
        self._pending.extend(commands)

    def make(self, name: str, *args: str) -> FakeCommand:
        self.calls.append((name, args))
        command = self._pending.popleft() if self._pending else FakeCommand(self.default_output)
        self.made.append(command)
        return command
