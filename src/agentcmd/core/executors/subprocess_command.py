"""OS-backed commands.

Each run() spawns a fresh process, waits for it on a background thread and
kills it if it outlives the command's timeout. Output is returned only once
the process has ended; nothing is streamed.
"""

from contextlib import ExitStack

from agentcmd.core.command import Command, CommandFactory
from agentcmd.core.config import CommandConfig, validate_timeout
from agentcmd.core.environment import DEFAULT_FALLBACK_HOME, prepare_environment
from agentcmd.core.exceptions import (
    CommandTimeoutError,
    KillProcessError,
)
from agentcmd.core.logger import AgentCmdLogger, get_logger
from agentcmd.core.redirection import parse_redirection
from agentcmd.core.runner import open_output_file, spawn_process, start_collector
from agentcmd.core.supervisor import supervise

# Used by commands created without an explicit timeout
DEFAULT_TIMEOUT = 60.0


class RealCommand(Command):
    """Runs a program as a child process under a wall-clock timeout.

    The program name and arguments are fixed at construction. ``timeout``
    may be changed before the first run. A ``>path`` argument redirects the
    program's stdout to ``path`` (see agentcmd.core.redirection).

    Example:
        cmd = RealCommand("pt-summary")
        cmd.timeout = 30
        output = cmd.run()
    """

    def __init__(
        self,
        name: str,
        *args: str,
        timeout: float | None = None,
        bin_dir: str | None = None,
        fallback_home: str = DEFAULT_FALLBACK_HOME,
        logger: AgentCmdLogger | None = None,
    ) -> None:
        """Initialize command.

        Args:
            name: Program name, looked up on PATH unless it contains a separator
            *args: Program arguments, optionally ending with a ``>path`` token
            timeout: Seconds before the process is killed (default: DEFAULT_TIMEOUT)
            bin_dir: Directory searched before PATH (default: ``<executable dir>/bin``)
            fallback_home: HOME for the process when the agent has none
            logger: Logger for lifecycle events (default: shared agentcmd logger)
        """
        self._name = name
        self._args = tuple(args)
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout
        self.bin_dir = bin_dir
        self.fallback_home = fallback_home
        self.logger = logger or get_logger()
        self.returncode: int | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def args(self) -> tuple[str, ...]:
        return self._args

    @property
    def timeout(self) -> float:
        return self._timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        self._timeout = validate_timeout(value, key="timeout")

    def __repr__(self) -> str:
        return f"RealCommand(name={self._name!r}, args={self._args!r}, timeout={self._timeout!r})"

    def run(self) -> str:
        """Run the program and wait for it to finish or time out.

        A non-zero exit status is not an error; it is left in ``returncode``.

        Returns:
            Combined stdout/stderr, or the redirection target path

        Raises:
            CommandNotFoundError: If the program is not on the search path
            CommandTimeoutError: If the program was killed after the timeout
            KillProcessError: If the program could not be killed after the timeout.
                The process keeps running; nothing reaps it later.
            OutputFileError: If the redirection target could not be created
            OSError: If spawning failed for any other reason
        """
        self.returncode = None
        env = prepare_environment(bin_dir=self.bin_dir, fallback_home=self.fallback_home)
        redirection = parse_redirection(self._args)

        with ExitStack() as stack:
            stdout = None
            if redirection.redirected:
                stdout = stack.enter_context(open_output_file(redirection.target))

            process = spawn_process(self._name, redirection.args, env, stdout=stdout)
            self.logger.debug(
                "command_spawned",
                program=self._name,
                pid=process.pid,
                redirect=redirection.target,
                timeout_s=self._timeout,
            )

            outcomes = start_collector(process, redirection.target)
            try:
                outcome = supervise(process, outcomes, self._timeout, program=self._name)
            except CommandTimeoutError:
                self.logger.debug("command_killed", program=self._name, pid=process.pid)
                raise
            except KillProcessError:
                self.logger.debug("command_kill_failed", program=self._name, pid=process.pid)
                raise

        self.returncode = outcome.returncode
        self.logger.debug(
            "command_completed",
            program=self._name,
            pid=process.pid,
            returncode=outcome.returncode,
        )
        return outcome.output


class RealCommandFactory(CommandFactory):
    """Makes RealCommands sharing one configuration."""

    def __init__(
        self,
        config: CommandConfig | None = None,
        logger: AgentCmdLogger | None = None,
    ) -> None:
        self.config = config or CommandConfig()
        self.logger = logger

    def make(self, name: str, *args: str) -> RealCommand:
        return RealCommand(
            name,
            *args,
            timeout=self.config.timeout_s,
            bin_dir=self.config.bin_dir,
            fallback_home=self.config.fallback_home,
            logger=self.logger,
        )
