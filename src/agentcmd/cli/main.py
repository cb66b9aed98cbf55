"""Command-line interface for agentcmd.

Implements click-based CLI for running a helper program the way the agent
would, and for inspecting the environment and redirection it would use.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from agentcmd.core.command import make, set_factory
from agentcmd.core.config import CommandConfig, load_config
from agentcmd.core.environment import prepare_environment
from agentcmd.core.exceptions import (
    AgentCmdException,
    CommandNotFoundError,
    CommandTimeoutError,
    ConfigurationError,
    KillProcessError,
    format_error_for_user,
)
from agentcmd.core.executors import RealCommandFactory
from agentcmd.core.logger import get_logger
from agentcmd.core.redirection import parse_redirection

# Load .env file from current directory or parent directories
load_dotenv()

console = Console(stderr=True)

# Same conventions as timeout(1) and the shell
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124
EXIT_KILL_FAILED = 125


def exit_code_for(error: AgentCmdException) -> int:
    if isinstance(error, CommandNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, CommandTimeoutError):
        return EXIT_TIMEOUT
    if isinstance(error, KillProcessError):
        return EXIT_KILL_FAILED
    return 1


@click.group()
@click.version_option(version="0.1.0", prog_name="agentcmd")
@click.option("--project", "-p", default=".", help="Directory holding .agentcmd/config.json")
@click.pass_context
def cli(ctx: click.Context, project: str) -> None:
    """Run helper programs with a hard timeout."""
    try:
        config = load_config(Path(project))
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)
    ctx.obj = config
    set_factory(RealCommandFactory(config, logger=get_logger()))


@cli.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--timeout", "-t", type=float, default=None, help="Seconds before the program is killed")
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run(timeout: float | None, program: str, args: tuple[str, ...]) -> None:
    """Run PROGRAM with ARGS and print its output.

    A final argument of the form '>FILE' writes the program's stdout to FILE.

    Examples:
        agentcmd run uname -a
        agentcmd run --timeout 5 pt-summary '>/tmp/summary.txt'
    """
    command = make(program, *args)
    try:
        if timeout is not None:
            command.timeout = timeout
        output = command.run()
    except AgentCmdException as e:
        console.print(f"[bold red]Error:[/bold red] {format_error_for_user(e)}")
        sys.exit(exit_code_for(e))
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    click.echo(output, nl=False)


@cli.command()
@click.pass_obj
def env(config: CommandConfig) -> None:
    """Show the PATH and HOME a spawned program would get."""
    prepared = prepare_environment(bin_dir=config.bin_dir, fallback_home=config.fallback_home)
    click.echo(f"PATH={prepared['PATH']}")
    click.echo(f"HOME={prepared['HOME']}")


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def parse(args: tuple[str, ...]) -> None:
    """Show how ARGS split into program arguments and a redirection target."""
    redirection = parse_redirection(args)

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Argument")
    for i, arg in enumerate(redirection.args):
        table.add_row(str(i), arg)
    Console().print(table)

    target = redirection.target if redirection.redirected else "(none, output captured)"
    click.echo(f"Redirect: {target}")


if __name__ == "__main__":
    cli()
