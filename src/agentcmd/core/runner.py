"""Process spawning and background outcome collection.

A spawned process is waited on by a daemon thread which hands exactly one
ExecutionOutcome to a single-slot queue. The hand-off never blocks: if the
slot is taken, the outcome is dropped and the thread exits.
"""

import os
import queue
import shutil
import subprocess
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import IO

from agentcmd.core.exceptions import CommandNotFoundError, OutputFileError


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one process run.

    Attributes:
        output: Combined stdout/stderr, or the redirection target path
        error: Error raised while waiting on the process, if any
        returncode: Exit status once the process has been reaped
    """

    output: str
    error: BaseException | None = None
    returncode: int | None = None


def _has_separator(name: str) -> bool:
    return os.sep in name or bool(os.altsep and os.altsep in name)


def resolve_program(name: str, env: Mapping[str, str]) -> str:
    """Resolve a program name against the PATH of ``env``.

    Names containing a path separator are returned unchanged.

    Raises:
        CommandNotFoundError: If no executable named ``name`` is on PATH
    """
    if _has_separator(name):
        return name
    program = shutil.which(name, path=env.get("PATH", ""))
    if program is None:
        raise CommandNotFoundError(
            "Executable file not found in $PATH", program=name
        )
    return program


def open_output_file(path: str) -> IO[bytes]:
    """Create (or truncate) a redirection target.

    Raises:
        OutputFileError: If the file cannot be created
    """
    try:
        return open(path, "wb")
    except OSError as e:
        raise OutputFileError(f"Failed to create output file: {e}", path=path) from e


def spawn_process(
    name: str,
    args: Sequence[str],
    env: Mapping[str, str],
    stdout: IO[bytes] | None = None,
) -> subprocess.Popen:
    """Start ``name`` with ``args``.

    With ``stdout`` set, the process writes its standard output there and
    its standard error is discarded. Otherwise both streams are piped
    together for capture.

    Raises:
        CommandNotFoundError: If the program cannot be found
        OSError: If the process cannot be started for any other reason
    """
    program = resolve_program(name, env)
    try:
        return subprocess.Popen(
            [name, *args],
            executable=program,
            stdin=subprocess.DEVNULL,
            stdout=stdout if stdout is not None else subprocess.PIPE,
            stderr=subprocess.DEVNULL if stdout is not None else subprocess.STDOUT,
            env=dict(env),
            # Own process group, so a timeout kill reaches grandchildren too
            start_new_session=os.name == "posix",
        )
    except FileNotFoundError as e:
        raise CommandNotFoundError(
            "Executable file not found in $PATH", program=name
        ) from e


def deliver(outcomes: "queue.Queue[ExecutionOutcome]", outcome: ExecutionOutcome) -> bool:
    """Hand ``outcome`` over without blocking.

    Returns:
        False if the slot was already taken and the outcome was dropped
    """
    try:
        outcomes.put_nowait(outcome)
    except queue.Full:
        return False
    return True


def _collect(
    process: subprocess.Popen,
    redirect_target: str | None,
    outcomes: "queue.Queue[ExecutionOutcome]",
) -> None:
    output = ""
    error: BaseException | None = None
    try:
        data, _ = process.communicate()
        if redirect_target is None:
            output = (data or b"").decode("utf-8", errors="replace")
        else:
            output = redirect_target
    except Exception as e:  # handed to the waiting caller
        error = e
    deliver(outcomes, ExecutionOutcome(output, error, process.returncode))


def start_collector(
    process: subprocess.Popen, redirect_target: str | None = None
) -> "queue.Queue[ExecutionOutcome]":
    """Wait for ``process`` on a daemon thread.

    Args:
        process: Freshly spawned process
        redirect_target: Path stdout was redirected to; reported as the output

    Returns:
        Single-slot queue that receives the outcome when the process ends
    """
    outcomes: queue.Queue[ExecutionOutcome] = queue.Queue(maxsize=1)
    thread = threading.Thread(
        target=_collect,
        args=(process, redirect_target, outcomes),
        name=f"agentcmd-collect-{process.pid}",
        daemon=True,
    )
    thread.start()
    return outcomes
