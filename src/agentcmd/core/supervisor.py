"""Races a running process against its deadline."""

import os
import queue
import signal
import subprocess

from agentcmd.core.exceptions import CommandTimeoutError, KillProcessError
from agentcmd.core.runner import ExecutionOutcome


def kill_process(process: subprocess.Popen) -> None:
    """Kill ``process`` and, on POSIX, the rest of its process group.

    Raises:
        ProcessLookupError: If the process has already exited and been reaped;
            its pid may belong to another process by now
        OSError: If the signal could not be delivered
    """
    if process.poll() is not None:
        raise ProcessLookupError(f"process {process.pid} already exited")
    if os.name == "posix":
        os.killpg(process.pid, signal.SIGKILL)
    else:
        process.kill()


def supervise(
    process: subprocess.Popen,
    outcomes: "queue.Queue[ExecutionOutcome]",
    timeout: float,
    program: str = "",
) -> ExecutionOutcome:
    """Wait for the process outcome for at most ``timeout`` seconds.

    Args:
        process: Process being waited on by a collector thread
        outcomes: Queue the collector delivers to
        timeout: Seconds to wait before killing the process
        program: Program name used in error reports

    Returns:
        The outcome of a process that finished in time

    Raises:
        CommandTimeoutError: If the process was killed after the timeout, or
            exited on its own between the deadline and the kill
        KillProcessError: If the process could not be killed after the timeout.
            The process and its collector thread are left running.
        BaseException: The error carried by the outcome, unchanged
    """
    try:
        outcome = outcomes.get(timeout=timeout)
    except queue.Empty:
        try:
            kill_process(process)
        except ProcessLookupError:
            # Gone already, nothing leaked
            pass
        except OSError as e:
            raise KillProcessError(
                f"Failed to kill process after timeout: {e}",
                program=program,
                pid=process.pid,
            ) from e
        raise CommandTimeoutError(
            f"Timeout after {timeout:g} seconds", program=program, timeout=timeout
        ) from None

    if outcome.error is not None:
        raise outcome.error
    return outcome
