"""Output redirection detection.

``>`` is a shell feature, not part of a command. Since commands are spawned
without a shell, a ``>``-prefixed argument is picked out here and turned
into a file the process's stdout is written to.

The first ``>``-prefixed argument wins and every argument after it is
dropped, so ``["-v", ">out.txt", "-x"]`` runs with ``["-v"]`` only. Callers
relying on this are expected to keep the redirection token last.
"""

from collections.abc import Iterable
from dataclasses import dataclass

REDIRECT_PREFIX = ">"


@dataclass(frozen=True)
class Redirection:
    """Arguments split from an optional redirection target.

    Attributes:
        args: Arguments to pass to the process
        target: File to write stdout to, or None to capture output
    """

    args: tuple[str, ...]
    target: str | None = None

    @property
    def redirected(self) -> bool:
        return self.target is not None


def parse_redirection(args: Iterable[str]) -> Redirection:
    """Split a redirection token off an argument list.

    Args:
        args: Arguments as given to the command

    Returns:
        Redirection with the real arguments and the trimmed target path
    """
    kept: list[str] = []
    target = None
    for arg in args:
        if arg.startswith(REDIRECT_PREFIX):
            # An empty target ("> ") means no file, same as no token
            target = arg[len(REDIRECT_PREFIX) :].strip() or None
            break
        kept.append(arg)
    return Redirection(args=tuple(kept), target=target)
