"""Per-invocation environment for spawned helper programs.

Helper binaries ship in a ``bin`` directory next to the agent executable, so
every spawned process gets that directory prepended to its PATH. The result
is a fresh mapping handed to the spawn call; ``os.environ`` of the agent
itself is never modified.
"""

import os
import sys
from collections.abc import Mapping

DEFAULT_FALLBACK_HOME = "/root"


def executable_dir() -> str:
    """Return the directory holding the running executable.

    Falls back to the directory of ``sys.argv[0]`` when the interpreter
    cannot report its own path.
    """
    if sys.executable:
        return os.path.dirname(os.path.realpath(sys.executable))
    argv0 = sys.argv[0] if sys.argv else ""
    return os.path.dirname(os.path.abspath(argv0))


def default_bin_dir() -> str:
    """Directory where colocated helper binaries live."""
    return os.path.join(executable_dir(), "bin")


def search_path(base_path: str | None, bin_dir: str) -> str:
    """Prepend ``bin_dir`` to a PATH string.

    Args:
        base_path: Inherited PATH value (may be empty or None)
        bin_dir: Directory to search first

    Returns:
        The augmented PATH
    """
    if not base_path:
        return bin_dir
    return bin_dir + os.pathsep + base_path


def prepare_environment(
    base: Mapping[str, str] | None = None,
    bin_dir: str | None = None,
    fallback_home: str = DEFAULT_FALLBACK_HOME,
) -> dict[str, str]:
    """Build the environment for one spawned process.

    Args:
        base: Environment to inherit (defaults to ``os.environ``)
        bin_dir: Directory to put first on PATH (defaults to ``default_bin_dir()``)
        fallback_home: HOME value injected when the inherited HOME is unset or empty

    Returns:
        A new dict; ``base`` is left untouched
    """
    env = dict(os.environ if base is None else base)
    env["PATH"] = search_path(env.get("PATH"), bin_dir or default_bin_dir())
    # Some helpers abort with "HOME: parameter not set"
    if not env.get("HOME"):
        env["HOME"] = fallback_home
    return env
