"""Shared fixtures for agentcmd tests."""

import pytest

from agentcmd.core.command import set_factory


@pytest.fixture(autouse=True)
def reset_factory():
    """Leave no process-wide factory behind between tests."""
    yield
    set_factory(None)


@pytest.fixture
def helper_bin(tmp_path):
    """Directory with an executable helper script, used as bin_dir."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "agentcmd-helper"
    script.write_text("#!/bin/sh\necho helper \"$@\"\n")
    script.chmod(0o755)
    return bin_dir
