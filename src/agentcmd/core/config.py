"""Configuration for command execution.

Settings are merged with precedence:
1. Environment variables (highest)
2. Project config (.agentcmd/config.json)
3. Defaults (lowest)
"""

import json
import math
import os
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from agentcmd.core.environment import DEFAULT_FALLBACK_HOME
from agentcmd.core.exceptions import ConfigurationError


def validate_timeout(value: float, key: str = "timeout_s") -> float:
    """Check that ``value`` can be waited on as a timeout, in seconds.

    Raises:
        ConfigurationError: If the value is not a positive finite number within
            ``threading.TIMEOUT_MAX`` (exclusive)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{key} must be a number, got {value!r}", key=key)
    if not math.isfinite(value):
        raise ConfigurationError(f"{key} must be finite, got {value}", key=key)
    if value <= 0:
        raise ConfigurationError(f"{key} must be > 0, got {value}", key=key)
    if value >= threading.TIMEOUT_MAX:
        raise ConfigurationError(
            f"{key} must be < {threading.TIMEOUT_MAX:g}, got {value}", key=key
        )
    return value


@dataclass
class CommandConfig:
    """Settings applied to every command a factory makes.

    Attributes:
        timeout_s: Wall-clock limit per run, in seconds
        fallback_home: HOME given to processes when the agent has none
        bin_dir: Directory prepended to PATH (default: ``<executable dir>/bin``)
    """

    timeout_s: float = 60.0
    fallback_home: str = DEFAULT_FALLBACK_HOME
    bin_dir: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        validate_timeout(self.timeout_s)
        if not self.fallback_home:
            raise ConfigurationError("fallback_home must not be empty", key="fallback_home")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def load_project_config(project_root: Path | None = None) -> CommandConfig | None:
    """Load project configuration from .agentcmd/config.json.

    Args:
        project_root: Directory containing .agentcmd/ (default: current directory)

    Returns:
        CommandConfig if the file exists, None otherwise

    Raises:
        ConfigurationError: If the file is not valid JSON
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / ".agentcmd" / "config.json"

    if not config_path.exists():
        return None

    try:
        with config_path.open() as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in project config: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load project config: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Project config must be a JSON object")
    return CommandConfig.from_dict(data)


def load_env_overrides() -> dict[str, Any]:
    """Load configuration overrides from environment variables.

    Supported environment variables:
    - AGENTCMD_TIMEOUT: Per-run timeout in seconds
    - AGENTCMD_FALLBACK_HOME: HOME for processes started without one
    - AGENTCMD_BIN_DIR: Directory prepended to PATH

    Returns:
        Dictionary of configuration overrides
    """
    overrides: dict[str, Any] = {}

    if timeout_str := os.getenv("AGENTCMD_TIMEOUT"):
        try:
            overrides["timeout_s"] = float(timeout_str)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid AGENTCMD_TIMEOUT: {timeout_str}", key="timeout_s"
            ) from e

    if home := os.getenv("AGENTCMD_FALLBACK_HOME"):
        overrides["fallback_home"] = home

    if bin_dir := os.getenv("AGENTCMD_BIN_DIR"):
        overrides["bin_dir"] = bin_dir

    return overrides


def merge_configs(
    base: CommandConfig,
    project: CommandConfig | None = None,
    env_overrides: dict[str, Any] | None = None,
) -> CommandConfig:
    """Merge configurations with precedence: env > project > base."""
    merged = base.to_dict()
    defaults = CommandConfig().to_dict()

    if project:
        for key, value in project.to_dict().items():
            # Only override if the project value differs from default
            if value != defaults.get(key):
                merged[key] = value

    if env_overrides:
        merged.update(env_overrides)

    return CommandConfig.from_dict(merged)


def load_config(project_root: Path | None = None) -> CommandConfig:
    """Load and merge all configuration sources.

    Raises:
        ConfigurationError: If any config source is invalid
    """
    return merge_configs(
        CommandConfig(),
        load_project_config(project_root),
        load_env_overrides(),
    )
