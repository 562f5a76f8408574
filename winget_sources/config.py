"""Configuration for the winget runner.

Values are resolved in order, later sources winning:
defaults, YAML config file, environment, explicit overrides (CLI flags).

Example config file::

    executable: C:\\Users\\me\\AppData\\Local\\Microsoft\\WindowsApps\\winget.exe
    timeout: 300
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml


ENV_EXECUTABLE = "WINGET_SOURCES_EXECUTABLE"
ENV_TIMEOUT = "WINGET_SOURCES_TIMEOUT"


def _parse_timeout(value, origin: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timeout {value!r} in {origin}")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeout {value!r} in {origin}") from None
    if not math.isfinite(timeout):
        raise ValueError(f"Timeout must be finite, got {timeout} in {origin}")
    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout} in {origin}")
    return timeout


@dataclass
class SourceManagerConfig:
    """Settings used to build a SourceManager.

    ``executable`` of None means auto-detect with find_winget().
    """

    KNOWN_KEYS = {"executable", "timeout"}

    executable: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SourceManagerConfig":
        """Load settings from a YAML file.

        Raises:
            ValueError: If the file is not a mapping or has unknown keys
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in config file {path}: {e}") from e
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        unknown = set(data) - cls.KNOWN_KEYS
        if unknown:
            raise ValueError(
                f"Unknown keys in config file {path}: {', '.join(sorted(unknown))}"
            )

        config = cls()
        if data.get("executable"):
            config.executable = str(data["executable"])
        config.timeout = _parse_timeout(data.get("timeout"), str(path))
        return config

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "SourceManagerConfig":
        """Override settings from WINGET_SOURCES_* environment variables."""
        env = os.environ if environ is None else environ
        if env.get(ENV_EXECUTABLE):
            self.executable = env[ENV_EXECUTABLE]
        if env.get(ENV_TIMEOUT):
            self.timeout = _parse_timeout(env[ENV_TIMEOUT], ENV_TIMEOUT)
        return self


def load_config(path: Optional[Union[str, Path]] = None,
                executable: Optional[str] = None,
                timeout: Optional[float] = None,
                environ: Optional[Mapping[str, str]] = None) -> SourceManagerConfig:
    """Resolve the effective configuration."""
    config = SourceManagerConfig.from_file(path) if path else SourceManagerConfig()
    config.apply_env(environ)
    if executable:
        config.executable = executable
    if timeout is not None:
        config.timeout = _parse_timeout(timeout, "--timeout")
    return config
