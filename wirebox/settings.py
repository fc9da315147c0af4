"""Container settings.

Provides the small amount of runtime configuration the container
needs: log output and whether to verify the graph on build.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class ContainerSettings:
    """Settings for building containers."""

    log_level: str = "INFO"
    json_logs: bool = False
    verify_on_build: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        env_file: Path | None = None,
    ) -> ContainerSettings:
        """Load settings from environment variables.

        Values from ``env_file`` are applied first; the environment
        overrides them.

        Args:
            environ: Mapping to read (``os.environ`` if not provided)
            env_file: Optional ``KEY=VALUE`` file

        Returns:
            ContainerSettings instance
        """
        if environ is None:
            environ = os.environ

        values: dict[str, str] = {}
        if env_file is not None:
            values.update(cls._load_env_file(env_file))
        values.update({k: v for k, v in environ.items() if k.startswith("WIREBOX_")})

        return cls(
            log_level=values.get("WIREBOX_LOG_LEVEL", "INFO").upper(),
            json_logs=_flag(values.get("WIREBOX_JSON_LOGS")),
            verify_on_build=_flag(values.get("WIREBOX_VERIFY_ON_BUILD")),
        )

    @staticmethod
    def _load_env_file(env_file: Path) -> dict[str, str]:
        """Load a shell-style env file."""
        if not env_file.exists():
            return {}

        values: dict[str, str] = {}
        for line in env_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[7:]
            if "=" in line:
                key, value = line.split("=", 1)
                values[key.strip()] = value.strip().strip('"').strip("'")

        return values


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY
