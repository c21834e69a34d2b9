"""Runtime configuration helpers for the studio-mcp server."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()  # no-op when .env is missing

settings_logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _load_env_json(name: str) -> Dict[str, Any]:
    """Return JSON data from the environment when available."""
    raw = os.environ.get(name)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        settings_logger.warning(f"Ignoring invalid JSON in {name}")
    return {}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for the MCP server."""

    mcp_server_name: str
    log_level: str
    command_timeout_seconds: float
    working_directory: Optional[Path]
    extra_env: Dict[str, str]

    @classmethod
    def load(cls) -> "Settings":
        mcp_server_name = os.environ.get("STUDIO_MCP_NAME", "studio-mcp")

        log_level = os.environ.get("STUDIO_MCP_LOG_LEVEL", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            log_level = "WARNING"

        command_timeout_seconds = max(0.0, _float_env("STUDIO_MCP_COMMAND_TIMEOUT_SECONDS", 0.0))

        workdir_raw = os.environ.get("STUDIO_MCP_WORKDIR")
        working_directory = Path(workdir_raw).expanduser() if workdir_raw else None

        extra_env = {
            str(key): str(value)
            for key, value in _load_env_json("STUDIO_MCP_EXTRA_ENV").items()
        }

        return cls(
            mcp_server_name=mcp_server_name,
            log_level=log_level,
            command_timeout_seconds=command_timeout_seconds,
            working_directory=working_directory,
            extra_env=extra_env,
        )

    @property
    def command_timeout(self) -> Optional[float]:
        """Timeout in seconds for one command, or None when disabled."""
        return self.command_timeout_seconds or None

    def with_overrides(self, **changes: Any) -> "Settings":
        return replace(self, **changes)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


settings = Settings.load()
