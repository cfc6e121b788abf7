"""Environment driven settings."""

import dataclasses
import os
from typing import Mapping, Optional

DEFAULT_PORT = 3000
DEFAULT_POLL_MS = 1000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_level(value: Optional[str]) -> str:
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else "INFO"


@dataclasses.dataclass(frozen=True)
class Settings:
    """Server configuration.

    remote_url: remote source polled for updates, None disables polling
    poll_ms: delay between the end of one poll and the start of the next
    """

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    data_file: str = os.path.join("data", "state.json")
    remote_url: Optional[str] = None
    poll_ms: int = DEFAULT_POLL_MS
    log_level: str = "INFO"

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds"""
        return max(self.poll_ms, 0) / 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        remote_url = (env.get("REMOTE_SOURCE_URL") or "").strip()
        return cls(
            host=env.get("HOST", cls.host),
            port=_env_int(env.get("PORT"), DEFAULT_PORT),
            data_file=env.get("DATA_FILE") or cls.data_file,
            remote_url=remote_url or None,
            poll_ms=_env_int(env.get("REMOTE_POLL_MS"), DEFAULT_POLL_MS),
            log_level=_env_level(env.get("LOG_LEVEL")),
        )
