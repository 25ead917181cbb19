"""
Runtime settings for Sidekick, read from the environment (and .env).

Settings are built once with Settings.from_env() and passed explicitly to
the executor, query client and agent; nothing reads os.environ later.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""
    pass


DEFAULT_MODEL_ID = "gemini-2.5-flash"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must be >= 0, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    osc_host: str = "127.0.0.1"
    osc_port: int = 11000
    osc_response_port: int = 11001
    osc_delay_ms: float = 100.0
    query_timeout_s: float = 0.5
    api_key: Optional[str] = None
    model_id: str = DEFAULT_MODEL_ID
    log_file: str = "logs/sidekick.log"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ (tests)
            dotenv: Load a .env file into os.environ first
        """
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ

        return cls(
            osc_host=env.get("SIDEKICK_OSC_HOST", "").strip() or cls.osc_host,
            osc_port=_env_int(env, "SIDEKICK_OSC_PORT", cls.osc_port),
            osc_response_port=_env_int(env, "SIDEKICK_OSC_RESPONSE_PORT", cls.osc_response_port),
            osc_delay_ms=_env_float(env, "SIDEKICK_OSC_DELAY_MS", cls.osc_delay_ms),
            query_timeout_s=_env_float(env, "SIDEKICK_QUERY_TIMEOUT_SEC", cls.query_timeout_s),
            api_key=env.get("GOOGLE_API_KEY") or None,
            model_id=env.get("SIDEKICK_MODEL", "").strip() or cls.model_id,
            log_file=env.get("SIDEKICK_LOG_FILE", cls.log_file),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with non-None overrides applied (CLI flags)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
