"""
Runtime configuration

Process-level knobs read from DAYGRID_* environment variables. main.py loads
.env files (python-dotenv) before anything reads this, so values may come
from the shell or from an .env file in the install or user data directory.

User-facing preferences (colors, layout, grid mode) are not configured here;
they live in DayGridSettings and are persisted by the settings manager.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_RENDER_BUDGET = 3500
DEFAULT_PIXEL_BUDGET = 12_000_000
DEFAULT_FRAME_INTERVAL_MS = 16

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(minimum, int(raw))
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class RuntimeConfig:
    """Environment-derived configuration, resolved once at startup."""
    log_level: str = "INFO"
    file_logging: bool = False
    render_budget: int = DEFAULT_RENDER_BUDGET
    pixel_budget: int = DEFAULT_PIXEL_BUDGET
    frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        return cls(
            log_level=os.getenv("DAYGRID_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            file_logging=_env_bool("DAYGRID_FILE_LOGGING", False),
            render_budget=_env_int("DAYGRID_RENDER_BUDGET", DEFAULT_RENDER_BUDGET),
            pixel_budget=_env_int("DAYGRID_PIXEL_BUDGET", DEFAULT_PIXEL_BUDGET),
            frame_interval_ms=_env_int("DAYGRID_FRAME_INTERVAL_MS", DEFAULT_FRAME_INTERVAL_MS, minimum=0),
        )


def load_env_files(install_dir: Optional[Path], user_dir: Optional[Path]) -> None:
    """
    Load .env files. Priority: app-local .env, then the user data .env (highest).
    """
    if install_dir is not None:
        local_env = install_dir / ".env"
        if local_env.exists():
            load_dotenv(local_env)

    if user_dir is not None:
        user_env = user_dir / ".env"
        if user_env.exists():
            load_dotenv(user_env, override=True)
