"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Values are read when a Settings instance is
built, so overrides written with `save_settings` are picked up by the next
`get_settings()` call.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()


def _env_str(name: str, default: Optional[str] = None):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _env_float(name: str, default: float):
    return field(default_factory=lambda: float(os.getenv(name, str(default))))


def _env_flag(name: str, default: bool):
    fallback = "1" if default else "0"
    return field(
        default_factory=lambda: os.getenv(name, fallback).strip().lower()
        in ("1", "true", "yes", "on")
    )


@dataclass
class Settings:
    # Input handling
    debounce_ms: int = _env_int("LAUNCHER_DEBOUNCE_MS", 300)

    # Backend call bounds (seconds, 0 disables)
    search_timeout_s: float = _env_float("LAUNCHER_SEARCH_TIMEOUT_S", 10.0)
    index_timeout_s: float = _env_float("LAUNCHER_INDEX_TIMEOUT_S", 600.0)
    assistant_timeout_s: float = _env_float("LAUNCHER_ASSISTANT_TIMEOUT_S", 120.0)

    # Session behaviour
    history_window: int = _env_int("LAUNCHER_HISTORY_WINDOW", 5)
    fetch_icons: bool = _env_flag("LAUNCHER_FETCH_ICONS", True)
    icon_cache: bool = _env_flag("LAUNCHER_ICON_CACHE", False)
    probe_on_start: bool = _env_flag("LAUNCHER_PROBE_ON_START", True)
    assistant_ask_on_type: bool = _env_flag("LAUNCHER_ASSISTANT_ASK_ON_TYPE", False)

    # Assistant
    assistant_provider: str = _env_str("LAUNCHER_ASSISTANT_PROVIDER", "backend")
    assistant_model: str = _env_str("LAUNCHER_ASSISTANT_MODEL", "gpt-4.1-mini")
    assistant_instructions: str = _env_str(
        "LAUNCHER_ASSISTANT_INSTRUCTIONS", "Give a brief and concise answer."
    )
    assistant_temperature: float = _env_float("LAUNCHER_ASSISTANT_TEMPERATURE", 0.7)
    openai_api_key: Optional[str] = _env_str("OPENAI_API_KEY")
    openai_base_url: Optional[str] = _env_str("OPENAI_BASE_URL")

    # Logging
    log_level: str = _env_str("LAUNCHER_LOG_LEVEL", "INFO")

    @property
    def debounce_seconds(self) -> float:
        return max(self.debounce_ms, 0) / 1000.0


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
