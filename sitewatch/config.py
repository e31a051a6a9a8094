"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Each Settings instance reads the process
environment when it is built, so entry points (the admin script, tests)
call get_settings() to pick up the current environment.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:
    # Durable key-value store (root-level data directory by default)
    database_url: str = _env(
        "SITEWATCH_DATABASE_URL",
        "sqlite:///" + os.path.join(PROJECT_ROOT, "data", "sitewatch.db"),
    )

    # Slot names
    storage_key: str = _env("SITEWATCH_STORAGE_KEY", "wsi-admin")
    theme_key: str = _env("SITEWATCH_THEME_KEY", "theme-mode")
    color_key: str = _env("SITEWATCH_COLOR_KEY", "primary-color")

    # Logging
    log_level: str = _env("SITEWATCH_LOG_LEVEL", "INFO")


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
