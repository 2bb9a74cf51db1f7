# pointnow_console/core/config.py
# SPDX-License-Identifier: Apache-2.0
"""
Centralized, immutable application configuration for the PointNow console.

This module defines a frozen `Settings` dataclass whose fields are populated
from environment variables (loaded via python-dotenv if a `.env` file is
present). The resulting singleton `settings` is imported by other modules to
avoid scattering `os.getenv` calls throughout the codebase.

Design goals
------------
- **Single source of truth**: All tunables live here; other modules consume
  `settings` rather than reading environment variables directly.
- **Immutability**: `@dataclass(frozen=True)` prevents accidental mutation at
  runtime. Changes require process restart (or re-instantiation in tests).
- **Fast import**: Only minimal work at import time (dotenv load + dataclass
  construction). No network calls or validation here. A missing API URL is
  reported by the HTTP client when the first request is made.

Testing
-------
- Build a dedicated instance instead of mutating the singleton:
      >>> from pointnow_console.core.config import Settings
      >>> s = Settings(API_URL="http://localhost:3000", STORAGE_BACKEND="memory")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load key-value pairs from a local `.env` file into process environment, if
# present. `override=False` by default, so pre-set env vars take precedence.
load_dotenv()


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """
    Immutable application settings.

    Each attribute is populated from the corresponding `POINTNOW_*`
    environment variable; when unset, a documented default is used. See
    `.env.example` for a template of common values.
    """

    # --- Backend REST API ----------------------------------------------------
    # Base URL every endpoint path is appended to (e.g. https://api.pointnow.my).
    API_URL: str = field(default_factory=lambda: os.getenv("POINTNOW_API_URL", ""))
    # Seconds before an in-flight request is abandoned and reported as a
    # network error.
    API_TIMEOUT: float = field(
        default_factory=lambda: _env_float("POINTNOW_API_TIMEOUT", 30.0)
    )

    # --- Durable session storage ---------------------------------------------
    # "memory" gives every browser session its own login. "file" shares one
    # login, kept across restarts, by every browser of the process.
    STORAGE_BACKEND: str = field(
        default_factory=lambda: os.getenv("POINTNOW_STORAGE_BACKEND", "memory")
    )
    STORAGE_PATH: str = field(
        default_factory=lambda: os.getenv(
            "POINTNOW_STORAGE_PATH",
            str(Path.home() / ".pointnow" / "storage.json"),
        )
    )

    # --- Presentation ---------------------------------------------------------
    LOG_LEVEL: str = field(
        default_factory=lambda: os.getenv("POINTNOW_LOG_LEVEL", "INFO")
    )
    PAGE_LIMIT: int = field(
        default_factory=lambda: _env_int("POINTNOW_PAGE_LIMIT", 10)
    )


# Singleton settings object imported by consumers.
settings = Settings()
