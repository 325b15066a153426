"""Configuration loader.

Reads environment variables and `.env` to configure the monitor.  Every
value here is only a default: command-line flags in `main` override them.
"""

from __future__ import annotations

import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

# Load variables from a .env file if present (project root).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes")


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None and value.strip() else default
    except ValueError:
        return default


# ---- Menu source -------------------------------------------------------------

NEW_CITY_HOSTNAME: str = "newcitymicrocreamery.com"

# Page listing the current flavors, grouped by menu section.
MENU_URL: str = _get_env("MENU_URL", f"https://{NEW_CITY_HOSTNAME}/cambridge-menu")

# Section kept by --only-originals.
ORIGINALS_CATEGORY: str = "New City Originals"

# Restrict the report to a single section by default (blank = all sections).
ONLY_CATEGORY: Optional[str] = (_get_env("ONLY_CATEGORY", "") or "").strip() or None

try:
    REQUEST_TIMEOUT_SECONDS: float = float(_get_env("REQUEST_TIMEOUT_SECONDS", "20"))
except ValueError:
    REQUEST_TIMEOUT_SECONDS = 20.0

# ---- Cache -------------------------------------------------------------------

# JSON file holding the snapshot from the previous run.
CACHE_PATH: str = _get_env("CACHE_PATH", "newcity.json")
USE_CACHE: bool = _parse_bool(_get_env("USE_CACHE"), False)
PRINT_UNCHANGED: bool = _parse_bool(_get_env("PRINT_UNCHANGED"), False)

# ---- Discord -----------------------------------------------------------------

# Bot token; only needed when no webhook URL is set.
BOT_TOKEN: Optional[str] = _get_env("BOT_TOKEN")

# Channel the bot posts to. 0 means "not configured".
DISCORD_CHANNEL_ID: int = _parse_int(_get_env("DISCORD_CHANNEL_ID"), 0)

# Webhook URL. When set it takes precedence over the bot token.
DISCORD_WEBHOOK_URL: Optional[str] = _get_env("DISCORD_WEBHOOK_URL")

DISCORD_API_BASE: str = _get_env("DISCORD_API_BASE", "https://discord.com/api/v10")

# ---- Logging -----------------------------------------------------------------

# Logging level: DEBUG, INFO, WARNING, ERROR.
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO")


__all__ = [
    "NEW_CITY_HOSTNAME",
    "MENU_URL",
    "ORIGINALS_CATEGORY",
    "ONLY_CATEGORY",
    "REQUEST_TIMEOUT_SECONDS",
    "CACHE_PATH",
    "USE_CACHE",
    "PRINT_UNCHANGED",
    "BOT_TOKEN",
    "DISCORD_CHANNEL_ID",
    "DISCORD_WEBHOOK_URL",
    "DISCORD_API_BASE",
    "LOG_LEVEL",
]
