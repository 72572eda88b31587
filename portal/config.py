"""Environment-driven configuration loaded into ``app.config``."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

DEFAULT_DATABASE_NAME = "internship_applications"
DEFAULT_SMTP_PORT = 587


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _env_int(name: str, default: int) -> int:
    value = _env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_config() -> Dict[str, Any]:
    """Read the portal settings from the process environment."""
    return {
        "MONGODB_URI": _env("MONGODB_URI"),
        "MONGODB_DATABASE": _env("MONGODB_DATABASE") or DEFAULT_DATABASE_NAME,
        "MONGODB_TIMEOUT_MS": _env_int("MONGODB_TIMEOUT_MS", 5000),
        "ADMIN_USERNAME": _env("ADMIN_USERNAME"),
        "ADMIN_PASSWORD": _env("ADMIN_PASSWORD"),
        "ADMIN_EMAIL": _env("ADMIN_EMAIL"),
        "SMTP_HOST": _env("SMTP_HOST"),
        "SMTP_USER": _env("SMTP_USER"),
        "SMTP_PASS": _env("SMTP_PASS"),
        "SMTP_PORT": _env_int("SMTP_PORT", DEFAULT_SMTP_PORT),
        "SMTP_TIMEOUT": _env_int("SMTP_TIMEOUT", 10),
        "RATE_LIMIT_MAX_REQUESTS": _env_int("RATE_LIMIT_MAX_REQUESTS", 5),
        "RATE_LIMIT_WINDOW_SECONDS": _env_int("RATE_LIMIT_WINDOW_SECONDS", 60),
        "ORGANIZATION_NAME": _env("ORGANIZATION_NAME") or "SentriX",
        "LOG_LEVEL": (_env("LOG_LEVEL") or "INFO").upper(),
    }
