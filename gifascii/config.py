# config.py
from __future__ import annotations

import os

from .errors import ConfigurationError


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ------------ CONFIG ------------
DEFAULT_TIER = os.environ.get("GIFASCII_DEFAULT_TIER", "Standard")
MAX_UPLOAD_BYTES = _env_int("GIFASCII_MAX_UPLOAD_BYTES", 20 * 1024 * 1024)
MAX_SESSIONS = _env_int("GIFASCII_MAX_SESSIONS", 32)
# Alt screen off by default so terminal zoom/scrollback keep working
ALT_SCREEN_DEFAULT = _env_bool("GIFASCII_ALT_SCREEN", False)
LOG_LEVEL = os.environ.get("GIFASCII_LOG_LEVEL", "INFO").upper()
HOST = os.environ.get("GIFASCII_HOST", "127.0.0.1")
PORT = _env_int("GIFASCII_PORT", 8000)

# Playback tick of the web viewer; used by the terminal stream for frames without a delay
FALLBACK_DELAY_MS = 100
