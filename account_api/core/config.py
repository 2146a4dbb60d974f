"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Return an integer environment variable or raise an error."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


# HTTP surface ---------------------------------------------------------------
PORT = _env_int("PORT", 4000)

# A single origin; the form is served from one frontend.
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000").strip()

PUBLIC_BASE_URL = (os.getenv("PUBLIC_BASE_URL") or f"http://localhost:{PORT}").rstrip("/")


# Storage --------------------------------------------------------------------
DATABASE_PATH = Path(
    os.getenv("DATABASE_PATH", str(_PROJECT_ROOT / "data" / "account.sqlite"))
)
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads"))
DB_RESET = _env_bool("DB_RESET", False)


# Avatar policy --------------------------------------------------------------
AVATAR_MAX_BYTES = _env_int("AVATAR_MAX_BYTES", 2 * 1024 * 1024)
AVATAR_ALLOWED_TYPES = ("image/png", "image/jpeg")


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


__all__ = [
    "AVATAR_ALLOWED_TYPES",
    "AVATAR_MAX_BYTES",
    "DATABASE_PATH",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "LOG_LEVEL",
    "PORT",
    "PUBLIC_BASE_URL",
    "UPLOAD_DIR",
]
