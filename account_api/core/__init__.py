"""Core configuration and infrastructure helpers."""

from .config import (
    AVATAR_ALLOWED_TYPES,
    AVATAR_MAX_BYTES,
    DATABASE_PATH,
    DB_RESET,
    FRONTEND_ORIGIN,
    LOG_LEVEL,
    PORT,
    PUBLIC_BASE_URL,
    UPLOAD_DIR,
)
from .database import build_engine
from .errors import (
    AccountNotInitialized,
    AccountServiceError,
    AccountValidationError,
    AvatarRejectedError,
    FieldError,
    UsernameConflictError,
    register_error_handlers,
)
from .logging import configure_logging
from .time import epoch_millis, utcnow

__all__ = [
    "AVATAR_ALLOWED_TYPES",
    "AVATAR_MAX_BYTES",
    "AccountNotInitialized",
    "AccountServiceError",
    "AccountValidationError",
    "AvatarRejectedError",
    "DATABASE_PATH",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "FieldError",
    "LOG_LEVEL",
    "PORT",
    "PUBLIC_BASE_URL",
    "UPLOAD_DIR",
    "UsernameConflictError",
    "build_engine",
    "configure_logging",
    "epoch_millis",
    "register_error_handlers",
    "utcnow",
]
