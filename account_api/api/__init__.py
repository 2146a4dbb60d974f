"""HTTP surface: routers plus the handlers that shape their error bodies."""

from __future__ import annotations

from fastapi import FastAPI

from ..core.errors import register_error_handlers
from .routers import ALL_ROUTERS


def register_api(app: FastAPI) -> None:
    """Install error rendering, then mount the account, upload and system routers."""

    register_error_handlers(app)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_api"]
