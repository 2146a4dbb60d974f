"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_api
from .api.deps import AppComponents
from .core import (
    DATABASE_PATH,
    DB_RESET,
    FRONTEND_ORIGIN,
    LOG_LEVEL,
    PORT,
    PUBLIC_BASE_URL,
    UPLOAD_DIR,
    build_engine,
    configure_logging,
)
from .services.avatars import AvatarFileStore, AvatarPolicy
from .services.store import AccountStore

logger = logging.getLogger(__name__)


def create_app(
    *,
    database_path: Optional[Path] = None,
    upload_dir: Optional[Path] = None,
    base_url: Optional[str] = None,
    frontend_origin: Optional[str] = None,
    policy: Optional[AvatarPolicy] = None,
    reset: Optional[bool] = None,
) -> FastAPI:
    """Build the app; arguments override the environment-derived settings."""

    configure_logging(LOG_LEVEL)

    components = AppComponents(
        store=AccountStore(build_engine(database_path or DATABASE_PATH)),
        files=AvatarFileStore(upload_dir or UPLOAD_DIR),
        policy=policy or AvatarPolicy(),
        base_url=(base_url or PUBLIC_BASE_URL).rstrip("/"),
    )
    reset_db = DB_RESET if reset is None else reset

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        components.files.ensure_root()
        components.store.initialize(reset=reset_db)
        logger.info("Account API ready, avatars stored in %s", components.files.root)
        yield
        components.store.engine.dispose()

    app = FastAPI(title="Account API", version="0.1.0", lifespan=lifespan)
    app.state.components = components

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_origin or FRONTEND_ORIGIN],
        allow_methods=["GET", "PUT", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_api(app)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("account_api.app:create_app", factory=True, host="127.0.0.1", port=PORT)
