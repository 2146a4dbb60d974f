"""Aggregate API routers."""

from fastapi import APIRouter

from .account import router as account_router
from .system import router as system_router
from .uploads import router as uploads_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    account_router,
    uploads_router,
)

__all__ = ["ALL_ROUTERS"]
