"""Request-scoped access to the components built by the app factory."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from ..services.avatars import AvatarFileStore, AvatarPolicy
from ..services.store import AccountStore


@dataclass
class AppComponents:
    store: AccountStore
    files: AvatarFileStore
    policy: AvatarPolicy
    base_url: str


def get_components(request: Request) -> AppComponents:
    """FastAPI dependency returning the components attached to the app."""

    return request.app.state.components


__all__ = ["AppComponents", "get_components"]
