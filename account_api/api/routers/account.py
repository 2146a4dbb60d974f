"""Account profile, username check and avatar endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from ...core.errors import UsernameConflictError
from ...services.avatars import AvatarUpload, ingest_avatar
from ...services.shaping import account_to_dict, avatar_url
from ...services.validation import validate_account_update
from ..deps import AppComponents, get_components

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/account", tags=["account"])


@router.get("")
def get_account(components: AppComponents = Depends(get_components)) -> Dict[str, Any]:
    """Return the account in its external shape."""

    return account_to_dict(components.store.get(), components.base_url)


@router.get("/username")
def check_username(
    value: Optional[str] = None,
    components: AppComponents = Depends(get_components),
) -> Dict[str, bool]:
    """Report whether ``value`` is free, ignoring case."""

    candidate = (value or "").strip()
    if not candidate:
        raise HTTPException(400, "Username value is required.")
    return {"unique": components.store.username_is_unique(candidate)}


@router.put("")
async def update_account(
    request: Request,
    components: AppComponents = Depends(get_components),
) -> Dict[str, Any]:
    """Validate and overwrite the profile fields, all or nothing."""

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    fields = validate_account_update(payload)
    store = components.store
    if not store.username_is_unique(fields.username):
        logger.info("Username %r is already taken", fields.username)
        raise UsernameConflictError()

    updated = store.update(fields)
    logger.info("Updated account profile (username=%r)", updated.username)
    return account_to_dict(updated, components.base_url)


@router.post("/avatar")
async def upload_avatar(
    avatar: Optional[UploadFile] = File(None),
    components: AppComponents = Depends(get_components),
) -> Dict[str, Optional[str]]:
    """Store a new avatar image and point the account at it."""

    upload: Optional[AvatarUpload] = None
    if avatar is not None:
        # One byte past the ceiling is enough to detect an oversized file.
        data = await avatar.read(components.policy.max_bytes + 1)
        upload = AvatarUpload(
            data=data, content_type=avatar.content_type, filename=avatar.filename
        )

    accepted = ingest_avatar(upload, components.files, components.policy)
    updated = components.store.set_avatar(accepted.filename)
    return {"avatarUrl": avatar_url(updated.avatar_filename, components.base_url)}


__all__ = ["router"]
