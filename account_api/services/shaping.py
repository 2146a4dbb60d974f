"""Helpers for account domain objects."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import Account


def avatar_url(filename: Optional[str], base_url: str) -> Optional[str]:
    """Public URL of a stored avatar, or None when the default is in use."""

    if not filename:
        return None
    return f"{base_url.rstrip('/')}/uploads/{filename}"


def account_to_dict(account: Account, base_url: str) -> Dict[str, Any]:
    """Serialise the account model to the API contract."""

    return {
        "firstName": account.first_name,
        "lastName": account.last_name,
        "email": account.email,
        "username": account.username,
        "avatarUrl": avatar_url(account.avatar_filename, base_url),
    }


__all__ = ["account_to_dict", "avatar_url"]
