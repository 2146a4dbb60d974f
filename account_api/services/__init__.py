"""Service layer helpers."""

from .avatars import AvatarFileStore, AvatarPolicy, AvatarUpload, ingest_avatar
from .shaping import account_to_dict, avatar_url
from .store import AccountStore
from .validation import ACCOUNT_RULES, validate_account_update

__all__ = [
    "ACCOUNT_RULES",
    "AccountStore",
    "AvatarFileStore",
    "AvatarPolicy",
    "AvatarUpload",
    "account_to_dict",
    "avatar_url",
    "ingest_avatar",
    "validate_account_update",
]
