"""Client-side logic for the account settings form."""

from .api import AccountApiClient, AccountApiError
from .avatar import AvatarPrecheckError, precheck_avatar
from .debounce import CancellableTimer, UsernameCheckController
from .form import AccountForm, Notice, validate_draft

__all__ = [
    "AccountApiClient",
    "AccountApiError",
    "AccountForm",
    "AvatarPrecheckError",
    "CancellableTimer",
    "Notice",
    "UsernameCheckController",
    "precheck_avatar",
    "validate_draft",
]
