"""State and actions behind the account settings form."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx

from account_api.core.errors import UNEXPECTED_ERROR_MESSAGE
from account_api.services.validation import ACCOUNT_RULES, USERNAME_MESSAGE

from .api import AccountApiClient, AccountApiError
from .avatar import AvatarPrecheckError, precheck_avatar
from .debounce import DEFAULT_SETTLE_SECONDS, UsernameCheckController

logger = logging.getLogger(__name__)

FIELDS = ("firstName", "lastName", "email", "username")
SAVED_MESSAGE = "Changes saved successfully"
AVATAR_FAILED_MESSAGE = "Failed to update avatar data"


@dataclass
class Notice:
    """A transient notification shown to the user until dismissed."""

    title: str
    text: str
    is_success: bool


def validate_draft(draft: Mapping[str, Any], username_unique: bool = True) -> Dict[str, str]:
    """Local pass over the draft, returning ``{field: message}`` for failures.

    Advisory only: the server applies the same rules again.
    """

    errors: Dict[str, str] = {}
    for rule in ACCOUNT_RULES:
        _, message = rule.check(draft.get(rule.field, ""))
        if message is not None:
            errors[rule.field] = message
    if not username_unique:
        errors["username"] = USERNAME_MESSAGE
    return errors


class AccountForm:
    """Draft, field errors and notices for the account settings page."""

    def __init__(
        self,
        api: AccountApiClient,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
    ) -> None:
        self.api = api
        self.draft: Dict[str, str] = {field: "" for field in FIELDS}
        self.avatar_url: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.notices: List[Notice] = []
        self.username_check = UsernameCheckController(api.is_username_unique, settle_seconds)

    # Notifications -------------------------------------------------------

    def _notify(self, text: str, is_success: bool = False) -> None:
        self.notices.append(Notice("Success" if is_success else "Error", text, is_success))

    def dismiss(self, notice: Notice) -> None:
        if notice in self.notices:
            self.notices.remove(notice)

    # Draft state ---------------------------------------------------------

    def _apply_account(self, data: Mapping[str, Any]) -> None:
        for field in FIELDS:
            self.draft[field] = data.get(field) or ""
        self.username_check.reset(self.draft["username"])

    async def load(self) -> bool:
        """Fetch the account into the draft."""

        try:
            data = await self.api.get_account()
        except (AccountApiError, httpx.HTTPError) as exc:
            logger.error("Failed to load account data: %s", exc)
            self._notify(UNEXPECTED_ERROR_MESSAGE)
            return False
        self._apply_account(data)
        self.avatar_url = data.get("avatarUrl")
        return True

    def set_field(self, field: str, value: str) -> None:
        if field not in FIELDS:
            raise KeyError(field)
        self.draft[field] = value
        self.field_errors.pop(field, None)
        if field == "username":
            self.username_check.on_input(value)

    # Actions -------------------------------------------------------------

    async def submit(self) -> bool:
        """Validate locally, then send the draft; True when the server accepted it."""

        errors = validate_draft(self.draft, self.username_check.is_unique)
        if errors:
            self.field_errors = errors
            return False

        try:
            updated = await self.api.update_account(dict(self.draft))
        except AccountApiError as exc:
            for error in exc.errors:
                self.field_errors[error.get("path", "")] = error.get("message", "")
            if exc.status_code == 409:
                self.field_errors["username"] = exc.message
            self._notify(exc.message)
            return False
        except httpx.HTTPError as exc:
            logger.error("Account update failed: %s", exc)
            self._notify(UNEXPECTED_ERROR_MESSAGE)
            return False

        self._apply_account(updated)
        self._notify(SAVED_MESSAGE, is_success=True)
        return True

    async def change_avatar(
        self, data: bytes, content_type: str, filename: str = "avatar.png"
    ) -> bool:
        """Check the image locally and upload it; True when the avatar changed."""

        try:
            precheck_avatar(data, content_type)
            result = await self.api.update_avatar(data, content_type, filename)
        except (AvatarPrecheckError, AccountApiError) as exc:
            self._notify(str(exc))
            return False
        except httpx.HTTPError as exc:
            logger.error("Avatar upload failed: %s", exc)
            self._notify(AVATAR_FAILED_MESSAGE)
            return False

        self.avatar_url = result.get("avatarUrl")
        return True

    async def aclose(self) -> None:
        self.username_check.close()


__all__ = ["AccountForm", "FIELDS", "Notice", "validate_draft"]
