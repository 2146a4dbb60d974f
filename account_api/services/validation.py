"""Field rules for account profile updates.

The rule table is shared by the server, where it is the authoritative
gate, and by the client form, which evaluates it before submitting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

from ..core.errors import AccountValidationError, FieldError
from ..models import AccountUpdate

ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")
EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

NAME_MESSAGE = "Only alphanumeric format is supported"
EMAIL_MESSAGE = "Valid email format is required"
USERNAME_MESSAGE = "Alphanumeric without spaces and must be unique (case insensitive)"


@dataclass(frozen=True)
class FieldRule:
    """Length bounds and a full-match pattern for one external field."""

    field: str
    attribute: str
    min_length: int
    max_length: Optional[int]
    pattern: Pattern[str]
    message: str

    def check(self, value: Any) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(normalized, None)`` on success or ``(None, message)``."""

        if not isinstance(value, str):
            return None, self.message
        normalized = value.strip()
        if len(normalized) < self.min_length:
            return None, self.message
        if self.max_length is not None and len(normalized) > self.max_length:
            return None, self.message
        if not self.pattern.fullmatch(normalized):
            return None, self.message
        return normalized, None


ACCOUNT_RULES: Tuple[FieldRule, ...] = (
    FieldRule("firstName", "first_name", 1, 40, ALPHANUMERIC, NAME_MESSAGE),
    FieldRule("lastName", "last_name", 1, 40, ALPHANUMERIC, NAME_MESSAGE),
    FieldRule("email", "email", 1, None, EMAIL, EMAIL_MESSAGE),
    FieldRule("username", "username", 3, 24, ALPHANUMERIC, USERNAME_MESSAGE),
)


def collect_field_errors(payload: Mapping[str, Any]) -> Tuple[Dict[str, str], List[FieldError]]:
    """Apply every rule and return the normalized values plus any violations."""

    normalized: Dict[str, str] = {}
    errors: List[FieldError] = []
    for rule in ACCOUNT_RULES:
        value, message = rule.check(payload.get(rule.field))
        if message is not None:
            errors.append(FieldError(rule.field, message))
        else:
            normalized[rule.attribute] = value
    return normalized, errors


def validate_account_update(payload: Any) -> AccountUpdate:
    """Validate an external ``{firstName, lastName, email, username}`` body."""

    if not isinstance(payload, Mapping):
        raise AccountValidationError(
            [FieldError(rule.field, rule.message) for rule in ACCOUNT_RULES]
        )
    normalized, errors = collect_field_errors(payload)
    if errors:
        raise AccountValidationError(errors)
    return AccountUpdate(**normalized)


__all__ = [
    "ACCOUNT_RULES",
    "EMAIL_MESSAGE",
    "FieldRule",
    "NAME_MESSAGE",
    "USERNAME_MESSAGE",
    "collect_field_errors",
    "validate_account_update",
]
