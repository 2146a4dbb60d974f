"""Database model for the singleton account."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field as ORMField, SQLModel

ACCOUNT_ID = 1
USERNAME_INDEX_NAME = "account_username_ci_unique"


class Account(SQLModel, table=True):
    """The one account row this service manages."""

    __tablename__ = "account"
    __table_args__ = (CheckConstraint(f"id = {ACCOUNT_ID}", name="account_singleton"),)

    id: Optional[int] = ORMField(default=ACCOUNT_ID, primary_key=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    username: str
    avatar_filename: Optional[str] = None


class AccountUpdate(SQLModel):
    """Validated and trimmed profile fields."""

    first_name: str
    last_name: str
    email: str
    username: str


SEED_ACCOUNT = AccountUpdate(
    first_name="Ada",
    last_name="Lovelace",
    email="ada@example.com",
    username="adal",
)


__all__ = ["ACCOUNT_ID", "Account", "AccountUpdate", "SEED_ACCOUNT", "USERNAME_INDEX_NAME"]
