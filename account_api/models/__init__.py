"""Database model exports."""

from .account import ACCOUNT_ID, SEED_ACCOUNT, USERNAME_INDEX_NAME, Account, AccountUpdate

__all__ = [
    "ACCOUNT_ID",
    "Account",
    "AccountUpdate",
    "SEED_ACCOUNT",
    "USERNAME_INDEX_NAME",
]
