"""Persistence for the singleton account row."""

from __future__ import annotations

import logging
from typing import Set

from sqlalchemy import func, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from ..core.errors import AccountNotInitialized, UsernameConflictError
from ..models import ACCOUNT_ID, SEED_ACCOUNT, USERNAME_INDEX_NAME, Account, AccountUpdate

logger = logging.getLogger(__name__)


class AccountStore:
    """Reads and writes the account row through an explicitly supplied engine.

    The store never checks username uniqueness on write; callers ask
    :meth:`username_is_unique` first and the case-insensitive unique index
    rejects anything that slips through between the check and the commit.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    # Bootstrap -----------------------------------------------------------

    def initialize(self, reset: bool = False) -> None:
        """Create or evolve the schema and make sure the seed row exists."""

        table = Account.__table__
        if reset:
            SQLModel.metadata.drop_all(self.engine, tables=[table])
        SQLModel.metadata.create_all(self.engine, tables=[table])
        self._add_missing_columns()

        with self.engine.begin() as conn:
            conn.execute(
                text(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS {USERNAME_INDEX_NAME} "
                    f"ON {table.name} (lower(username))"
                )
            )

        with Session(self.engine) as session:
            if session.get(Account, ACCOUNT_ID) is None:
                session.add(Account(id=ACCOUNT_ID, **SEED_ACCOUNT.model_dump()))
                session.commit()
                logger.info("Seeded account row with username %r", SEED_ACCOUNT.username)

    def _existing_columns(self) -> Set[str]:
        return {column["name"] for column in inspect(self.engine).get_columns("account")}

    def _add_missing_columns(self) -> None:
        existing = self._existing_columns()
        dialect = self.engine.dialect
        with self.engine.begin() as conn:
            for column in Account.__table__.columns:
                if column.name in existing:
                    continue
                column_type = column.type.compile(dialect=dialect)
                conn.execute(text(f"ALTER TABLE account ADD COLUMN {column.name} {column_type}"))
                logger.info("Added missing column account.%s", column.name)

    # Queries -------------------------------------------------------------

    def get(self) -> Account:
        with Session(self.engine) as session:
            account = session.get(Account, ACCOUNT_ID)
            if account is None:
                raise AccountNotInitialized()
            return account

    def username_is_unique(self, candidate: str) -> bool:
        """Return True when no other account holds ``candidate``, ignoring case."""

        with Session(self.engine) as session:
            count = session.exec(
                select(func.count())
                .select_from(Account)
                .where(func.lower(Account.username) == func.lower(candidate))
                .where(Account.id != ACCOUNT_ID)
            ).one()
        return count == 0

    # Mutations -----------------------------------------------------------

    def update(self, fields: AccountUpdate) -> Account:
        """Overwrite the four profile fields of the account."""

        with Session(self.engine) as session:
            account = session.get(Account, ACCOUNT_ID)
            if account is None:
                raise AccountNotInitialized()
            account.first_name = fields.first_name
            account.last_name = fields.last_name
            account.email = fields.email
            account.username = fields.username
            session.add(account)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.warning("Unique index rejected username %r", fields.username)
                raise UsernameConflictError() from exc
            session.refresh(account)
            return account

    def set_avatar(self, filename: str) -> Account:
        with Session(self.engine) as session:
            account = session.get(Account, ACCOUNT_ID)
            if account is None:
                raise AccountNotInitialized()
            account.avatar_filename = filename
            session.add(account)
            session.commit()
            session.refresh(account)
            return account


__all__ = ["AccountStore"]
