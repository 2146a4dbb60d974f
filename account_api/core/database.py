"""Database engine construction."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import create_engine


def build_engine(db_path: Path | str) -> Engine:
    """Create a SQLite engine for the given file, creating its directory."""

    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{path}", connect_args={"check_same_thread": False}
    )


__all__ = ["build_engine"]
