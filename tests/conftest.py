from __future__ import annotations

import io
import sqlite3
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from account_api.app import create_app

BASE_URL = "http://testserver"


def image_bytes(width: int, height: int, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(40, 90, 160)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_app(tmp_path: Path):
    return create_app(
        database_path=tmp_path / "account.sqlite",
        upload_dir=tmp_path / "uploads",
        base_url=BASE_URL,
        frontend_origin="http://localhost:3000",
        reset=False,
    )


@pytest.fixture
def app(tmp_path):
    return make_app(tmp_path)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def components(app, client):
    return app.state.components


@pytest.fixture
def ready_app(app):
    """App with storage bootstrapped, for use without the lifespan."""

    app.state.components.files.ensure_root()
    app.state.components.store.initialize()
    return app


@pytest.fixture
def legacy_db(tmp_path):
    """An older account table: no name columns, no singleton check, a second row."""

    path = tmp_path / "account.sqlite"
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE account (
            id INTEGER PRIMARY KEY,
            email TEXT NOT NULL,
            username TEXT NOT NULL,
            avatar_filename TEXT
        );
        INSERT INTO account (id, email, username, avatar_filename)
        VALUES (2, 'other@example.com', 'newname', NULL);
        """
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def legacy_client(tmp_path, legacy_db):
    with TestClient(make_app(tmp_path)) as c:
        yield c


@pytest.fixture
def make_image():
    return image_bytes


@pytest.fixture
def ready_legacy_app(tmp_path, legacy_db):
    app = make_app(tmp_path)
    app.state.components.files.ensure_root()
    app.state.components.store.initialize()
    return app
