"""Shared fixtures: every test gets its own freshly migrated SQLite database."""
import sqlite3

import pytest

from oauth_identity_api.app.core.config import settings
from oauth_identity_api.app.core.db import init_db


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the application at a temporary database and migrate it."""
    db_path = tmp_path / "identity.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "admin_token", "")
    # Keep hashing cheap; the hash embeds its own iteration count.
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)
    monkeypatch.setattr(settings, "default_page_size", 20)
    monkeypatch.setattr(settings, "max_page_size", 100)
    init_db()
    return db_path


@pytest.fixture()
def db_rows(database):
    """Run a raw query against the test database and return all rows."""

    def _query(sql, params=()):
        conn = sqlite3.connect(database)
        conn.row_factory = sqlite3.Row
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    return _query
