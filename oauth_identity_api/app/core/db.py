"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running one logical operation inside a
transaction (``transaction``) and applying migrations on application
start (``init_db``).  SQLite is used as a lightweight embedded store;
switching to another DBMS means replacing the connection logic and
adapting SQL syntax in the repositories.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from .config import settings


logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[], sqlite3.Connection]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction(
    read_only: bool = False,
    connection_factory: Optional[ConnectionFactory] = None,
) -> Iterator[sqlite3.Connection]:
    """Run a block of work as a single all-or-nothing unit.

    The connection is committed when the block exits normally and rolled
    back when it raises.  Read-only transactions switch on
    ``PRAGMA query_only`` so any accidental write fails, and they never
    commit.  The connection is always closed on exit.
    """
    conn = (connection_factory or get_connection)()
    try:
        if read_only:
            conn.execute("PRAGMA query_only = ON")
        yield conn
        if read_only:
            conn.rollback()
        else:
            conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            email TEXT,
            enabled INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS authorities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS scopes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT
        );
        """,
    ),
    # Migration 2: lookup indices
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
        CREATE INDEX IF NOT EXISTS idx_authorities_name ON authorities(name);
        CREATE INDEX IF NOT EXISTS idx_scopes_name ON scopes(name);
        """,
    ),
    # Migration 3: default authorities and scopes
    (
        3,
        """
        INSERT OR IGNORE INTO authorities (id, name, description) VALUES
            (1, 'ROLE_ADMIN', 'Full administrative access'),
            (2, 'ROLE_USER', 'Regular user access');
        INSERT OR IGNORE INTO scopes (id, name, description) VALUES
            (1, 'read', 'Read access'),
            (2, 'write', 'Write access');
        """,
    ),
]


def init_db(connection_factory: Optional[ConnectionFactory] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every newer entry of
    ``MIGRATIONS``.  Default authorities and scopes arrive with
    migration 3, so an operator who deletes one does not see it return.
    """
    with transaction(connection_factory=connection_factory) as conn:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits any pending transaction first
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s", version)
                current_version = version
