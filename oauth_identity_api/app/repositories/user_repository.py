"""
Persistence for users.

The ``users.username`` column carries a UNIQUE constraint.  A write that
violates it is reported as ``ConflictError`` so that two concurrent
creates racing past the service-level username check still surface the
same typed failure.
"""

import logging
import sqlite3
from typing import Any, List, Optional

from ..core.exceptions import ConflictError, NotFoundError
from ..entities import User
from ..schemas.page import Page, PageRequest
from ..schemas.user import SearchUserRequest
from .base import BaseRepository, is_storable_id


logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    table = "users"
    sortable_columns = ("id", "username", "email", "created_at", "updated_at")

    def _row_to_entity(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            password=row["password"],
            email=row["email"],
            enabled=bool(row["enabled"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def find_by_username(self, username: Optional[str]) -> Optional[User]:
        """Exact, case-sensitive lookup by username."""
        if username is None:
            return None
        row = self.conn.execute(
            "SELECT * FROM users WHERE username = ?",
            (username,),
        ).fetchone()
        return self._row_to_entity(row) if row else None

    def save(self, user: User) -> User:
        """Insert when ``user.id`` is ``None``, otherwise upsert by id.

        Raises ``ConflictError`` if the username belongs to another user and
        ``NotFoundError`` for an id no row can have.
        """
        if user.id is not None and not is_storable_id(user.id):
            raise NotFoundError(f"User[id={user.id}] not found")
        try:
            if user.id is None:
                cursor = self.conn.execute(
                    "INSERT INTO users (username, password, email, enabled) VALUES (?, ?, ?, ?)",
                    (user.username, user.password, user.email, 1 if user.enabled else 0),
                )
                user_id = cursor.lastrowid
            else:
                self.conn.execute(
                    """
                    INSERT INTO users (id, username, password, email, enabled) VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        username = excluded.username,
                        password = excluded.password,
                        email = excluded.email,
                        enabled = excluded.enabled,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (user.id, user.username, user.password, user.email, 1 if user.enabled else 0),
                )
                user_id = user.id
        except sqlite3.IntegrityError as exc:
            if "users.username" in str(exc):
                logger.warning("Username constraint rejected write for %s", user.username)
                raise ConflictError(f"User[username={user.username}] already exists") from exc
            raise
        return self.find_one(user_id)

    def delete_entity(self, user: User) -> bool:
        return self.delete(user.id)

    def find_all(
        self,
        page_request: PageRequest,
        search: Optional[SearchUserRequest] = None,
    ) -> Page[Any]:
        """Return one page of users, filtered by ``search`` when given."""
        where_clauses: List[str] = []
        params: List[Any] = []
        if search is not None:
            if search.username:
                where_clauses.append("username LIKE ? ESCAPE '\\'")
                params.append(f"%{_escape_like(search.username)}%")
            if search.email:
                where_clauses.append("email = ?")
                params.append(search.email)
            if search.enabled is not None:
                where_clauses.append("enabled = ?")
                params.append(1 if search.enabled else 0)
        return super().find_all(page_request, where_clauses, params)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
