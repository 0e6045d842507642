"""
Shared persistence operations for table-backed repositories.

A repository wraps one open connection, normally the one yielded by
``core.db.transaction`` for the current service call, and never
commits on its own.  All queries use parameterized statements; table
and column names come only from class attributes.
"""

import sqlite3
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from ..core.exceptions import NotFoundError
from ..schemas.page import Page, PageRequest


E = TypeVar("E")

# Stay well below SQLite's bound-parameter limit for IN (...) lookups.
_ID_CHUNK_SIZE = 500

# SQLite INTEGER PRIMARY KEY is a signed 64-bit value.
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def is_storable_id(entity_id: Optional[int]) -> bool:
    """Whether ``entity_id`` fits an SQLite rowid; other ids can never exist."""
    return entity_id is not None and MIN_ID <= entity_id <= MAX_ID


class BaseRepository(Generic[E]):
    """Find, delete and paged listing over ``table``, keyed by ``id``."""

    table: str = ""
    sortable_columns: Sequence[str] = ("id",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _row_to_entity(self, row: sqlite3.Row) -> E:
        raise NotImplementedError

    def find_one(self, entity_id: Optional[int]) -> Optional[E]:
        """Return the entity with ``entity_id`` or ``None`` when absent."""
        if not is_storable_id(entity_id):
            return None
        row = self.conn.execute(
            f"SELECT * FROM {self.table} WHERE id = ?",
            (entity_id,),
        ).fetchone()
        return self._row_to_entity(row) if row else None

    def find_by_id_in(self, entity_ids: Iterable[int]) -> List[E]:
        """Return the entities whose ids are in ``entity_ids``.

        Missing ids are silently omitted.  Results are ordered by id.
        """
        ids = sorted({entity_id for entity_id in entity_ids if is_storable_id(entity_id)})
        entities: List[E] = []
        for start in range(0, len(ids), _ID_CHUNK_SIZE):
            chunk = ids[start:start + _ID_CHUNK_SIZE]
            placeholders = ", ".join("?" for _ in chunk)
            rows = self.conn.execute(
                f"SELECT * FROM {self.table} WHERE id IN ({placeholders}) ORDER BY id",
                tuple(chunk),
            ).fetchall()
            entities.extend(self._row_to_entity(row) for row in rows)
        return entities

    def delete(self, entity_id: int) -> bool:
        """Delete by id.  Returns ``False`` when nothing was deleted."""
        if not is_storable_id(entity_id):
            return False
        cursor = self.conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (entity_id,))
        return cursor.rowcount > 0

    def count(self) -> int:
        row = self.conn.execute(f"SELECT COUNT(*) AS count FROM {self.table}").fetchone()
        return row["count"]

    def find_all(
        self,
        page_request: PageRequest,
        where_clauses: Sequence[str] = (),
        params: Sequence[Any] = (),
    ) -> Page[Any]:
        """Return one page of entities matching all ``where_clauses``."""
        where = ""
        if where_clauses:
            where = " WHERE " + " AND ".join(where_clauses)
        total = self.conn.execute(
            f"SELECT COUNT(*) AS count FROM {self.table}{where}",
            tuple(params),
        ).fetchone()["count"]
        order_by = page_request.order_by(self.sortable_columns)
        rows = self.conn.execute(
            f"SELECT * FROM {self.table}{where} ORDER BY {order_by} LIMIT ? OFFSET ?",
            (*params, page_request.size, page_request.offset),
        ).fetchall()
        return Page[Any](
            items=[self._row_to_entity(row) for row in rows],
            total=total,
            page=page_request.page,
            size=page_request.size,
        )


class NamedEntityRepository(BaseRepository[E]):
    """Repository for tables shaped ``(id, name, description)``."""

    entity_type: type = object
    sortable_columns = ("id", "name")

    def _row_to_entity(self, row: sqlite3.Row) -> E:
        return self.entity_type(id=row["id"], name=row["name"], description=row["description"])

    def save(self, entity: E) -> E:
        """Insert when ``entity.id`` is ``None``, otherwise upsert by id."""
        if entity.id is None:
            cursor = self.conn.execute(
                f"INSERT INTO {self.table} (name, description) VALUES (?, ?)",
                (entity.name, entity.description),
            )
            entity_id = cursor.lastrowid
        else:
            if not is_storable_id(entity.id):
                raise NotFoundError(f"{self.entity_type.__name__}[id={entity.id}] not found")
            self.conn.execute(
                f"""
                INSERT INTO {self.table} (id, name, description) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    description = excluded.description
                """,
                (entity.id, entity.name, entity.description),
            )
            entity_id = entity.id
        return self.find_one(entity_id)
