"""SQLiteStore — durable, single-file storage backend using aiosqlite."""

from __future__ import annotations

from typing import Any

try:
    import aiosqlite
except ImportError as exc:
    raise ImportError(
        "SQLiteStore requires the 'aiosqlite' package. "
        "Install it with: pip install casbin-couchbase-adapter[sqlite]"
    ) from exc

from casbin_couchbase_adapter.exceptions import DocumentNotFoundError
from casbin_couchbase_adapter.query import PredicateQuery, QueryOperation, keyspace
from casbin_couchbase_adapter.rule import RULE_FIELDS
from casbin_couchbase_adapter.stores.base import DocumentStore

_KEY_COLUMN = "id"


class SQLiteStore(DocumentStore):
    """Persistent store backed by a single SQLite file.

    Each document is one row: the derived key plus one column per rule field.
    The generated statements run unchanged since SQLite accepts backtick
    identifiers and ``$name`` parameters.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
        table:   Table holding the rules.
    """

    def __init__(self, db_path: str = "casbin_rules.db", table: str = "casbin_rule") -> None:
        self._db_path = db_path
        self._table = keyspace(table)
        self._db: aiosqlite.Connection | None = None

    @property
    def keyspace(self) -> str:
        return self._table

    async def connect(self) -> None:
        await self._connect()

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is None:
            columns = ", ".join(f"`{name}` TEXT NOT NULL DEFAULT ''" for name in RULE_FIELDS)
            self._db = await aiosqlite.connect(self._db_path)
            self._db.row_factory = aiosqlite.Row
            await self._db.execute(
                f"CREATE TABLE IF NOT EXISTS {self._table} "
                f"(`{_KEY_COLUMN}` TEXT PRIMARY KEY, {columns})"
            )
            await self._db.commit()
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── DocumentStore protocol ───────────────────────────────

    async def upsert(self, key: str, document: dict[str, Any]) -> None:
        db = await self._connect()
        columns = ", ".join(f"`{name}`" for name in (_KEY_COLUMN, *RULE_FIELDS))
        placeholders = ", ".join("?" for _ in range(len(RULE_FIELDS) + 1))
        await db.execute(
            f"INSERT OR REPLACE INTO {self._table} ({columns}) VALUES ({placeholders})",
            (key, *(document.get(name) or "" for name in RULE_FIELDS)),
        )
        await db.commit()

    async def remove(self, key: str) -> None:
        db = await self._connect()
        cursor = await db.execute(
            f"DELETE FROM {self._table} WHERE `{_KEY_COLUMN}` = ?",
            (key,),
        )
        await db.commit()
        if cursor.rowcount == 0:
            raise DocumentNotFoundError(key)

    async def query(self, query: PredicateQuery) -> list[dict[str, Any]]:
        db = await self._connect()
        cursor = await db.execute(query.statement, query.parameters)
        if query.operation is QueryOperation.DELETE:
            await db.commit()
            return []
        rows = await cursor.fetchall()
        return [{name: row[name] for name in RULE_FIELDS} for row in rows]
