"""InMemoryStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from typing import Any

from casbin_couchbase_adapter.exceptions import DocumentNotFoundError
from casbin_couchbase_adapter.query import PredicateQuery, QueryOperation, keyspace
from casbin_couchbase_adapter.stores.base import DocumentStore


class InMemoryStore(DocumentStore):
    """In-memory store.  Queries are evaluated from their predicates, not parsed.

    Data is lost on process exit.
    """

    def __init__(self, name: str = "casbin_rule") -> None:
        self._keyspace = keyspace(name)
        self._documents: dict[str, dict[str, Any]] = {}
        self._connect_count = 0

    @property
    def keyspace(self) -> str:
        return self._keyspace

    @property
    def connect_count(self) -> int:
        """Number of completed handshakes."""
        return self._connect_count

    @property
    def documents(self) -> dict[str, dict[str, Any]]:
        return self._documents

    async def connect(self) -> None:
        self._connect_count += 1

    async def upsert(self, key: str, document: dict[str, Any]) -> None:
        self._documents[key] = dict(document)

    async def remove(self, key: str) -> None:
        if self._documents.pop(key, None) is None:
            raise DocumentNotFoundError(key)

    async def query(self, query: PredicateQuery) -> list[dict[str, Any]]:
        matched = [key for key, doc in self._documents.items() if query.matches(doc)]
        if query.operation is QueryOperation.DELETE:
            for key in matched:
                del self._documents[key]
            return []
        return [dict(self._documents[key]) for key in matched]
