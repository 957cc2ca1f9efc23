"""DocumentStore protocol — keyed documents plus predicate queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from casbin_couchbase_adapter.query import PredicateQuery


class DocumentStore(ABC):
    """Abstract base for all rule storage backends.

    A backend persists ``dict[str, Any]`` documents under string keys and runs
    the statements produced by :func:`~casbin_couchbase_adapter.query.build_predicate_query`.
    Every method is a single round trip; backends never retry.
    """

    @property
    @abstractmethod
    def keyspace(self) -> str:
        """Quoted keyspace that statements run against."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Complete the connection handshake."""
        ...

    @abstractmethod
    async def upsert(self, key: str, document: dict[str, Any]) -> None:
        """Create or overwrite a document."""
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete a document.

        Raises:
            DocumentNotFoundError: If no document is stored under *key*.
        """
        ...

    @abstractmethod
    async def query(self, query: PredicateQuery) -> list[dict[str, Any]]:
        """Execute *query*.  Returns matching documents for SELECT, ``[]`` for DELETE."""
        ...

    async def close(self) -> None:
        """Release the connection.  The default does nothing."""
