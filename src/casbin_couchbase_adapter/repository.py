"""PolicyRepository — the single owner of the rule store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from casbin_couchbase_adapter.exceptions import StoreConnectionError
from casbin_couchbase_adapter.keys import KeyDeriver
from casbin_couchbase_adapter.query import QueryOperation, build_predicate_query
from casbin_couchbase_adapter.rule import CasbinRule
from casbin_couchbase_adapter.stores.couchbase import CouchbaseStore

if TYPE_CHECKING:
    from casbin_couchbase_adapter.schema import AdapterSettings
    from casbin_couchbase_adapter.stores.base import DocumentStore

logger = logging.getLogger(__name__)


class PolicyRepository:
    """Point and predicate access to stored rules.

    Every operation is one round trip to the store.  Nothing is retried,
    batched or cached, and store failures reach the caller unchanged.

    Parameters:
        settings: Validated options.  Supplies the key layout and, unless
                  *store* is given, the Couchbase connection.
        store:    Backend to use instead of a :class:`CouchbaseStore` built
                  from *settings*.
    """

    def __init__(self, settings: AdapterSettings, store: DocumentStore | None = None) -> None:
        self._store: DocumentStore = store or CouchbaseStore(settings)
        self._keys = KeyDeriver(prefix=settings.key_prefix, delimiter=settings.key_delimiter)
        self._ready: asyncio.Future[None] | None = None

    # ── lifecycle ────────────────────────────────────────────

    async def connected(self) -> None:
        """Wait until the store handshake completes.

        The handshake runs once per repository; later calls await the same
        outcome.

        Raises:
            StoreConnectionError: If the store is unreachable or rejects the
                credentials.
        """
        if self._ready is None:
            self._ready = asyncio.ensure_future(self._store.connect())
        try:
            await asyncio.shield(self._ready)
        except Exception as e:
            raise StoreConnectionError(str(e)) from e

    async def close(self) -> None:
        await self._store.close()

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def keys(self) -> KeyDeriver:
        return self._keys

    # ── point operations ─────────────────────────────────────

    async def upsert_item(self, rule: CasbinRule) -> None:
        """Write *rule* at its derived key, replacing any existing document."""
        key = self._keys.derive_key(rule)
        logger.debug("Upserting %s", key)
        await self._store.upsert(key, rule.to_document())

    async def remove_item(self, rule: CasbinRule) -> None:
        """Delete the document stored at the derived key of *rule*.

        Raises:
            DocumentNotFoundError: If the rule is not stored.
        """
        key = self._keys.derive_key(rule)
        logger.debug("Removing %s", key)
        await self._store.remove(key)

    # ── predicate operations ─────────────────────────────────

    async def get_list_where(self, fields: Mapping[str, str | None]) -> list[CasbinRule]:
        """Return every stored rule matching the predicate set *fields*."""
        query = build_predicate_query(fields, QueryOperation.SELECT, self._store.keyspace)
        logger.debug("Query %s with %s", query.statement, query.parameters)
        documents = await self._store.query(query)
        return [CasbinRule.from_document(doc) for doc in documents]

    async def remove_list_where(
        self,
        fields: Mapping[str, str | None],
        *,
        match_all: bool = False,
    ) -> None:
        """Delete every stored rule matching the predicate set *fields*.

        Raises:
            ValueError: If *fields* has no usable predicate and *match_all*
                is not set, which would delete the whole keyspace.
        """
        query = build_predicate_query(fields, QueryOperation.DELETE, self._store.keyspace)
        if not query.parameters and not match_all:
            raise ValueError(
                "Refusing to delete without predicates; pass match_all=True to remove every rule"
            )
        logger.debug("Query %s with %s", query.statement, query.parameters)
        await self._store.query(query)
