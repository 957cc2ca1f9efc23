"""CouchbaseStore — rule documents in a Couchbase collection via the asyncio SDK."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from acouchbase.cluster import Cluster
from couchbase.auth import PasswordAuthenticator
from couchbase.exceptions import DocumentNotFoundException
from couchbase.n1ql import QueryScanConsistency
from couchbase.options import ClusterOptions, QueryOptions

from casbin_couchbase_adapter.exceptions import DocumentNotFoundError
from casbin_couchbase_adapter.query import PredicateQuery, QueryOperation, keyspace
from casbin_couchbase_adapter.stores.base import DocumentStore

if TYPE_CHECKING:
    from casbin_couchbase_adapter.schema import AdapterSettings

logger = logging.getLogger(__name__)

_DEFAULT = "_default"


class CouchbaseStore(DocumentStore):
    """Stores each rule as a JSON document in one collection.

    The cluster handle is created eagerly; nothing waits on the network until
    :meth:`connect` is awaited.  SDK exceptions other than a missing document
    on removal propagate unchanged.

    Parameters:
        settings: Validated connection options.
        cluster:  Pre-built ``acouchbase`` cluster.  Built from *settings*
                  when omitted.
    """

    def __init__(self, settings: AdapterSettings, cluster: Cluster | None = None) -> None:
        self._settings = settings
        self._cluster = cluster or Cluster(
            settings.connection_string,
            ClusterOptions(
                PasswordAuthenticator(settings.cluster_username, settings.cluster_password)
            ),
        )
        self._bucket = self._cluster.bucket(settings.bucket_name)
        self._collection = self._bucket.scope(settings.scope_name).collection(
            settings.collection_name
        )

        if settings.scope_name == _DEFAULT and settings.collection_name == _DEFAULT:
            self._keyspace = keyspace(settings.bucket_name)
        else:
            self._keyspace = keyspace(
                settings.bucket_name, settings.scope_name, settings.collection_name
            )

    @property
    def keyspace(self) -> str:
        return self._keyspace

    async def connect(self) -> None:
        await self._cluster.on_connect()
        await self._bucket.on_connect()
        logger.info(
            "Connected to Couchbase bucket %r at %s",
            self._settings.bucket_name,
            self._settings.connection_string,
        )

    async def close(self) -> None:
        await self._cluster.close()

    # ── DocumentStore protocol ───────────────────────────────

    async def upsert(self, key: str, document: dict[str, Any]) -> None:
        await self._collection.upsert(key, document)

    async def remove(self, key: str) -> None:
        try:
            await self._collection.remove(key)
        except DocumentNotFoundException as e:
            raise DocumentNotFoundError(key) from e

    async def query(self, query: PredicateQuery) -> list[dict[str, Any]]:
        result = self._cluster.query(
            query.statement,
            QueryOptions(
                named_parameters=query.parameters,
                scan_consistency=QueryScanConsistency.REQUEST_PLUS,
            ),
        )
        rows = [row async for row in result.rows()]
        if query.operation is QueryOperation.DELETE:
            return []
        return rows
