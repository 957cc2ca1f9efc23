"""Storage backends for rule documents."""

from casbin_couchbase_adapter.stores.base import DocumentStore
from casbin_couchbase_adapter.stores.couchbase import CouchbaseStore
from casbin_couchbase_adapter.stores.memory import InMemoryStore

__all__ = ["CouchbaseStore", "DocumentStore", "InMemoryStore"]
