"""casbin_couchbase_adapter — Couchbase storage for PyCasbin policies.

Rules are stored one document per rule under a deterministic key, so
saving the same rule twice is harmless.  Bulk loads and filtered removals
go through parameterised SQL++ queries.
"""

from casbin_couchbase_adapter.adapter import CouchbaseAdapter
from casbin_couchbase_adapter.exceptions import (
    AdapterConfigError,
    AdapterError,
    DocumentNotFoundError,
    StoreConnectionError,
    StoreError,
)
from casbin_couchbase_adapter.keys import KeyDeriver
from casbin_couchbase_adapter.query import PredicateQuery, QueryOperation, build_predicate_query
from casbin_couchbase_adapter.repository import PolicyRepository
from casbin_couchbase_adapter.rule import RULE_FIELDS, CasbinRule
from casbin_couchbase_adapter.schema import AdapterSettings, RuleFilter

__all__ = [
    "RULE_FIELDS",
    "AdapterConfigError",
    "AdapterError",
    "AdapterSettings",
    "CasbinRule",
    "CouchbaseAdapter",
    "DocumentNotFoundError",
    "KeyDeriver",
    "PolicyRepository",
    "PredicateQuery",
    "QueryOperation",
    "RuleFilter",
    "StoreConnectionError",
    "StoreError",
    "build_predicate_query",
]
