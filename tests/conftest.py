"""Shared test fixtures."""

import pytest
from casbin.model import Model

from casbin_couchbase_adapter import CouchbaseAdapter, PolicyRepository
from casbin_couchbase_adapter.schema import AdapterSettings
from casbin_couchbase_adapter.stores import InMemoryStore

RBAC_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""


@pytest.fixture
def options():
    return {
        "bucket_name": "policies",
        "cluster_username": "casbin",
        "cluster_password": "secret",
        "key_delimiter": "::",
        "key_prefix": "Permission",
    }


@pytest.fixture
def settings(options):
    return AdapterSettings.from_options("couchbase://localhost", **options)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repository(settings, store):
    return PolicyRepository(settings, store=store)


@pytest.fixture
def adapter(options, store):
    return CouchbaseAdapter("couchbase://localhost", store=store, **options)


@pytest.fixture
def model():
    m = Model()
    m.load_model_from_text(RBAC_MODEL)
    return m
