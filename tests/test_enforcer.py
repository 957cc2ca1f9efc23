"""End-to-end tests through casbin.AsyncEnforcer."""

import casbin
import pytest

from casbin_couchbase_adapter import CasbinRule


@pytest.fixture
async def enforcer(adapter, model):
    await adapter.add_policy("p", "p", ["admin", "data1", "read"])
    await adapter.add_policy("p", "p", ["bob", "data2", "write"])
    await adapter.add_policy("g", "g", ["alice", "admin"])
    e = casbin.AsyncEnforcer(model, adapter)
    await e.load_policy()
    return e


async def test_enforce_loaded_policy(enforcer):
    assert enforcer.enforce("alice", "data1", "read")
    assert enforcer.enforce("bob", "data2", "write")
    assert not enforcer.enforce("bob", "data1", "read")


async def test_add_policy_is_persisted(enforcer, adapter):
    await enforcer.add_policy("carol", "data3", "read")
    rules = await adapter.policy_repository.get_list_where({"v0": "carol"})
    assert rules == [CasbinRule("p", "carol", "data3", "read")]


async def test_remove_policy_is_persisted(enforcer, adapter):
    await enforcer.remove_policy("bob", "data2", "write")
    assert await adapter.policy_repository.get_list_where({"v0": "bob"}) == []


async def test_reload_after_remove_filtered(enforcer, adapter):
    await enforcer.remove_filtered_policy(1, "data2")
    await enforcer.load_policy()
    assert not enforcer.enforce("bob", "data2", "write")
    assert enforcer.enforce("alice", "data1", "read")
