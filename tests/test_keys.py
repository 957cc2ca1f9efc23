"""Tests for KeyDeriver."""

from casbin_couchbase_adapter import CasbinRule, KeyDeriver


def test_key_contains_every_slot():
    keys = KeyDeriver(prefix="Permission", delimiter="::")
    rule = CasbinRule.from_policy("p", ["alice", "data1", "read"])
    assert keys.derive_key(rule) == "Permission::p::alice::data1::read::::::"


def test_identical_rules_share_a_key():
    keys = KeyDeriver(prefix="P", delimiter="|")
    a = CasbinRule.from_policy("g", ["alice", "admin"])
    b = CasbinRule("g", "alice", "admin", "", "", "", "")
    assert keys.derive_key(a) == keys.derive_key(b)


def test_differing_rules_get_different_keys():
    keys = KeyDeriver(prefix="P", delimiter="|")
    rules = [
        CasbinRule("p", "alice", "data1", "read"),
        CasbinRule("p", "alice", "data1", "write"),
        CasbinRule("g", "alice", "data1", "read"),
        CasbinRule("p", "", "alice", "data1", "read"),
        CasbinRule("p", "alice", "data1", "read", "", "", "x"),
    ]
    derived = {keys.derive_key(rule) for rule in rules}
    assert len(derived) == len(rules)


def test_prefix_namespaces_keys():
    rule = CasbinRule("p", "alice")
    assert KeyDeriver("A", ":").derive_key(rule) != KeyDeriver("B", ":").derive_key(rule)
    assert KeyDeriver("A", ":").derive_key(rule).startswith("A:p:alice")
