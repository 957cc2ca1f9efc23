"""Tests for CasbinRule."""

import pytest

from casbin_couchbase_adapter import RULE_FIELDS, CasbinRule


def test_from_policy_fills_slots_in_order():
    rule = CasbinRule.from_policy("p", ["alice", "data1", "read"])
    assert rule == CasbinRule("p", "alice", "data1", "read", "", "", "")


def test_from_policy_six_values():
    rule = CasbinRule.from_policy("p", ["a", "b", "c", "d", "e", "f"])
    assert rule.values() == ("a", "b", "c", "d", "e", "f")


def test_from_policy_rejects_seven_values():
    with pytest.raises(ValueError, match="at most 6"):
        CasbinRule.from_policy("p", ["a", "b", "c", "d", "e", "f", "g"])


def test_identical_tuples_are_equal_and_hash_alike():
    a = CasbinRule.from_policy("g", ["alice", "admin"])
    b = CasbinRule("g", "alice", "admin")
    assert a == b
    assert len({a, b}) == 1


def test_to_document_uses_stored_field_names():
    doc = CasbinRule.from_policy("p", ["alice", "data1", "read"]).to_document()
    assert list(doc) == list(RULE_FIELDS)
    assert doc["pType"] == "p"
    assert doc["v2"] == "read"
    assert doc["v5"] == ""


def test_from_document_missing_and_null_fields():
    rule = CasbinRule.from_document({"pType": "g", "v0": "bob", "v1": None})
    assert rule == CasbinRule("g", "bob")


def test_document_conversion_preserves_rule():
    rule = CasbinRule("p", "alice", "data1", "read")
    assert CasbinRule.from_document(rule.to_document()) == rule


# ── policy line rendering ────────────────────────────────────


def test_policy_line():
    rule = CasbinRule.from_policy("p", ["alice", "data1", "read"])
    assert rule.to_policy_line() == "p, alice, data1, read"
    assert str(rule) == "p, alice, data1, read"


def test_policy_line_ptype_only():
    assert CasbinRule("p").to_policy_line() == "p"


def test_policy_line_skips_empty_middle_slot():
    """An empty slot is dropped, shifting later values left."""
    rule = CasbinRule("p", "", "data1", "read")
    assert rule.to_policy_line() == "p, data1, read"
    assert rule.to_policy() == ["data1", "read"]
