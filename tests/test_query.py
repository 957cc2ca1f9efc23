"""Tests for predicate query construction."""

import pytest

from casbin_couchbase_adapter.query import (
    QueryOperation,
    build_predicate_query,
    keyspace,
    quote_identifier,
)

TARGET = "`policies`"


def test_empty_select_has_no_predicates():
    query = build_predicate_query({}, QueryOperation.SELECT, TARGET)
    assert query.statement == "SELECT doc.* FROM `policies` AS doc"
    assert query.parameters == {}


def test_empty_delete_has_no_predicates():
    query = build_predicate_query({}, QueryOperation.DELETE, TARGET)
    assert query.statement == "DELETE FROM `policies`"
    assert query.parameters == {}


def test_two_predicates_bound_by_name():
    query = build_predicate_query({"pType": "p", "v1": "x"}, QueryOperation.SELECT, TARGET)
    assert query.statement == (
        "SELECT doc.* FROM `policies` AS doc WHERE `pType` = $pType AND `v1` = $v1"
    )
    assert query.parameters == {"pType": "p", "v1": "x"}
    for name in ("v0", "v2", "v3", "v4", "v5"):
        assert name not in query.statement


def test_predicate_order_ignores_mapping_order():
    a = build_predicate_query({"v1": "x", "pType": "p"}, QueryOperation.DELETE, TARGET)
    b = build_predicate_query({"pType": "p", "v1": "x"}, QueryOperation.DELETE, TARGET)
    assert a == b
    assert a.statement == "DELETE FROM `policies` WHERE `pType` = $pType AND `v1` = $v1"


def test_values_never_appear_in_statement():
    value = "x' OR 1=1 --"
    query = build_predicate_query({"v0": value}, QueryOperation.SELECT, TARGET)
    assert value not in query.statement
    assert query.parameters == {"v0": value}


def test_empty_and_none_values_are_unset():
    query = build_predicate_query(
        {"pType": "g", "v0": "", "v1": None, "v2": "admin"}, QueryOperation.SELECT, TARGET
    )
    assert query.parameters == {"pType": "g", "v2": "admin"}


def test_unknown_field_rejected():
    with pytest.raises(ValueError, match="Unknown rule field"):
        build_predicate_query({"ptype; DROP": "p"}, QueryOperation.SELECT, TARGET)


def test_matches():
    query = build_predicate_query({"pType": "p", "v1": "data1"}, QueryOperation.SELECT, TARGET)
    assert query.matches({"pType": "p", "v0": "alice", "v1": "data1"})
    assert not query.matches({"pType": "p", "v0": "alice", "v1": "data2"})
    assert not query.matches({"pType": "g", "v1": "data1"})


def test_quote_identifier_escapes_backticks():
    assert quote_identifier("a`b") == "`a``b`"


def test_keyspace_path():
    assert keyspace("bucket", "scope", "coll") == "`bucket`.`scope`.`coll`"
