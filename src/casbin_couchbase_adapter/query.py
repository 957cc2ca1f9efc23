"""Predicate query construction for bulk reads and deletes.

A query is built from a sparse *predicate set*: a mapping of stored field
name to required value.  Only fields with a non-empty value constrain the
query; absent fields match anything (they are not compared to ``""``).
Values are always bound as named parameters, never spliced into the text.

The generated statements are SQL++ (N1QL).  They use backtick-quoted
identifiers and ``$name`` parameters, which SQLite accepts as well, so every
backend executes the same text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from casbin_couchbase_adapter.rule import RULE_FIELDS

DOCUMENT_ALIAS = "doc"


class QueryOperation(str, Enum):
    SELECT = "select"
    DELETE = "delete"


@dataclass(frozen=True)
class PredicateQuery:
    """A ready-to-execute statement with its bound parameters.

    Attributes:
        operation:  Whether the statement reads or deletes documents.
        statement:  Statement text containing ``$field`` placeholders.
        parameters: Named parameter values, keyed without the ``$``.
    """

    operation: QueryOperation
    statement: str
    parameters: dict[str, str] = field(default_factory=dict)

    def matches(self, document: Mapping[str, object]) -> bool:
        """Return ``True`` if *document* satisfies every predicate."""
        return all(document.get(name) == value for name, value in self.parameters.items())


def quote_identifier(name: str) -> str:
    """Backtick-quote an identifier, doubling any embedded backtick."""
    return "`" + name.replace("`", "``") + "`"


def keyspace(*parts: str) -> str:
    """Join quoted identifiers into a dotted keyspace path."""
    return ".".join(quote_identifier(part) for part in parts)


def select_predicates(fields: Mapping[str, str | None]) -> dict[str, str]:
    """Return the subset of *fields* that constrains a query, in declared order.

    Raises:
        ValueError: If *fields* names something that is not a rule field.
    """
    unknown = set(fields) - set(RULE_FIELDS)
    if unknown:
        raise ValueError(
            f"Unknown rule field(s): {', '.join(sorted(unknown))}. "
            f"Expected any of: {', '.join(RULE_FIELDS)}"
        )
    predicates: dict[str, str] = {}
    for name in RULE_FIELDS:
        value = fields.get(name)
        if value:
            predicates[name] = value
    return predicates


def build_predicate_query(
    fields: Mapping[str, str | None],
    operation: QueryOperation,
    target: str,
) -> PredicateQuery:
    """Translate a predicate set into a SELECT or DELETE statement.

    Args:
        fields:    Stored field name -> required value.  Empty values are skipped.
        operation: Statement verb.
        target:    Already-quoted keyspace the statement runs against.

    Returns:
        The statement and its named parameters.  An empty predicate set gives
        a statement without a ``WHERE`` clause, i.e. one that reads or deletes
        the whole keyspace.
    """
    parameters = select_predicates(fields)
    conditions = [f"{quote_identifier(name)} = ${name}" for name in parameters]

    if operation is QueryOperation.SELECT:
        statement = f"SELECT {DOCUMENT_ALIAS}.* FROM {target} AS {DOCUMENT_ALIAS}"
    else:
        statement = f"DELETE FROM {target}"

    if conditions:
        statement += " WHERE " + " AND ".join(conditions)

    return PredicateQuery(operation=operation, statement=statement, parameters=parameters)
