"""Deterministic storage keys for rules."""

from __future__ import annotations

from dataclasses import astuple, dataclass

from casbin_couchbase_adapter.rule import CasbinRule


@dataclass(frozen=True)
class KeyDeriver:
    """Derives the document key of a rule.

    The key is ``prefix + d + pType + d + v0 + d + ... + d + v5`` where ``d``
    is the delimiter.  Every slot is emitted, empty or not, so each field sits
    at a fixed position and identical rules always share one key.

    Keys stay unambiguous only while no rule value contains the delimiter.
    That is not checked here.
    """

    prefix: str
    delimiter: str

    def derive_key(self, rule: CasbinRule) -> str:
        return self.delimiter.join((self.prefix, *astuple(rule)))
