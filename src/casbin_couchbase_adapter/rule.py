"""CasbinRule — one policy line in its storable, fixed-slot form."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import astuple, dataclass
from typing import Any

# Stored attribute names, in key and predicate order.
RULE_FIELDS: tuple[str, ...] = ("pType", "v0", "v1", "v2", "v3", "v4", "v5")
VALUE_FIELDS: tuple[str, ...] = RULE_FIELDS[1:]
MAX_RULE_VALUES = len(VALUE_FIELDS)


@dataclass(frozen=True)
class CasbinRule:
    """Immutable record of a single rule: a section type plus six positional slots.

    Unused slots are empty strings.  Two rules with the same 7-tuple are the
    same rule, so equality and hashing cover every slot.

    Attributes:
        ptype: Policy type discriminator (``"p"``, ``"g"``, ``"g2"``, ...).
        v0-v5: Positional rule values.
    """

    ptype: str = ""
    v0: str = ""
    v1: str = ""
    v2: str = ""
    v3: str = ""
    v4: str = ""
    v5: str = ""

    # ── Factory helpers ──────────────────────────────────────

    @classmethod
    def from_policy(cls, ptype: str, rule: Sequence[str]) -> CasbinRule:
        """Map an enforcer rule (up to six ordered strings) onto ``v0..v5``."""
        if len(rule) > MAX_RULE_VALUES:
            raise ValueError(
                f"A rule holds at most {MAX_RULE_VALUES} values, got {len(rule)}: {list(rule)}"
            )
        values = [str(value) for value in rule]
        values += [""] * (MAX_RULE_VALUES - len(values))
        return cls(ptype, *values)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> CasbinRule:
        """Build a rule from a stored document.  Missing attributes read as ``""``."""
        values = [document.get(name) or "" for name in RULE_FIELDS]
        return cls(*(str(value) for value in values))

    # ── Conversions ──────────────────────────────────────────

    def to_document(self) -> dict[str, str]:
        return dict(zip(RULE_FIELDS, astuple(self), strict=True))

    def values(self) -> tuple[str, ...]:
        return (self.v0, self.v1, self.v2, self.v3, self.v4, self.v5)

    def to_policy(self) -> list[str]:
        """Return the non-empty slots, in order."""
        return [value for value in self.values() if value]

    def to_policy_line(self) -> str:
        """Render the rule as a policy line, e.g. ``"p, alice, data1, read"``.

        A slot is appended only when it is non-empty.  An empty slot in the
        middle therefore shifts every later value one position left:
        ``CasbinRule("p", "", "data1")`` renders as ``"p, data1"``.  Rules
        written through the adapter never have gaps, so this only matters for
        documents written by other tools.
        """
        return ", ".join([self.ptype, *self.to_policy()])

    def __str__(self) -> str:
        return self.to_policy_line()
