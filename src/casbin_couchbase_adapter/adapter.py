"""CouchbaseAdapter — PyCasbin asyncio adapter persisting rules in Couchbase."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from casbin import persist
from casbin.persist.adapters.asyncio import AsyncAdapter

from casbin_couchbase_adapter.exceptions import DocumentNotFoundError
from casbin_couchbase_adapter.repository import PolicyRepository
from casbin_couchbase_adapter.rule import MAX_RULE_VALUES, VALUE_FIELDS, CasbinRule
from casbin_couchbase_adapter.schema import AdapterSettings, RuleFilter

if TYPE_CHECKING:
    from casbin.model import Model

    from casbin_couchbase_adapter.stores.base import DocumentStore

logger = logging.getLogger(__name__)

# Model sections persisted by save_policy, in save order.
SAVED_SECTIONS = ("p", "g")


class CouchbaseAdapter(AsyncAdapter):
    """Stores Casbin rules as Couchbase documents, one document per rule.

    Construction validates the options and creates the cluster handle but
    does not wait for the connection.  Use :meth:`new_adapter` (or await
    :meth:`connected`) to be sure the store is reachable before the enforcer
    first loads policy.

    The Couchbase cluster handle binds to the event loop current at
    construction, so build the adapter inside the loop that will use it,
    e.g. with :meth:`new_adapter`.

    The ``sec`` argument of the enforcer-facing methods is accepted for
    interface compatibility only: every rule lives in the same collection and
    is told apart by its ``pType``.

    Parameters:
        uri:     Couchbase connection string.
        store:   Backend to use instead of Couchbase (tests, local runs).
        options: :class:`AdapterSettings` fields: ``bucket_name``,
                 ``cluster_username``, ``cluster_password``, ``key_delimiter``,
                 ``key_prefix`` and optionally ``scope_name``,
                 ``collection_name``, ``is_filtered``.

    Raises:
        AdapterConfigError: If an option is missing, empty or mistyped.

    Example:
        adapter = await CouchbaseAdapter.new_adapter(
            "couchbase://localhost",
            bucket_name="policies",
            cluster_username="casbin",
            cluster_password="secret",
            key_delimiter="::",
            key_prefix="Permission",
        )
        enforcer = casbin.AsyncEnforcer("model.conf", adapter)
        await enforcer.load_policy()
    """

    def __init__(self, uri: str, *, store: DocumentStore | None = None, **options: Any) -> None:
        self.settings = AdapterSettings.from_options(uri, **options)
        self._filtered = self.settings.is_filtered
        self._filter: RuleFilter | None = None
        self.policy_repository = PolicyRepository(self.settings, store=store)

    @classmethod
    async def new_adapter(
        cls, uri: str, *, store: DocumentStore | None = None, **options: Any
    ) -> CouchbaseAdapter:
        """Construct an adapter and wait for its store connection."""
        adapter = cls(uri, store=store, **options)
        await adapter.connected()
        return adapter

    async def connected(self) -> None:
        await self.policy_repository.connected()

    async def close(self) -> None:
        await self.policy_repository.close()

    # ── filtered state ───────────────────────────────────────

    def is_filtered(self) -> bool:
        """Whether the enforcer holds only part of the stored policy."""
        return self._filtered

    def set_filtered(self, is_filtered: bool = True) -> None:
        """Set the filtered state.  Leaving it drops the remembered load filter."""
        self._filtered = is_filtered
        if not is_filtered:
            self._filter = None

    # ── loading ──────────────────────────────────────────────

    async def load_policy(self, model: Model) -> None:
        """Load stored rules into *model*.

        While filtered with an active filter, only matching rules are loaded.
        """
        predicates = self._filter.predicates() if self._filtered and self._filter else {}
        rules = await self.policy_repository.get_list_where(predicates)
        for rule in rules:
            self.load_policy_line(rule, model)
        logger.info("Loaded %d rule(s) into the model", len(rules))

    async def load_filtered_policy(
        self, model: Model, filter: RuleFilter | Mapping[str, Any] | None = None
    ) -> None:
        """Load only the rules selected by *filter*.

        Passing a filter switches the adapter to the filtered state; passing
        none switches it back and loads everything.
        """
        self._filter = RuleFilter.coerce(filter) if filter is not None else None
        self.set_filtered(self._filter is not None)
        await self.load_policy(model)

    def load_policy_line(self, rule: CasbinRule, model: Model) -> None:
        """Feed one stored rule into *model* as a policy line.

        Empty slots are skipped, so a rule with a gap (e.g. ``v0`` empty and
        ``v1`` set) loads with its later values shifted left.
        """
        persist.load_policy_line(rule.to_policy_line(), model)

    # ── saving ───────────────────────────────────────────────

    def save_policy_line(self, ptype: str, rule: Sequence[str]) -> CasbinRule:
        """Convert an enforcer rule into its storable record."""
        return CasbinRule.from_policy(ptype, rule)

    async def save_policy(self, model: Model) -> bool:
        """Upsert every ``p`` and ``g`` rule held by *model*, one at a time.

        Rules already stored but absent from *model* are left in place, and
        a failure part-way leaves the earlier upserts written.
        """
        count = 0
        for sec in SAVED_SECTIONS:
            for ptype, ast in model.model.get(sec, {}).items():
                for rule in ast.policy:
                    await self.policy_repository.upsert_item(self.save_policy_line(ptype, rule))
                    count += 1
        logger.info("Saved %d rule(s) from the model", count)
        return True

    # ── incremental changes ──────────────────────────────────

    async def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        await self.policy_repository.upsert_item(self.save_policy_line(ptype, rule))
        return True

    async def add_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        for rule in rules:
            await self.add_policy(sec, ptype, rule)
        return True

    async def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Remove one exact rule.  Removing a rule that is not stored succeeds."""
        try:
            await self.policy_repository.remove_item(self.save_policy_line(ptype, rule))
        except DocumentNotFoundError as e:
            logger.debug("Rule already absent: %s", e.key)
        return True

    async def remove_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        for rule in rules:
            await self.remove_policy(sec, ptype, rule)
        return True

    async def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> bool:
        """Remove every rule of *ptype* matching *field_values* from slot *field_index* on.

        ``field_values[0]`` constrains ``v{field_index}``, the next value the
        following slot, and so on.  Empty values leave their slot
        unconstrained.

        Raises:
            ValueError: If the values do not fit within ``v0..v5``.
        """
        if not 0 <= field_index < MAX_RULE_VALUES:
            raise ValueError(f"field_index must be between 0 and {MAX_RULE_VALUES - 1}")
        if field_index + len(field_values) > MAX_RULE_VALUES:
            raise ValueError(
                f"{len(field_values)} value(s) from v{field_index} exceed the last slot "
                f"v{MAX_RULE_VALUES - 1}"
            )

        predicates = {"pType": ptype}
        slots = VALUE_FIELDS[field_index : field_index + len(field_values)]
        for name, value in zip(slots, field_values, strict=True):
            if value:
                predicates[name] = value

        await self.policy_repository.remove_list_where(predicates)
        return True
