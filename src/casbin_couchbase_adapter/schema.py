"""Pydantic models for adapter configuration and load filters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

from casbin_couchbase_adapter.exceptions import AdapterConfigError


class AdapterSettings(BaseModel):
    """Connection and key layout options, validated before any connection attempt.

    Attributes:
        connection_string: Couchbase connection string, e.g. ``couchbase://localhost``
        bucket_name: Bucket holding the rule documents
        cluster_username: RBAC username
        cluster_password: RBAC password
        key_delimiter: Separator between key parts, e.g. ``"::"``.  Must never
            occur inside a rule value.
        key_prefix: Namespace put in front of every key, e.g. ``"Permission"``
        scope_name: Scope within the bucket
        collection_name: Collection within the scope
        is_filtered: Initial filtered state of the adapter
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection_string: StrictStr = Field(min_length=1)
    bucket_name: StrictStr = Field(min_length=1)
    cluster_username: StrictStr = Field(min_length=1)
    cluster_password: StrictStr = Field(min_length=1, repr=False)
    key_delimiter: StrictStr = Field(min_length=1)
    key_prefix: StrictStr = Field(min_length=1)
    scope_name: StrictStr = Field(default="_default", min_length=1)
    collection_name: StrictStr = Field(default="_default", min_length=1)
    is_filtered: StrictBool = False

    @classmethod
    def from_options(cls, connection_string: Any, **options: Any) -> AdapterSettings:
        """Validate raw constructor options.

        Raises:
            AdapterConfigError: Naming every missing or mistyped option.
        """
        try:
            return cls(connection_string=connection_string, **options)
        except ValidationError as e:
            problems = "; ".join(
                f"'{'.'.join(str(loc) for loc in err['loc'])}' {err['msg'].lower()}"
                for err in e.errors()
            )
            raise AdapterConfigError(problems) from e


class RuleFilter(BaseModel):
    """Selects the subset of rules a filtered load brings into the enforcer.

    Unset fields do not constrain the load.

    Example:
        RuleFilter(ptype="p", v0="alice")
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    ptype: str | None = Field(default=None, alias="pType")
    v0: str | None = None
    v1: str | None = None
    v2: str | None = None
    v3: str | None = None
    v4: str | None = None
    v5: str | None = None

    @classmethod
    def coerce(cls, value: RuleFilter | Mapping[str, Any]) -> RuleFilter:
        if isinstance(value, RuleFilter):
            return value
        return cls.model_validate(dict(value))

    def predicates(self) -> dict[str, str]:
        """Return the stored-field predicate set for this filter."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return {name: value for name, value in data.items() if value}
