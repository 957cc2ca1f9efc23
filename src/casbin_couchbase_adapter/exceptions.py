"""Custom exceptions for the casbin_couchbase_adapter package."""

from __future__ import annotations


class AdapterError(Exception):
    """Base exception for all adapter errors."""


class AdapterConfigError(AdapterError):
    """Raised when the adapter is constructed with invalid options."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Adapter misconfigured: {message}")


class StoreError(AdapterError):
    """Raised when a store operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class StoreConnectionError(StoreError):
    """Raised when the store is unreachable or rejects the credentials."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("connect", detail)


class DocumentNotFoundError(StoreError):
    """Raised when a keyed removal targets a document that does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__("remove", f"document '{key}' not found")
