"""
SPS Storage Policy — Exceptions
=================================
Structured errors for storage policy operations.

All of these are local-recoverable for the caller. None of them leave
the Decision Point in a state it failed to durably record.
"""

from __future__ import annotations


class StoragePolicyError(Exception):
    """Base error for storage policy operations."""
    pass


class UnsupportedClassificationError(StoragePolicyError):
    """Classification key is neither a recognized attribute class nor a
    supported configuration key, or no policy family maps to it."""

    def __init__(self, classification_key: str, reason: str = ""):
        self.classification_key = classification_key
        self.reason = reason
        message = f"Invalid property type specified: '{classification_key}'."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class DuplicatePolicyError(StoragePolicyError):
    """An equal policy is already registered."""

    def __init__(self, policy):
        self.policy = policy
        super().__init__(
            f"Storage policy {policy.classification_key} "
            f"'{policy.match_value}' -> '{policy.storage_hint}' "
            f"already exists."
        )


class NotFoundError(StoragePolicyError):
    """No policy is currently held for the classification key."""

    def __init__(self, classification_key: str):
        self.classification_key = classification_key
        super().__init__(
            f"StoragePolicy not found: '{classification_key}'."
        )


class NoPolicyFoundError(StoragePolicyError):
    """
    Evaluation matched no policy.

    Expected outcome for callers with a default location. Distinct
    from PersistenceError and never a system failure.
    """

    def __init__(self, resource_attributes=None):
        self.resource_attributes = dict(resource_attributes or {})
        shown = sorted(
            self.resource_attributes.items(), key=lambda kv: str(kv[0])
        )
        super().__init__(f"No storage policy matches attributes {shown}.")


class PersistenceError(StoragePolicyError):
    """The policy store failed to record or read policy state."""

    def __init__(self, operation: str, cause: Exception = None):
        self.operation = operation
        self.cause = cause
        detail = (
            f": {type(cause).__name__}: {cause}" if cause is not None else "."
        )
        super().__init__(
            f"Storage policy store failed during '{operation}'{detail}"
        )
