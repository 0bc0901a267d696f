"""
SPS Storage Policy — Decision Point
=====================================
Holds the active storage policies and answers "where should this go?".

Responsibilities:
- Register policies, rejecting duplicates by value equality
- First-match evaluation in registration order
- Remove per classification key / clear all
- Mirror every mutation into the policy store inside the same
  critical section, rolling back memory when the store fails
- Describe the active set, with an explicit sentinel when empty

The store is a durability log. The Decision Point is the source of
truth at runtime; the store is read only through load() at startup.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from sps.storage_policy.contracts import StoragePolicy
from sps.storage_policy.exceptions import (
    DuplicatePolicyError,
    NoPolicyFoundError,
    NotFoundError,
    PersistenceError,
)
from sps.storage_policy.store import PolicyStoreAdapter

logger = logging.getLogger("sps.storage_policy")

NO_POLICIES_FOUND = "No Policies Found"

PolicyDescriptions = Union[Tuple[dict, ...], str]


class StoragePolicyDecisionPoint:
    """
    Ordered, duplicate-free set of storage policies.

    Thread-safe. One lock serializes every operation, so check-then-add
    cannot race and readers never see a half-applied mutation.

    Usage:
        decision_point = StoragePolicyDecisionPoint(store=InMemoryPolicyStore())
        decision_point.add(MimeTypeStoragePolicy(MIX_MIMETYPE, "image/tiff", "diskA"))
        decision_point.evaluate({MIX_MIMETYPE: "image/tiff"})   # "diskA"
    """

    def __init__(self, store: Optional[PolicyStoreAdapter] = None):
        self._policies: List[StoragePolicy] = []
        self._store = store
        self._lock = Lock()

    # ══════════════════════════════════════════════════════════
    # MUTATION
    # ══════════════════════════════════════════════════════════

    def add(self, policy: StoragePolicy) -> None:
        """
        Register a policy.

        Raises:
            DuplicatePolicyError: an equal policy is already registered.
            PersistenceError:     the store rejected the write; nothing
                                  changes in memory.
        """
        if not isinstance(policy, StoragePolicy):
            raise TypeError(
                f"Expected StoragePolicy instance, got {type(policy).__name__}."
            )

        with self._lock:
            if policy in self._policies:
                raise DuplicatePolicyError(policy)

            if self._store is not None:
                self._store_call(
                    "persist",
                    self._store.persist,
                    policy.classification_key,
                    policy.match_value,
                    policy.storage_hint,
                )

            self._policies.append(policy)

            logger.info(
                f"Storage policy registered: {policy.classification_key} "
                f"{policy.match_value} -> {policy.storage_hint} "
                f"({len(self._policies)} active)"
            )

    def remove(self, classification_key: str) -> Tuple[StoragePolicy, ...]:
        """
        Remove every policy under a classification key.

        Raises:
            NotFoundError:    no policy is held for the key.
            PersistenceError: the store failed; removed policies are
                              restored in memory.
        """
        with self._lock:
            removed = tuple(
                p for p in self._policies
                if p.classification_key == classification_key
            )
            if not removed:
                raise NotFoundError(classification_key)

            previous = list(self._policies)
            self._policies = [
                p for p in self._policies
                if p.classification_key != classification_key
            ]

            if self._store is not None:
                try:
                    self._store_call(
                        "remove_property",
                        self._store.remove_property,
                        classification_key,
                    )
                except PersistenceError:
                    self._policies = previous
                    raise

            logger.info(
                f"Storage policies removed for {classification_key}: "
                f"{len(removed)} ({len(self._policies)} active)"
            )
            return removed

    def clear(self) -> None:
        """
        Remove all policies and clear the store mirror.

        On store failure the in-memory set is restored and properties
        already removed are written back before the error propagates.
        """
        with self._lock:
            previous = list(self._policies)
            self._policies = []

            if self._store is not None and previous:
                removed_keys: List[str] = []
                try:
                    for key in _distinct_keys(previous):
                        self._store_call(
                            "remove_property", self._store.remove_property, key
                        )
                        removed_keys.append(key)
                except PersistenceError:
                    self._policies = previous
                    self._restore_properties(previous, removed_keys)
                    raise

            logger.info(
                f"Storage policies cleared ({len(previous)} removed)"
            )

    def load(self, policies: Iterable[StoragePolicy]) -> int:
        """
        Replace in-memory state with recovered policies.

        Does not touch the store. Repeated entries keep their first
        occurrence.
        """
        loaded: List[StoragePolicy] = []
        for policy in policies:
            if not isinstance(policy, StoragePolicy):
                raise TypeError(
                    f"Expected StoragePolicy instance, "
                    f"got {type(policy).__name__}."
                )
            if policy not in loaded:
                loaded.append(policy)

        with self._lock:
            self._policies = loaded
            logger.info(f"Storage policies loaded: {len(loaded)}")
            return len(loaded)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def contains(self, policy: StoragePolicy) -> bool:
        with self._lock:
            return policy in self._policies

    def is_empty(self) -> bool:
        with self._lock:
            return not self._policies

    def __len__(self) -> int:
        with self._lock:
            return len(self._policies)

    def policies(self) -> Tuple[StoragePolicy, ...]:
        """Snapshot in registration order."""
        with self._lock:
            return tuple(self._policies)

    def evaluate(self, resource_attributes: Mapping[str, str]) -> str:
        """
        Return the storage hint of the first matching policy.

        Ties are resolved by registration order; there is no
        specificity ranking.

        Raises:
            NoPolicyFoundError: nothing matches.
        """
        for policy in self.policies():
            hint = policy.evaluate(resource_attributes)
            if hint is not None:
                return hint

        logger.debug(f"No storage policy matched {dict(resource_attributes or {})}")
        raise NoPolicyFoundError(resource_attributes)

    def describe(self) -> PolicyDescriptions:
        """Descriptions in registration order, or NO_POLICIES_FOUND."""
        snapshot = self.policies()
        if not snapshot:
            return NO_POLICIES_FOUND
        return tuple(policy.describe() for policy in snapshot)

    def __str__(self) -> str:
        snapshot = self.policies()
        if not snapshot:
            return NO_POLICIES_FOUND
        return "\n".join(str(policy) for policy in snapshot)

    # ══════════════════════════════════════════════════════════
    # STORE MIRROR
    # ══════════════════════════════════════════════════════════

    @staticmethod
    def _store_call(operation: str, call, *args):
        try:
            return call(*args)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(operation, exc) from exc

    def _restore_properties(
        self,
        policies: List[StoragePolicy],
        removed_keys: List[str],
    ) -> None:
        # Last policy per key is the one the store held.
        latest = {p.classification_key: p for p in policies}
        for key in removed_keys:
            policy = latest[key]
            try:
                self._store_call(
                    "persist",
                    self._store.persist,
                    key,
                    policy.match_value,
                    policy.storage_hint,
                )
            except PersistenceError:
                logger.exception(
                    f"Failed to restore stored policy for {key} "
                    f"after aborted clear"
                )
                raise


def _distinct_keys(policies: Iterable[StoragePolicy]) -> List[str]:
    keys: List[str] = []
    for policy in policies:
        if policy.classification_key not in keys:
            keys.append(policy.classification_key)
    return keys
