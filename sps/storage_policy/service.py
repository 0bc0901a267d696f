"""
SPS Storage Policy — Service
==============================
Operations exposed to the request layer.

    create_policy   validate classification, build the policy family
    add_policy      register + persist (duplicates rejected)
    remove_policy   drop every policy under a classification key
    evaluate        storage hint for a resource's attributes
    list_policies   ordered descriptions, or NO_POLICIES_FOUND
    recover         rebuild the Decision Point from the store at startup

The service is constructed once at startup and handed to request
handlers. Tests build as many independent instances as they need.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from sps.storage_policy.classification import (
    AttributeClassifier,
    InMemoryAttributeClassifier,
    is_configuration_key,
)
from sps.storage_policy.contracts import StoragePolicy
from sps.storage_policy.exceptions import (
    NoPolicyFoundError,
    NotFoundError,
    UnsupportedClassificationError,
)
from sps.storage_policy.factory import StoragePolicyFactory, default_policy_factory
from sps.storage_policy.registry import (
    PolicyDescriptions,
    StoragePolicyDecisionPoint,
)
from sps.storage_policy.store import PolicyStoreAdapter

logger = logging.getLogger("sps.storage_policy")


class StoragePolicyService:
    def __init__(
        self,
        *,
        store: PolicyStoreAdapter,
        classifier: Optional[AttributeClassifier] = None,
        factory: Optional[StoragePolicyFactory] = None,
    ):
        self._store = store
        self._classifier = classifier or InMemoryAttributeClassifier()
        self._factory = factory or default_policy_factory()
        self._decision_point = StoragePolicyDecisionPoint(store=store)

    @property
    def decision_point(self) -> StoragePolicyDecisionPoint:
        return self._decision_point

    # ══════════════════════════════════════════════════════════
    # CLASSIFICATION
    # ══════════════════════════════════════════════════════════

    def is_supported_classification(self, classification_key: str) -> bool:
        return (
            self._classifier.is_recognized_classification(classification_key)
            or is_configuration_key(classification_key)
        )

    def _require_supported(self, classification_key: str) -> None:
        if not self.is_supported_classification(classification_key):
            raise UnsupportedClassificationError(classification_key)

    # ══════════════════════════════════════════════════════════
    # OPERATIONS
    # ══════════════════════════════════════════════════════════

    def create_policy(
        self,
        classification_key: str,
        match_value: str,
        storage_hint: str,
    ) -> StoragePolicy:
        self._require_supported(classification_key)
        return self._factory.create(classification_key, match_value, storage_hint)

    def add_policy(self, policy: StoragePolicy) -> StoragePolicy:
        self._decision_point.add(policy)
        return policy

    def remove_policy(self, classification_key: str) -> tuple[StoragePolicy, ...]:
        self._require_supported(classification_key)
        return self._decision_point.remove(classification_key)

    def clear_policies(self) -> None:
        self._decision_point.clear()

    def evaluate(self, resource_attributes: Mapping[str, str]) -> str:
        return self._decision_point.evaluate(resource_attributes)

    def resolve_storage_hint(
        self,
        resource_attributes: Mapping[str, str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        try:
            return self._decision_point.evaluate(resource_attributes)
        except NoPolicyFoundError:
            return default

    def list_policies(self) -> PolicyDescriptions:
        return self._decision_point.describe()

    def get_stored_policy(self, classification_key: str) -> str:
        """Raw durable value ("match_value:storage_hint") for a key."""
        value = self._store.read_property(classification_key)
        if value is None:
            raise NotFoundError(classification_key)
        return value

    # ══════════════════════════════════════════════════════════
    # STARTUP / RECOVERY
    # ══════════════════════════════════════════════════════════

    def recover(self) -> int:
        """
        Rebuild the Decision Point from the store.

        Entries whose classification is no longer supported are skipped.
        """
        recovered: list[StoragePolicy] = []
        for classification_key, match_value, storage_hint in self._store.load():
            try:
                recovered.append(
                    self.create_policy(classification_key, match_value, storage_hint)
                )
            except (UnsupportedClassificationError, ValueError) as exc:
                logger.warning(
                    f"Skipping stored storage policy {classification_key}: {exc}"
                )
        return self._decision_point.load(recovered)
