"""
SPS Storage Policy — Decision Engine
======================================
Decides where a binary is persisted from its descriptive attributes.

Policies are values. Duplicates are rejected by equality.
Evaluation is first-match in registration order.
The Decision Point is the source of truth; the store is its mirror.
"""

from sps.storage_policy.classification import (
    DEFAULT_NODE_TYPE_NAMES,
    AttributeClassifier,
    InMemoryAttributeClassifier,
    is_configuration_key,
)
from sps.storage_policy.contracts import StoragePolicy
from sps.storage_policy.exceptions import (
    DuplicatePolicyError,
    NoPolicyFoundError,
    NotFoundError,
    PersistenceError,
    StoragePolicyError,
    UnsupportedClassificationError,
)
from sps.storage_policy.factory import StoragePolicyFactory, default_policy_factory
from sps.storage_policy.policies import MIX_MIMETYPE, MimeTypeStoragePolicy
from sps.storage_policy.registry import NO_POLICIES_FOUND, StoragePolicyDecisionPoint
from sps.storage_policy.service import StoragePolicyService
from sps.storage_policy.store import (
    STORAGE_POLICY_NODE_PATH,
    InMemoryPolicyStore,
    PolicyStoreAdapter,
)

__all__ = [
    # ── Policies ──────────────────────────────────────────────
    "StoragePolicy",
    "MimeTypeStoragePolicy",
    "MIX_MIMETYPE",
    "StoragePolicyFactory",
    "default_policy_factory",
    # ── Classification ────────────────────────────────────────
    "AttributeClassifier",
    "InMemoryAttributeClassifier",
    "DEFAULT_NODE_TYPE_NAMES",
    "is_configuration_key",
    # ── Decision Point ────────────────────────────────────────
    "StoragePolicyDecisionPoint",
    "NO_POLICIES_FOUND",
    "StoragePolicyService",
    # ── Store ─────────────────────────────────────────────────
    "PolicyStoreAdapter",
    "InMemoryPolicyStore",
    "STORAGE_POLICY_NODE_PATH",
    # ── Exceptions ────────────────────────────────────────────
    "StoragePolicyError",
    "UnsupportedClassificationError",
    "DuplicatePolicyError",
    "NotFoundError",
    "NoPolicyFoundError",
    "PersistenceError",
]
