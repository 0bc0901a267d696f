"""
SPS Storage Policy - Settings
=============================
Reads storage policy configuration from Django settings.

    STORAGE_POLICY_NODE_PATH         configuration node holding the properties
    STORAGE_POLICY_STORE             "db" | "memory"
    STORAGE_POLICY_CLASSIFICATIONS   recognized classification names, or None
                                     for the built-in node types
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sps.storage_policy.store import STORAGE_POLICY_NODE_PATH

STORE_BACKEND_DB = "db"
STORE_BACKEND_MEMORY = "memory"

VALID_STORE_BACKENDS = frozenset({STORE_BACKEND_DB, STORE_BACKEND_MEMORY})


@dataclass(frozen=True)
class StoragePolicySettings:
    node_path: str = STORAGE_POLICY_NODE_PATH
    store_backend: str = STORE_BACKEND_DB
    classifications: Optional[tuple[str, ...]] = None

    def __post_init__(self):
        if not self.node_path or not isinstance(self.node_path, str):
            raise ValueError("node_path must be a non-empty string.")
        if not self.node_path.startswith("/"):
            raise ValueError("node_path must be an absolute repository path.")
        if self.store_backend not in VALID_STORE_BACKENDS:
            raise ValueError(
                f"store_backend '{self.store_backend}' not valid. "
                f"Must be one of: {sorted(VALID_STORE_BACKENDS)}"
            )
        if self.classifications is not None and not isinstance(
            self.classifications, tuple
        ):
            raise ValueError("classifications must be a tuple or None.")


def load_storage_policy_settings(source=None) -> StoragePolicySettings:
    """Build settings from a settings object (defaults to django.conf.settings)."""
    if source is None:
        from django.conf import settings as source

    classifications = getattr(source, "STORAGE_POLICY_CLASSIFICATIONS", None)
    if classifications is not None:
        classifications = tuple(classifications)

    return StoragePolicySettings(
        node_path=getattr(
            source, "STORAGE_POLICY_NODE_PATH", STORAGE_POLICY_NODE_PATH
        ),
        store_backend=getattr(source, "STORAGE_POLICY_STORE", STORE_BACKEND_DB),
        classifications=classifications,
    )
