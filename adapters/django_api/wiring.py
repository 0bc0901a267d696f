"""
SPS Django Adapter Wiring
=========================
Constructs HttpApiDependencies once per process.

This module is adapter-only glue:
- reads storage policy settings from Django settings
- builds the policy store, the service, and its Decision Point
- recovers persisted policies before the first request is served
"""

from __future__ import annotations

import logging
import threading

from sps.http_api.dependencies import HttpApiDependencies
from sps.storage_policy.classification import InMemoryAttributeClassifier
from sps.storage_policy.service import StoragePolicyService
from sps.storage_policy.settings import (
    STORE_BACKEND_MEMORY,
    StoragePolicySettings,
    load_storage_policy_settings,
)
from sps.storage_policy.store import InMemoryPolicyStore

logger = logging.getLogger("sps.http_api")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _build_store(settings: StoragePolicySettings):
    if settings.store_backend == STORE_BACKEND_MEMORY:
        return InMemoryPolicyStore(node_path=settings.node_path)

    from sps.storage_policy.db_store import DbPolicyStore

    store = DbPolicyStore(node_path=settings.node_path)
    store.ensure_configuration_node()
    return store


def _build_dependencies(settings: StoragePolicySettings) -> HttpApiDependencies:
    service = StoragePolicyService(
        store=_build_store(settings),
        classifier=InMemoryAttributeClassifier(settings.classifications),
    )
    recovered = service.recover()
    logger.info(
        f"Storage policy service ready: store={settings.store_backend} "
        f"node={settings.node_path} recovered={recovered}"
    )
    return HttpApiDependencies(storage_policy_service=service)


def build_dependencies() -> HttpApiDependencies:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _build_dependencies(load_storage_policy_settings())
        return _DEPENDENCIES


def reset_dependencies() -> None:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
