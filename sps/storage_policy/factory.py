"""
SPS Storage Policy — Policy Factory
=====================================
Classification key → policy family constructor.

New policy families are added by registering a constructor under
their classification key. Dispatch never changes.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

from sps.storage_policy.contracts import StoragePolicy
from sps.storage_policy.exceptions import UnsupportedClassificationError
from sps.storage_policy.policies import MIX_MIMETYPE, MimeTypeStoragePolicy

logger = logging.getLogger("sps.storage_policy")

PolicyConstructor = Callable[[str, str, str], StoragePolicy]


class StoragePolicyFactory:
    """
    Pluggable map of policy constructors.

    Usage:
        factory = StoragePolicyFactory()
        factory.register(MIX_MIMETYPE, MimeTypeStoragePolicy)
        policy = factory.create(MIX_MIMETYPE, "image/tiff", "diskA")
    """

    def __init__(self):
        self._constructors: Dict[str, PolicyConstructor] = {}

    def register(
        self, classification_key: str, constructor: PolicyConstructor
    ) -> None:
        if not classification_key or not isinstance(classification_key, str):
            raise ValueError("classification_key must be a non-empty string.")
        if not callable(constructor):
            raise TypeError(
                f"Expected callable constructor, got "
                f"{type(constructor).__name__}."
            )
        if classification_key in self._constructors:
            raise ValueError(
                f"Policy family for '{classification_key}' "
                f"is already registered."
            )
        self._constructors[classification_key] = constructor
        logger.debug(f"Policy family registered for {classification_key}")

    def supported_keys(self) -> Tuple[str, ...]:
        return tuple(sorted(self._constructors))

    def create(
        self,
        classification_key: str,
        match_value: str,
        storage_hint: str,
    ) -> StoragePolicy:
        constructor = self._constructors.get(classification_key)
        if constructor is None:
            raise UnsupportedClassificationError(
                classification_key, "Mapping not found."
            )
        return constructor(classification_key, match_value, storage_hint)


def default_policy_factory() -> StoragePolicyFactory:
    factory = StoragePolicyFactory()
    factory.register(MIX_MIMETYPE, MimeTypeStoragePolicy)
    return factory
