"""
SPS Storage Policy - Store Protocol and In-Memory Store
=======================================================
Durable mirror of the Decision Point.

Storage shape: one property per classification key on a single
configuration node. The property's first value is
"match_value:storage_hint". Persisting a second policy under the same
key overwrites the first, so only one policy per classification key
survives a reload.
"""

from __future__ import annotations

import threading
from typing import Optional, Protocol

from sps.storage_policy.contracts import PROPERTY_VALUE_SEPARATOR

STORAGE_POLICY_NODE_PATH = "/fedora:system/fedora:storage_policy"

StoredPolicy = tuple[str, str, str]


def format_property_value(match_value: str, storage_hint: str) -> str:
    return f"{match_value}{PROPERTY_VALUE_SEPARATOR}{storage_hint}"


def parse_property_value(raw: str) -> tuple[str, str]:
    """
    Split a stored property value into (match_value, storage_hint).

    Splits on the first separator: MIME types never contain one,
    hints may.
    """
    if not isinstance(raw, str):
        raise ValueError("Stored policy value must be a string.")
    match_value, separator, storage_hint = raw.partition(PROPERTY_VALUE_SEPARATOR)
    if not separator or not match_value or not storage_hint:
        raise ValueError(f"Malformed stored policy value '{raw}'.")
    return (match_value, storage_hint)


class PolicyStoreAdapter(Protocol):
    def persist(
        self,
        classification_key: str,
        match_value: str,
        storage_hint: str,
    ) -> None:
        ...

    def remove_property(self, classification_key: str) -> bool:
        ...

    def load(self) -> tuple[StoredPolicy, ...]:
        ...

    def read_property(self, classification_key: str) -> Optional[str]:
        ...


class InMemoryPolicyStore:
    """
    Deterministic in-memory store used by tests/bootstrap.

    Keeps property creation order; an overwrite keeps the original slot.
    """

    def __init__(self, node_path: str = STORAGE_POLICY_NODE_PATH):
        self.node_path = node_path
        self._properties: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()

    def persist(
        self,
        classification_key: str,
        match_value: str,
        storage_hint: str,
    ) -> None:
        value = format_property_value(match_value, storage_hint)
        with self._lock:
            self._properties[classification_key] = (value,)

    def remove_property(self, classification_key: str) -> bool:
        with self._lock:
            return self._properties.pop(classification_key, None) is not None

    def read_property(self, classification_key: str) -> Optional[str]:
        with self._lock:
            values = self._properties.get(classification_key)
        if not values:
            return None
        return values[0]

    def load(self) -> tuple[StoredPolicy, ...]:
        with self._lock:
            snapshot = tuple(self._properties.items())
        loaded: list[StoredPolicy] = []
        for classification_key, values in snapshot:
            if not values:
                continue
            match_value, storage_hint = parse_property_value(values[0])
            loaded.append((classification_key, match_value, storage_hint))
        return tuple(loaded)
