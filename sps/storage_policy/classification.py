"""
SPS Storage Policy - Attribute Classifier Protocol and In-Memory Classifier
===========================================================================
The classifier answers one question for the engine: is this name a
recognized classification (node type) in the content repository?
The engine consumes it; it never owns the schema behind it.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from sps.storage_policy.policies import MIX_MIMETYPE


DEFAULT_NODE_TYPE_NAMES = frozenset(
    {
        MIX_MIMETYPE,
        "mix:created",
        "mix:lastModified",
        "mix:referenceable",
        "mix:versionable",
        "nt:base",
        "nt:file",
        "nt:folder",
        "nt:resource",
        "nt:unstructured",
        "fedora:binary",
        "fedora:datastream",
        "fedora:object",
        "fedora:resource",
    }
)

# Non-structural (runtime) configuration keys a policy may target.
# None are supported yet.
RUNTIME_CONFIGURATION_KEYS: frozenset[str] = frozenset()


class AttributeClassifier(Protocol):
    def is_recognized_classification(self, classification_key: str) -> bool:
        ...


class InMemoryAttributeClassifier:
    """
    Deterministic classifier used by tests/bootstrap.
    """

    def __init__(self, names: Iterable[str] | None = None):
        source = DEFAULT_NODE_TYPE_NAMES if names is None else names
        cleaned: set[str] = set()
        for name in source:
            if not name or not isinstance(name, str):
                raise ValueError("classification names must be non-empty strings.")
            cleaned.add(name)
        self._names = frozenset(cleaned)

    def is_recognized_classification(self, classification_key: str) -> bool:
        if not isinstance(classification_key, str):
            return False
        return classification_key in self._names

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._names))


def is_configuration_key(key: str) -> bool:
    return key in RUNTIME_CONFIGURATION_KEYS
