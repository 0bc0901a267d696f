"""
SPS Storage Policy — Policy Contract
======================================
Abstract value type for all storage policies.

A storage policy is an attribute matcher plus the storage hint it
resolves to:
- classification_key: attribute dimension (e.g. 'mix:mimeType')
- match_value:        value under that dimension (e.g. 'image/tiff')
- storage_hint:       opaque destination identifier

Policies are immutable. Two policies are equal iff all three fields
are equal; hash is derived from the same fields so a policy can be
used as a set member or dict key. Replacing a policy means removing
it and adding a new one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional


PROPERTY_VALUE_SEPARATOR = ":"


def _require_token(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    if value != value.strip():
        raise ValueError(
            f"{field_name} must not carry surrounding whitespace."
        )


@dataclass(frozen=True)
class StoragePolicy(ABC):
    """
    Abstract base for SPS storage policies.

    Subclasses must:
    - Set policy_type (family name, e.g. 'mime_type')
    - Implement matches()
    """

    classification_key: str
    match_value: str
    storage_hint: str

    policy_type: ClassVar[str] = ""

    def __post_init__(self):
        _require_token(self.classification_key, "classification_key")
        _require_token(self.match_value, "match_value")
        _require_token(self.storage_hint, "storage_hint")
        # The stored value splits on the first separator.
        if PROPERTY_VALUE_SEPARATOR in self.match_value:
            raise ValueError(
                f"match_value must not contain "
                f"'{PROPERTY_VALUE_SEPARATOR}'."
            )

    @abstractmethod
    def matches(self, resource_attributes: Mapping[str, str]) -> bool:
        """
        Check whether a resource falls under this policy.

        Args:
            resource_attributes: classification key -> value for the
                                 resource being placed.
        """
        ...

    def evaluate(
        self, resource_attributes: Mapping[str, str]
    ) -> Optional[str]:
        """Return the storage hint on a match, else None."""
        if self.matches(resource_attributes):
            return self.storage_hint
        return None

    def stored_value(self) -> str:
        """Durable property value for this policy."""
        return (
            f"{self.match_value}{PROPERTY_VALUE_SEPARATOR}{self.storage_hint}"
        )

    def describe(self) -> dict[str, str]:
        return {
            "policy_type": self.policy_type,
            "classification_key": self.classification_key,
            "match_value": self.match_value,
            "storage_hint": self.storage_hint,
        }

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}"
            f"({self.classification_key} {self.match_value} "
            f"-> {self.storage_hint})"
        )
