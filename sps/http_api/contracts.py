"""
SPS HTTP API - Contracts
========================
Framework-agnostic request/response DTOs for storage policy endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

POLICY_REQUEST_TOKEN_COUNT = 3


def _require_string(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")


@dataclass(frozen=True)
class StoragePolicyCreateHttpRequest:
    classification_key: str
    match_value: str
    storage_hint: str

    def __post_init__(self):
        _require_string(self.classification_key, "classification_key")
        _require_string(self.match_value, "match_value")
        _require_string(self.storage_hint, "storage_hint")


@dataclass(frozen=True)
class StoragePolicyRemoveHttpRequest:
    classification_key: str

    def __post_init__(self):
        _require_string(self.classification_key, "classification_key")


@dataclass(frozen=True)
class StoragePolicyReadRequest:
    classification_key: str

    def __post_init__(self):
        _require_string(self.classification_key, "classification_key")


@dataclass(frozen=True)
class StoragePolicyEvaluateHttpRequest:
    attributes: Mapping[str, str]

    def __post_init__(self):
        if not isinstance(self.attributes, Mapping):
            raise ValueError("attributes must be an object.")
        for key, value in self.attributes.items():
            _require_string(key, "attribute name")
            if not isinstance(value, str):
                raise ValueError(f"attribute '{key}' must be a string.")


def parse_policy_request_text(raw: str) -> StoragePolicyCreateHttpRequest:
    """
    Parse the single-line form "<classification> <value> <hint>",
    e.g. "mix:mimeType image/tiff store-hint".
    """
    if not isinstance(raw, str):
        raise ValueError("Request body must be text.")
    tokens = raw.split()
    if len(tokens) != POLICY_REQUEST_TOKEN_COUNT:
        raise ValueError(
            f"Invalid Arg: expected {POLICY_REQUEST_TOKEN_COUNT} "
            f"whitespace-separated values, got {len(tokens)}."
        )
    return StoragePolicyCreateHttpRequest(
        classification_key=tokens[0],
        match_value=tokens[1],
        storage_hint=tokens[2],
    )


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload = {"ok": True, "data": self.data}
            if self.meta is not None:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
