"""
SPS HTTP API - Error Mapping
============================
Stable transport error mapping for storage policy failures.
"""

from __future__ import annotations

from typing import Any, Optional

from sps.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from sps.storage_policy.exceptions import (
    DuplicatePolicyError,
    NoPolicyFoundError,
    NotFoundError,
    PersistenceError,
    StoragePolicyError,
    UnsupportedClassificationError,
)

ERROR_INVALID_REQUEST = "INVALID_REQUEST"
ERROR_UNSUPPORTED_CLASSIFICATION = "UNSUPPORTED_CLASSIFICATION"
ERROR_DUPLICATE_POLICY = "DUPLICATE_POLICY"
ERROR_POLICY_NOT_FOUND = "POLICY_NOT_FOUND"
ERROR_NO_POLICY_FOUND = "NO_POLICY_FOUND"
ERROR_PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
ERROR_HANDLER_EXECUTION_FAILED = "HANDLER_EXECUTION_FAILED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def map_storage_policy_error(exc: StoragePolicyError) -> HttpApiErrorBody:
    if isinstance(exc, UnsupportedClassificationError):
        return HttpApiErrorBody(
            code=ERROR_UNSUPPORTED_CLASSIFICATION,
            message=str(exc),
            details={"classification_key": exc.classification_key},
        )
    if isinstance(exc, DuplicatePolicyError):
        return HttpApiErrorBody(
            code=ERROR_DUPLICATE_POLICY,
            message=str(exc),
            details={"policy": exc.policy.describe()},
        )
    if isinstance(exc, NotFoundError):
        return HttpApiErrorBody(
            code=ERROR_POLICY_NOT_FOUND,
            message=str(exc),
            details={"classification_key": exc.classification_key},
        )
    if isinstance(exc, NoPolicyFoundError):
        return HttpApiErrorBody(
            code=ERROR_NO_POLICY_FOUND,
            message=str(exc),
            details={"attributes": dict(exc.resource_attributes)},
        )
    if isinstance(exc, PersistenceError):
        return HttpApiErrorBody(
            code=ERROR_PERSISTENCE_FAILED,
            message="Failed to record storage policy state.",
            details={"operation": exc.operation},
        )
    return HttpApiErrorBody(
        code=ERROR_HANDLER_EXECUTION_FAILED,
        message=str(exc),
        details={"error_type": type(exc).__name__},
    )


def storage_policy_error_response(exc: StoragePolicyError) -> dict[str, Any]:
    mapped = map_storage_policy_error(exc)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )
