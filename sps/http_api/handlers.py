"""
SPS HTTP API - Framework-Agnostic Handlers
==========================================
Pure handler functions over contracts and injected dependencies.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from sps.http_api.contracts import (
    StoragePolicyCreateHttpRequest,
    StoragePolicyEvaluateHttpRequest,
    StoragePolicyReadRequest,
    StoragePolicyRemoveHttpRequest,
)
from sps.http_api.errors import (
    ERROR_HANDLER_EXECUTION_FAILED,
    ERROR_INVALID_REQUEST,
    error_response,
    storage_policy_error_response,
    success_response,
)
from sps.storage_policy.exceptions import StoragePolicyError
from sps.storage_policy.registry import NO_POLICIES_FOUND

logger = logging.getLogger("sps.http_api")


def _resolve_language(headers: dict[str, Any] | None) -> str:
    for key, value in (headers or {}).items():
        if str(key).strip().lower() != "accept-language":
            continue
        raw = str(value).strip().lower()
        if not raw:
            break
        first_segment = raw.split(",")[0]
        lang = first_segment.split(";")[0].strip()
        if lang:
            return lang
        break
    return "en"


def _success_with_language(
    data: Any,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return success_response(
        data,
        meta={"lang": _resolve_language(headers)},
    )


def _run(
    call: Callable[[], Any],
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        data = call()
    except StoragePolicyError as exc:
        return storage_policy_error_response(exc)
    except ValueError as exc:
        return error_response(
            code=ERROR_INVALID_REQUEST,
            message=str(exc),
            details={},
        )
    except Exception as exc:
        logger.exception("Storage policy handler failed")
        return error_response(
            code=ERROR_HANDLER_EXECUTION_FAILED,
            message="Failed to execute storage policy operation.",
            details={"error_type": type(exc).__name__},
        )
    return _success_with_language(data, headers=headers)


def post_storage_policy(
    request: StoragePolicyCreateHttpRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    service = dependencies.storage_policy_service

    def _call():
        policy = service.create_policy(
            request.classification_key,
            request.match_value,
            request.storage_hint,
        )
        service.add_policy(policy)
        logger.debug(
            f"Saved storage policy hint {request.classification_key} "
            f"{request.match_value} {request.storage_hint}"
        )
        return {
            "created": True,
            "policy": policy.describe(),
            "location": f"/v1/storage-policies/{policy.classification_key}",
        }

    return _run(_call, headers=headers)


def delete_storage_policy(
    request: StoragePolicyRemoveHttpRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    service = dependencies.storage_policy_service

    def _call():
        removed = service.remove_policy(request.classification_key)
        return {
            "classification_key": request.classification_key,
            "removed": tuple(policy.describe() for policy in removed),
            "count": len(removed),
        }

    return _run(_call, headers=headers)


def list_storage_policies(
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    service = dependencies.storage_policy_service

    def _call():
        described = service.list_policies()
        if described == NO_POLICIES_FOUND:
            return {
                "configured": False,
                "items": (),
                "count": 0,
                "message": NO_POLICIES_FOUND,
            }
        return {
            "configured": True,
            "items": described,
            "count": len(described),
            "message": None,
        }

    return _run(_call, headers=headers)


def get_storage_policy(
    request: StoragePolicyReadRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    service = dependencies.storage_policy_service

    def _call():
        logger.debug(f"Get storage policy for: {request.classification_key}")
        return {
            "classification_key": request.classification_key,
            "value": service.get_stored_policy(request.classification_key),
        }

    return _run(_call, headers=headers)


def post_storage_policy_evaluate(
    request: StoragePolicyEvaluateHttpRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    service = dependencies.storage_policy_service

    def _call():
        return {
            "attributes": dict(request.attributes),
            "storage_hint": service.evaluate(request.attributes),
        }

    return _run(_call, headers=headers)
