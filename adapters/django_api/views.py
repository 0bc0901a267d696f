"""
SPS Django Adapter Views
========================
Pass-through HTTP views over sps/http_api handlers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from sps.http_api.contracts import (
    StoragePolicyCreateHttpRequest,
    StoragePolicyEvaluateHttpRequest,
    StoragePolicyReadRequest,
    StoragePolicyRemoveHttpRequest,
    parse_policy_request_text,
)
from sps.http_api.errors import (
    ERROR_DUPLICATE_POLICY,
    ERROR_HANDLER_EXECUTION_FAILED,
    ERROR_INVALID_REQUEST,
    ERROR_NO_POLICY_FOUND,
    ERROR_PERSISTENCE_FAILED,
    ERROR_POLICY_NOT_FOUND,
    ERROR_UNSUPPORTED_CLASSIFICATION,
    error_response,
    storage_policy_error_response,
)
from sps.http_api.handlers import (
    delete_storage_policy,
    get_storage_policy,
    list_storage_policies,
    post_storage_policy,
    post_storage_policy_evaluate,
)
from sps.storage_policy.exceptions import StoragePolicyError

logger = logging.getLogger("sps.http_api")

_STATUS_BY_ERROR_CODE = {
    ERROR_INVALID_REQUEST: 400,
    ERROR_UNSUPPORTED_CLASSIFICATION: 400,
    ERROR_POLICY_NOT_FOUND: 404,
    ERROR_NO_POLICY_FOUND: 404,
    ERROR_DUPLICATE_POLICY: 409,
    ERROR_PERSISTENCE_FAILED: 503,
    ERROR_HANDLER_EXECUTION_FAILED: 500,
}


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _json_payload(payload: dict[str, Any], success_status: int = 200) -> JsonResponse:
    if payload.get("ok"):
        return JsonResponse(payload, status=success_status)
    code = payload["error"]["code"]
    return JsonResponse(payload, status=_STATUS_BY_ERROR_CODE.get(code, 400))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _is_json(request: HttpRequest) -> bool:
    return (request.content_type or "").lower() == "application/json"


def _create_contract(request: HttpRequest) -> StoragePolicyCreateHttpRequest:
    if _is_json(request):
        body = _parse_json_body(request)
        return StoragePolicyCreateHttpRequest(
            classification_key=body["classification_key"],
            match_value=body["match_value"],
            storage_hint=body["storage_hint"],
        )
    try:
        raw = request.body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("Request body must be UTF-8 text.") from exc
    return parse_policy_request_text(raw)


def _dispatch(
    handler: Callable[..., dict[str, Any]],
    *args: Any,
    headers: dict[str, str],
) -> dict[str, Any]:
    try:
        dependencies = build_dependencies()
    except StoragePolicyError as exc:
        logger.exception("Storage policy service could not be started")
        return storage_policy_error_response(exc)
    return handler(*args, dependencies, headers=headers)


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def storage_policies_view(request: HttpRequest) -> JsonResponse:
    headers = _headers_from_request(request)
    if request.method == "GET":
        return _json_payload(_dispatch(list_storage_policies, headers=headers))
    if request.method != "POST":
        return _method_not_allowed()

    try:
        contract = _create_contract(request)
    except (ValueError, KeyError) as exc:
        return _json_error(ERROR_INVALID_REQUEST, str(exc), status=400)

    payload = _dispatch(post_storage_policy, contract, headers=headers)
    return _json_payload(payload, success_status=201)


@csrf_exempt
def storage_policy_evaluate_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    headers = _headers_from_request(request)
    try:
        body = _parse_json_body(request)
        contract = StoragePolicyEvaluateHttpRequest(
            attributes=body.get("attributes", {}),
        )
    except ValueError as exc:
        return _json_error(ERROR_INVALID_REQUEST, str(exc), status=400)

    payload = _dispatch(post_storage_policy_evaluate, contract, headers=headers)
    return _json_payload(payload)


@csrf_exempt
def storage_policy_detail_view(
    request: HttpRequest, classification_key: str
) -> JsonResponse:
    headers = _headers_from_request(request)
    try:
        if request.method == "GET":
            payload = _dispatch(
                get_storage_policy,
                StoragePolicyReadRequest(classification_key=classification_key),
                headers=headers,
            )
        elif request.method == "DELETE":
            payload = _dispatch(
                delete_storage_policy,
                StoragePolicyRemoveHttpRequest(classification_key=classification_key),
                headers=headers,
            )
        else:
            return _method_not_allowed()
    except ValueError as exc:
        return _json_error(ERROR_INVALID_REQUEST, str(exc), status=400)
    return _json_payload(payload)
