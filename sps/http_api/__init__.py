"""
SPS HTTP API - Public API
=========================
"""

from sps.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiResponse,
    StoragePolicyCreateHttpRequest,
    StoragePolicyEvaluateHttpRequest,
    StoragePolicyReadRequest,
    StoragePolicyRemoveHttpRequest,
    parse_policy_request_text,
)
from sps.http_api.dependencies import HttpApiDependencies
from sps.http_api.errors import (
    error_response,
    map_storage_policy_error,
    storage_policy_error_response,
    success_response,
)
from sps.http_api.handlers import (
    delete_storage_policy,
    get_storage_policy,
    list_storage_policies,
    post_storage_policy,
    post_storage_policy_evaluate,
)

__all__ = [
    "StoragePolicyCreateHttpRequest",
    "StoragePolicyRemoveHttpRequest",
    "StoragePolicyReadRequest",
    "StoragePolicyEvaluateHttpRequest",
    "parse_policy_request_text",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "map_storage_policy_error",
    "storage_policy_error_response",
    "list_storage_policies",
    "get_storage_policy",
    "post_storage_policy",
    "delete_storage_policy",
    "post_storage_policy_evaluate",
]
