from __future__ import annotations

import pytest

from sps.http_api.contracts import (
    HttpApiResponse,
    StoragePolicyCreateHttpRequest,
    StoragePolicyEvaluateHttpRequest,
    StoragePolicyReadRequest,
    StoragePolicyRemoveHttpRequest,
    parse_policy_request_text,
)
from sps.http_api.dependencies import HttpApiDependencies
from sps.http_api.handlers import (
    delete_storage_policy,
    get_storage_policy,
    list_storage_policies,
    post_storage_policy,
    post_storage_policy_evaluate,
)
from sps.storage_policy import (
    MIX_MIMETYPE,
    NO_POLICIES_FOUND,
    InMemoryPolicyStore,
    StoragePolicyService,
)


class UnavailableStore(InMemoryPolicyStore):
    def persist(self, classification_key, match_value, storage_hint):
        raise ConnectionError("repository offline")


class ExplodingService:
    def list_policies(self):
        raise RuntimeError("boom")


def _dependencies(store=None) -> HttpApiDependencies:
    return HttpApiDependencies(
        storage_policy_service=StoragePolicyService(
            store=store or InMemoryPolicyStore()
        )
    )


def _create(value="image/tiff", hint="diskA") -> StoragePolicyCreateHttpRequest:
    return StoragePolicyCreateHttpRequest(
        classification_key=MIX_MIMETYPE,
        match_value=value,
        storage_hint=hint,
    )


# ══════════════════════════════════════════════════════════════
# CONTRACTS
# ══════════════════════════════════════════════════════════════

def test_parse_policy_request_text() -> None:
    contract = parse_policy_request_text("mix:mimeType image/tiff store-hint\n")
    assert contract == StoragePolicyCreateHttpRequest(
        classification_key="mix:mimeType",
        match_value="image/tiff",
        storage_hint="store-hint",
    )


@pytest.mark.parametrize(
    "raw",
    ["", "mix:mimeType image/tiff", "mix:mimeType image/tiff hint extra", None],
)
def test_parse_policy_request_text_requires_three_tokens(raw) -> None:
    with pytest.raises(ValueError):
        parse_policy_request_text(raw)


def test_evaluate_contract_requires_string_attributes() -> None:
    with pytest.raises(ValueError):
        StoragePolicyEvaluateHttpRequest(attributes={MIX_MIMETYPE: 5})
    with pytest.raises(ValueError):
        StoragePolicyEvaluateHttpRequest(attributes=["image/tiff"])


def test_error_response_requires_error_body() -> None:
    with pytest.raises(ValueError):
        HttpApiResponse(ok=False).to_dict()


# ══════════════════════════════════════════════════════════════
# HANDLERS
# ══════════════════════════════════════════════════════════════

def test_post_storage_policy_creates_and_lists() -> None:
    dependencies = _dependencies()

    created = post_storage_policy(
        _create(), dependencies, headers={"Accept-Language": "de-DE,de;q=0.9"}
    )

    assert created["ok"] is True
    assert created["meta"] == {"lang": "de-de"}
    assert created["data"]["policy"]["storage_hint"] == "diskA"
    assert created["data"]["location"] == "/v1/storage-policies/mix:mimeType"

    listed = list_storage_policies(dependencies)
    assert listed["data"]["configured"] is True
    assert listed["data"]["count"] == 1
    assert listed["data"]["items"][0]["match_value"] == "image/tiff"


def test_list_empty_is_signaled_distinctly() -> None:
    listed = list_storage_policies(_dependencies())

    assert listed["ok"] is True
    assert listed["data"]["configured"] is False
    assert listed["data"]["message"] == NO_POLICIES_FOUND
    assert listed["data"]["items"] == ()


def test_post_duplicate_returns_conflict_code() -> None:
    dependencies = _dependencies()
    post_storage_policy(_create(), dependencies)

    duplicate = post_storage_policy(_create(), dependencies)

    assert duplicate["ok"] is False
    assert duplicate["error"]["code"] == "DUPLICATE_POLICY"
    assert duplicate["error"]["details"]["policy"]["match_value"] == "image/tiff"


def test_post_unsupported_classification() -> None:
    dependencies = _dependencies()
    payload = post_storage_policy(
        StoragePolicyCreateHttpRequest(
            classification_key="bogus:type", match_value="x", storage_hint="y"
        ),
        dependencies,
    )

    assert payload["error"]["code"] == "UNSUPPORTED_CLASSIFICATION"
    assert payload["error"]["details"] == {"classification_key": "bogus:type"}
    assert list_storage_policies(dependencies)["data"]["configured"] is False


def test_post_persistence_failure_leaves_no_policy() -> None:
    dependencies = _dependencies(store=UnavailableStore())

    payload = post_storage_policy(_create(), dependencies)

    assert payload["error"]["code"] == "PERSISTENCE_FAILED"
    assert payload["error"]["details"] == {"operation": "persist"}
    assert list_storage_policies(dependencies)["data"]["configured"] is False


def test_delete_and_get_storage_policy() -> None:
    dependencies = _dependencies()
    post_storage_policy(_create(), dependencies)

    stored = get_storage_policy(
        StoragePolicyReadRequest(classification_key=MIX_MIMETYPE), dependencies
    )
    assert stored["data"]["value"] == "image/tiff:diskA"

    deleted = delete_storage_policy(
        StoragePolicyRemoveHttpRequest(classification_key=MIX_MIMETYPE), dependencies
    )
    assert deleted["ok"] is True
    assert deleted["data"]["count"] == 1

    missing = get_storage_policy(
        StoragePolicyReadRequest(classification_key=MIX_MIMETYPE), dependencies
    )
    assert missing["error"]["code"] == "POLICY_NOT_FOUND"

    again = delete_storage_policy(
        StoragePolicyRemoveHttpRequest(classification_key=MIX_MIMETYPE), dependencies
    )
    assert again["error"]["code"] == "POLICY_NOT_FOUND"


def test_evaluate_match_and_no_match() -> None:
    dependencies = _dependencies()
    post_storage_policy(_create("image/tiff", "diskA"), dependencies)

    matched = post_storage_policy_evaluate(
        StoragePolicyEvaluateHttpRequest(attributes={MIX_MIMETYPE: "image/tiff"}),
        dependencies,
    )
    assert matched["data"]["storage_hint"] == "diskA"

    missed = post_storage_policy_evaluate(
        StoragePolicyEvaluateHttpRequest(attributes={MIX_MIMETYPE: "application/pdf"}),
        dependencies,
    )
    assert missed["ok"] is False
    assert missed["error"]["code"] == "NO_POLICY_FOUND"
    assert missed["error"]["details"]["attributes"] == {MIX_MIMETYPE: "application/pdf"}


def test_unexpected_failure_maps_to_handler_error() -> None:
    dependencies = HttpApiDependencies(storage_policy_service=ExplodingService())

    payload = list_storage_policies(dependencies)

    assert payload["error"]["code"] == "HANDLER_EXECUTION_FAILED"
    assert payload["error"]["details"] == {"error_type": "RuntimeError"}


def test_post_match_value_with_separator_is_invalid() -> None:
    dependencies = _dependencies()

    payload = post_storage_policy(_create("application:x", "diskA"), dependencies)

    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_REQUEST"
    assert list_storage_policies(dependencies)["data"]["configured"] is False
