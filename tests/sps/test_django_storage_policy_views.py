from __future__ import annotations

import json

import pytest
from django.test import RequestFactory

from adapters.django_api import views
from adapters.django_api.wiring import build_dependencies, reset_dependencies
from sps.storage_policy.db_store import DbPolicyStore
from sps.storage_policy.exceptions import PersistenceError
from sps.storage_policy.store import InMemoryPolicyStore


@pytest.fixture
def memory_backend(settings):
    settings.STORAGE_POLICY_STORE = "memory"
    reset_dependencies()
    yield
    reset_dependencies()


@pytest.fixture
def rf():
    return RequestFactory()


def _json(response) -> dict:
    return json.loads(response.content.decode("utf-8"))


def test_wiring_builds_one_service_per_process(memory_backend) -> None:
    first = build_dependencies()
    second = build_dependencies()

    assert first is second
    assert isinstance(
        first.storage_policy_service.decision_point._store, InMemoryPolicyStore
    )


def test_post_text_body_then_list(memory_backend, rf) -> None:
    created = views.storage_policies_view(
        rf.post(
            "/v1/storage-policies",
            data="mix:mimeType image/tiff diskA",
            content_type="application/x-www-form-urlencoded",
        )
    )
    assert created.status_code == 201
    assert _json(created)["data"]["policy"]["storage_hint"] == "diskA"

    listed = views.storage_policies_view(rf.get("/v1/storage-policies"))
    assert listed.status_code == 200
    assert _json(listed)["data"]["items"][0]["match_value"] == "image/tiff"


def test_post_json_body_and_duplicate_conflict(memory_backend, rf) -> None:
    body = json.dumps(
        {
            "classification_key": "mix:mimeType",
            "match_value": "image/tiff",
            "storage_hint": "diskA",
        }
    )

    first = views.storage_policies_view(
        rf.post("/v1/storage-policies", data=body, content_type="application/json")
    )
    second = views.storage_policies_view(
        rf.post("/v1/storage-policies", data=body, content_type="application/json")
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert _json(second)["error"]["code"] == "DUPLICATE_POLICY"


@pytest.mark.parametrize(
    ("data", "content_type"),
    [
        ("mix:mimeType image/tiff", "text/plain"),
        ("{not json", "application/json"),
        (json.dumps({"classification_key": "mix:mimeType"}), "application/json"),
    ],
)
def test_post_invalid_body_is_bad_request(memory_backend, rf, data, content_type) -> None:
    response = views.storage_policies_view(
        rf.post("/v1/storage-policies", data=data, content_type=content_type)
    )
    assert response.status_code == 400
    assert _json(response)["error"]["code"] == "INVALID_REQUEST"


def test_post_unsupported_classification_is_bad_request(memory_backend, rf) -> None:
    response = views.storage_policies_view(
        rf.post(
            "/v1/storage-policies",
            data="bogus:type x y",
            content_type="text/plain",
        )
    )
    assert response.status_code == 400
    assert _json(response)["error"]["code"] == "UNSUPPORTED_CLASSIFICATION"


def test_post_match_value_with_separator_is_bad_request(memory_backend, rf) -> None:
    response = views.storage_policies_view(
        rf.post(
            "/v1/storage-policies",
            data="mix:mimeType application:x diskA",
            content_type="text/plain",
        )
    )
    assert response.status_code == 400
    assert _json(response)["error"]["code"] == "INVALID_REQUEST"


def test_startup_failure_maps_to_persistence_error(rf, monkeypatch) -> None:
    def unavailable():
        raise PersistenceError("ensure_configuration_node", ConnectionError("offline"))

    monkeypatch.setattr(views, "build_dependencies", unavailable)

    listed = views.storage_policies_view(rf.get("/v1/storage-policies"))
    removed = views.storage_policy_detail_view(
        rf.delete("/v1/storage-policies/mix:mimeType"), "mix:mimeType"
    )

    for response in (listed, removed):
        assert response.status_code == 503
        payload = _json(response)
        assert payload["error"]["code"] == "PERSISTENCE_FAILED"
        assert payload["error"]["details"] == {"operation": "ensure_configuration_node"}


def test_list_empty_reports_no_policies(memory_backend, rf) -> None:
    response = views.storage_policies_view(rf.get("/v1/storage-policies"))
    payload = _json(response)

    assert response.status_code == 200
    assert payload["data"]["configured"] is False
    assert payload["data"]["message"] == "No Policies Found"


def test_evaluate_view(memory_backend, rf) -> None:
    views.storage_policies_view(
        rf.post(
            "/v1/storage-policies",
            data="mix:mimeType image/tiff diskA",
            content_type="text/plain",
        )
    )

    hit = views.storage_policy_evaluate_view(
        rf.post(
            "/v1/storage-policies/evaluate",
            data=json.dumps({"attributes": {"mix:mimeType": "image/tiff"}}),
            content_type="application/json",
        )
    )
    miss = views.storage_policy_evaluate_view(
        rf.post(
            "/v1/storage-policies/evaluate",
            data=json.dumps({"attributes": {"mix:mimeType": "application/pdf"}}),
            content_type="application/json",
        )
    )

    assert hit.status_code == 200
    assert _json(hit)["data"]["storage_hint"] == "diskA"
    assert miss.status_code == 404
    assert _json(miss)["error"]["code"] == "NO_POLICY_FOUND"


def test_detail_view_get_delete(memory_backend, rf) -> None:
    views.storage_policies_view(
        rf.post(
            "/v1/storage-policies",
            data="mix:mimeType image/tiff diskA",
            content_type="text/plain",
        )
    )

    stored = views.storage_policy_detail_view(
        rf.get("/v1/storage-policies/mix:mimeType"), "mix:mimeType"
    )
    assert stored.status_code == 200
    assert _json(stored)["data"]["value"] == "image/tiff:diskA"

    deleted = views.storage_policy_detail_view(
        rf.delete("/v1/storage-policies/mix:mimeType"), "mix:mimeType"
    )
    assert deleted.status_code == 200

    missing = views.storage_policy_detail_view(
        rf.delete("/v1/storage-policies/mix:mimeType"), "mix:mimeType"
    )
    assert missing.status_code == 404
    assert _json(missing)["error"]["code"] == "POLICY_NOT_FOUND"


def test_wrong_methods_not_allowed(memory_backend, rf) -> None:
    assert views.storage_policies_view(rf.put("/v1/storage-policies")).status_code == 405
    assert (
        views.storage_policy_evaluate_view(rf.get("/v1/storage-policies/evaluate")).status_code
        == 405
    )
    assert (
        views.storage_policy_detail_view(
            rf.post("/v1/storage-policies/mix:mimeType"), "mix:mimeType"
        ).status_code
        == 405
    )


@pytest.mark.django_db(transaction=True)
def test_db_backend_recovers_persisted_policies(settings) -> None:
    settings.STORAGE_POLICY_STORE = "db"
    DbPolicyStore().persist("mix:mimeType", "image/tiff", "diskA")
    reset_dependencies()
    try:
        service = build_dependencies().storage_policy_service
        assert service.evaluate({"mix:mimeType": "image/tiff"}) == "diskA"
    finally:
        reset_dependencies()
