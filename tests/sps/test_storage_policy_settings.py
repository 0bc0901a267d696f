from __future__ import annotations

from types import SimpleNamespace

import pytest

from sps.storage_policy.settings import (
    STORE_BACKEND_DB,
    STORE_BACKEND_MEMORY,
    StoragePolicySettings,
    load_storage_policy_settings,
)
from sps.storage_policy.store import STORAGE_POLICY_NODE_PATH


def test_defaults_when_settings_are_absent() -> None:
    loaded = load_storage_policy_settings(SimpleNamespace())
    assert loaded == StoragePolicySettings()
    assert loaded.node_path == STORAGE_POLICY_NODE_PATH
    assert loaded.store_backend == STORE_BACKEND_DB
    assert loaded.classifications is None


def test_reads_overrides() -> None:
    loaded = load_storage_policy_settings(
        SimpleNamespace(
            STORAGE_POLICY_NODE_PATH="/system/policies",
            STORAGE_POLICY_STORE=STORE_BACKEND_MEMORY,
            STORAGE_POLICY_CLASSIFICATIONS=["mix:mimeType"],
        )
    )
    assert loaded.node_path == "/system/policies"
    assert loaded.store_backend == STORE_BACKEND_MEMORY
    assert loaded.classifications == ("mix:mimeType",)


def test_reads_django_settings(settings) -> None:
    settings.STORAGE_POLICY_STORE = STORE_BACKEND_MEMORY
    assert load_storage_policy_settings().store_backend == STORE_BACKEND_MEMORY


@pytest.mark.parametrize(
    "kwargs",
    [
        {"node_path": ""},
        {"node_path": "relative/path"},
        {"store_backend": "redis"},
        {"classifications": ["mix:mimeType"]},
    ],
)
def test_invalid_settings_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        StoragePolicySettings(**kwargs)
