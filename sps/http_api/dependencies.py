"""
SPS HTTP API - Dependencies
===========================
Injected services for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from sps.storage_policy.service import StoragePolicyService


@dataclass(frozen=True)
class HttpApiDependencies:
    storage_policy_service: StoragePolicyService
