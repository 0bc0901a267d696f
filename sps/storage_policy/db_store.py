"""
SPS Storage Policy - DB-backed Store
====================================
Mirrors Decision Point mutations into StoragePolicyProperty rows on a
configuration node. Same single-property-per-key shape as the
in-memory store.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.db import DatabaseError, transaction

from sps.storage_policy.exceptions import PersistenceError
from sps.storage_policy.store import (
    STORAGE_POLICY_NODE_PATH,
    StoredPolicy,
    format_property_value,
    parse_property_value,
)

logger = logging.getLogger("sps.policy_store")


class DbPolicyStore:
    def __init__(self, node_path: str = STORAGE_POLICY_NODE_PATH):
        self.node_path = node_path

    def ensure_configuration_node(self):
        """Find or create the configuration node holding policy properties."""
        from sps.policy_store.models import ConfigurationNode

        try:
            node, created = ConfigurationNode.objects.get_or_create(
                path=self.node_path
            )
        except DatabaseError as exc:
            raise PersistenceError("ensure_configuration_node", exc) from exc
        if created:
            logger.debug(f"Created configuration node {self.node_path}")
        return node

    def persist(
        self,
        classification_key: str,
        match_value: str,
        storage_hint: str,
    ) -> None:
        from sps.policy_store.models import StoragePolicyProperty

        value = format_property_value(match_value, storage_hint)
        try:
            with transaction.atomic():
                node = self.ensure_configuration_node()
                StoragePolicyProperty.objects.update_or_create(
                    node=node,
                    property_name=classification_key,
                    defaults={"values": [value]},
                )
        except DatabaseError as exc:
            raise PersistenceError("persist", exc) from exc
        logger.debug(f"Saved storage policy property {classification_key}={value}")

    def remove_property(self, classification_key: str) -> bool:
        from sps.policy_store.models import StoragePolicyProperty

        try:
            with transaction.atomic():
                deleted, _ = StoragePolicyProperty.objects.filter(
                    node__path=self.node_path,
                    property_name=classification_key,
                ).delete()
        except DatabaseError as exc:
            raise PersistenceError("remove_property", exc) from exc
        return deleted > 0

    def read_property(self, classification_key: str) -> Optional[str]:
        from sps.policy_store.models import StoragePolicyProperty

        try:
            row = StoragePolicyProperty.objects.filter(
                node__path=self.node_path,
                property_name=classification_key,
            ).first()
        except DatabaseError as exc:
            raise PersistenceError("read_property", exc) from exc
        if row is None or not row.values:
            return None
        return str(row.values[0])

    def load(self) -> tuple[StoredPolicy, ...]:
        from sps.policy_store.models import StoragePolicyProperty

        try:
            rows = list(
                StoragePolicyProperty.objects.filter(
                    node__path=self.node_path
                ).order_by("id")
            )
        except DatabaseError as exc:
            raise PersistenceError("load", exc) from exc

        loaded: list[StoredPolicy] = []
        for row in rows:
            if not row.values:
                continue
            try:
                match_value, storage_hint = parse_property_value(row.values[0])
            except ValueError:
                logger.warning(
                    f"Skipping malformed storage policy property "
                    f"{row.property_name}={row.values[0]!r}"
                )
                continue
            loaded.append((row.property_name, match_value, storage_hint))
        return tuple(loaded)
