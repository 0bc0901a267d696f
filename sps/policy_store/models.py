"""
SPS Policy Store - Configuration Node Properties
================================================
ConfigurationNode is a well-known repository path.
StoragePolicyProperty is one multi-valued property on that node, named
by classification key, whose first value is "match_value:storage_hint".
"""

from __future__ import annotations

from django.db import models


class ConfigurationNode(models.Model):
    path = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "sps_configuration_nodes"
        ordering = ["path"]

    def __str__(self) -> str:
        return self.path


class StoragePolicyProperty(models.Model):
    node = models.ForeignKey(
        ConfigurationNode,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    property_name = models.CharField(max_length=255)
    values = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sps_storage_policy_properties"
        ordering = ["node_id", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["node", "property_name"],
                name="uq_node_property_name",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.node_id}:{self.property_name}"
