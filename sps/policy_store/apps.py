"""
SPS Policy Store - App Configuration
====================================
Durable storage policy properties on repository configuration nodes.
"""

from django.apps import AppConfig


class SpsPolicyStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sps.policy_store"
    label = "sps_policy_store"
    verbose_name = "SPS Policy Store"
