"""
SPS Storage Policy — Policy Families
======================================
Concrete storage policies. MIME-type matching is the only family today.
"""

from __future__ import annotations

from typing import Mapping

from sps.storage_policy.contracts import StoragePolicy


# JCR built-in mixin marking nodes that carry a MIME type.
MIX_MIMETYPE = "mix:mimeType"

POLICY_TYPE_MIME_TYPE = "mime_type"


class MimeTypeStoragePolicy(StoragePolicy):
    """
    Store binaries of one MIME type on one storage location.

    Matches when the resource's value for classification_key is exactly
    match_value. A resource without that attribute never matches.
    """

    policy_type = POLICY_TYPE_MIME_TYPE

    def matches(self, resource_attributes: Mapping[str, str]) -> bool:
        if not resource_attributes:
            return False
        return resource_attributes.get(self.classification_key) == self.match_value
