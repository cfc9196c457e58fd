"""
reporting/metadata.py

Resolves opaque column and grouping keys to display labels.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reporting.payload import ReportMetadata


class MetadataResolver:
    """Pure lookup over the extended-metadata dictionaries.

    A key missing from its dictionary, or present without a non-empty
    string ``label``, resolves to the key itself. Never raises.
    """

    def __init__(
        self,
        *,
        detail_column_info: Mapping[str, Any] | None = None,
        grouping_column_info: Mapping[str, Any] | None = None,
    ) -> None:
        self._detail_column_info = detail_column_info or {}
        self._grouping_column_info = grouping_column_info or {}

    @classmethod
    def from_metadata(cls, metadata: ReportMetadata) -> "MetadataResolver":
        return cls(
            detail_column_info=metadata.detail_column_info,
            grouping_column_info=metadata.grouping_column_info,
        )

    def label_for_column(self, key: str) -> str:
        return _lookup_label(self._detail_column_info, key)

    def label_for_grouping(self, key: str) -> str:
        return _lookup_label(self._grouping_column_info, key)


def _lookup_label(info: Mapping[str, Any], key: str) -> str:
    entry = info.get(key)
    if isinstance(entry, Mapping):
        label = entry.get("label")
        if isinstance(label, str) and label:
            return label
    return key
