"""
reporting/decoders/summary.py

Decoder for SUMMARY reports.

Output record layout, in field order
------------------------------------
name               : group display name
<grouping label>   : group display name (same value, keyed by the first
                     grouping's resolved label, or "Group")
<aggregate label>  : one field per aggregate value ("Value <i>" when the
                     aggregate has no label)
value              : copy of the first aggregate value, written right after
                     it, for generic chart consumers

Fact entries are emitted in payload order. The grand total and entries
with no aggregates are skipped.
"""

from __future__ import annotations

from reporting.decoders.base import (
    GENERIC_VALUE_KEY,
    NAME_KEY,
    BaseReportDecoder,
    NormalizedRecord,
    group_index_from_key,
)
from reporting.metadata import MetadataResolver
from reporting.payload import GRAND_TOTAL_KEY, SummaryReportPayload

_DEFAULT_GROUPING_LABEL = "Group"


class SummaryDecoder(BaseReportDecoder[SummaryReportPayload]):
    """One record per non-empty group of the first grouping dimension."""

    def decode(
        self,
        payload: SummaryReportPayload,
        resolver: MetadataResolver,
    ) -> list[NormalizedRecord]:
        metadata = payload.metadata
        first_grouping = metadata.grouping_columns[0] if metadata.grouping_columns else ""
        grouping_label = (
            resolver.label_for_grouping(first_grouping) if first_grouping else _DEFAULT_GROUPING_LABEL
        )

        records: list[NormalizedRecord] = []
        for fact in payload.facts:
            if fact.key == GRAND_TOTAL_KEY or not fact.aggregates:
                continue

            group_name = _group_name(payload.group_labels, group_index_from_key(fact.key))
            record: NormalizedRecord = {
                NAME_KEY: group_name,
                grouping_label: group_name,
            }
            for index, aggregate in enumerate(fact.aggregates):
                record[_aggregate_label(metadata.aggregate_labels, index)] = aggregate.value
                if index == 0:
                    record[GENERIC_VALUE_KEY] = aggregate.value
            records.append(record)

        return records


def _group_name(group_labels: tuple[str | None, ...], index: int) -> str:
    if 0 <= index < len(group_labels):
        label = group_labels[index]
        if isinstance(label, str) and label:
            return label
    return f"Group {index}"


def _aggregate_label(aggregate_labels: tuple[str | None, ...], index: int) -> str:
    if index < len(aggregate_labels):
        label = aggregate_labels[index]
        if label:
            return label
    return f"Value {index}"
