"""
reporting/decoders/tabular.py

Decoder for TABULAR reports.

Rows live under the grand-total fact entry (``factMap["T!T"].rows``).
Each row's cells are matched to ``detailColumns`` by position; a cell with
no matching column is keyed ``col_<index>``. The pre-formatted display
label is preferred over the raw value.
"""

from __future__ import annotations

from reporting.decoders.base import BaseReportDecoder, NormalizedRecord
from reporting.metadata import MetadataResolver
from reporting.payload import TabularReportPayload


class TabularDecoder(BaseReportDecoder[TabularReportPayload]):
    """One record per input row, in input order. No aggregation."""

    def decode(
        self,
        payload: TabularReportPayload,
        resolver: MetadataResolver,
    ) -> list[NormalizedRecord]:
        columns = payload.metadata.detail_columns
        records: list[NormalizedRecord] = []

        for cells in payload.rows:
            record: NormalizedRecord = {}
            for index, cell in enumerate(cells):
                column = columns[index] if index < len(columns) and columns[index] else f"col_{index}"
                record[resolver.label_for_column(column)] = cell.label or cell.value
            records.append(record)

        return records
