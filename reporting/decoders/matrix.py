"""
reporting/decoders/matrix.py

Decoder for MATRIX reports.

Lossy flattening: row/column grouping structure is discarded and each fact
entry becomes ``{name: <raw fact key>, value: <first aggregate value>}``.
"""

from __future__ import annotations

from reporting.decoders.base import (
    GENERIC_VALUE_KEY,
    NAME_KEY,
    BaseReportDecoder,
    NormalizedRecord,
)
from reporting.metadata import MetadataResolver
from reporting.payload import GRAND_TOTAL_KEY, MatrixReportPayload


class MatrixDecoder(BaseReportDecoder[MatrixReportPayload]):
    # TODO: decode groupingsAcross into per-column fields once dashboards
    # can render two-dimensional data; until then only the first aggregate
    # of each cell is kept.

    def decode(
        self,
        payload: MatrixReportPayload,
        resolver: MetadataResolver,
    ) -> list[NormalizedRecord]:
        records: list[NormalizedRecord] = []
        for fact in payload.facts:
            if fact.key == GRAND_TOTAL_KEY or not fact.aggregates:
                continue
            first_value = fact.aggregates[0].value
            records.append(
                {
                    NAME_KEY: fact.key,
                    GENERIC_VALUE_KEY: first_value if first_value is not None else 0,
                }
            )
        return records
