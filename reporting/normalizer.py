"""
reporting/normalizer.py

Single normalization entry point: raw report payload in, flat records out.
Dispatches on the payload variant built from the declared ``reportFormat``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from reporting.decoders import (
    BaseReportDecoder,
    MatrixDecoder,
    NormalizedRecord,
    SummaryDecoder,
    TabularDecoder,
)
from reporting.metadata import MetadataResolver
from reporting.payload import (
    MatrixReportPayload,
    ReportPayload,
    SummaryReportPayload,
    TabularReportPayload,
    UnknownReportPayload,
    parse_payload,
)

@dataclass(frozen=True)
class NormalizationResult:
    """
    Outcome of normalizing one report payload.

    ``report_format`` is the declared tag even when it is not recognized,
    in which case ``records`` is empty.
    """

    report_format: str
    records: list[NormalizedRecord] = field(default_factory=list)
    report_name: str | None = None

    @property
    def row_count(self) -> int:
        return len(self.records)


class ReportNormalizer:
    """Stateless dispatcher from payload variant to decoder.

    Unrecognized formats degrade to an empty record list rather than an
    error, so one odd report never fails a whole refresh.
    """

    def __init__(self) -> None:
        self._decoders: dict[type, BaseReportDecoder[Any] | None] = {
            TabularReportPayload: TabularDecoder(),
            SummaryReportPayload: SummaryDecoder(),
            MatrixReportPayload: MatrixDecoder(),
            UnknownReportPayload: None,
        }

    def normalize(self, raw_payload: Mapping[str, Any]) -> NormalizationResult:
        payload = parse_payload(raw_payload)
        return NormalizationResult(
            report_format=payload.metadata.report_format,
            records=self.decode(payload),
            report_name=payload.metadata.name,
        )

    def decode(self, payload: ReportPayload) -> list[NormalizedRecord]:
        try:
            decoder = self._decoders[type(payload)]
        except KeyError as exc:
            raise TypeError(f"No decoder registered for {type(payload).__name__}.") from exc
        if decoder is None:
            return []
        return decoder.decode(payload, MetadataResolver.from_metadata(payload.metadata))


_default_normalizer = ReportNormalizer()


def normalize(raw_payload: Mapping[str, Any]) -> NormalizationResult:
    """Normalize *raw_payload* with the shared stateless normalizer."""
    return _default_normalizer.normalize(raw_payload)
