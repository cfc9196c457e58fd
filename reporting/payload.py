"""
reporting/payload.py

Typed views over raw analytics report payloads.

The external API returns one loosely-typed JSON document for every report
format. ``parse_payload`` reads the declared ``reportFormat`` and returns
one frozen variant per format, so decoders receive only the fields their
format defines. Field extraction is defensive: anything of the wrong shape
is treated as absent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

GRAND_TOTAL_KEY = "T!T"


class ReportFormat:
    TABULAR = "TABULAR"
    SUMMARY = "SUMMARY"
    MATRIX = "MATRIX"


@dataclass(frozen=True)
class DataCell:
    label: Any = None
    value: Any = None


@dataclass(frozen=True)
class AggregateValue:
    label: Any = None
    value: Any = None


@dataclass(frozen=True)
class FactEntry:
    """
    One ``factMap`` value, keyed by its raw ``"<row>!<col>"`` key.
    """

    key: str
    aggregates: tuple[AggregateValue, ...] = ()


@dataclass(frozen=True)
class ReportMetadata:
    report_format: str = ""
    name: str | None = None
    detail_columns: tuple[str, ...] = ()
    grouping_columns: tuple[str, ...] = ()
    aggregate_labels: tuple[str | None, ...] = ()
    detail_column_info: Mapping[str, Any] = field(default_factory=dict)
    grouping_column_info: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TabularReportPayload:
    metadata: ReportMetadata
    rows: tuple[tuple[DataCell, ...], ...] = ()


@dataclass(frozen=True)
class SummaryReportPayload:
    metadata: ReportMetadata
    facts: tuple[FactEntry, ...] = ()
    group_labels: tuple[str | None, ...] = ()


@dataclass(frozen=True)
class MatrixReportPayload:
    metadata: ReportMetadata
    facts: tuple[FactEntry, ...] = ()


@dataclass(frozen=True)
class UnknownReportPayload:
    metadata: ReportMetadata


ReportPayload = Union[
    TabularReportPayload,
    SummaryReportPayload,
    MatrixReportPayload,
    UnknownReportPayload,
]


def parse_payload(raw: Mapping[str, Any]) -> ReportPayload:
    """
    Build the payload variant matching the declared ``reportFormat``.

    Unrecognized or missing formats produce ``UnknownReportPayload``;
    this function never raises for mapping input.
    """

    metadata = _parse_metadata(raw)
    fact_map = _as_mapping(raw.get("factMap"))

    if metadata.report_format == ReportFormat.TABULAR:
        total = _as_mapping(fact_map.get(GRAND_TOTAL_KEY))
        return TabularReportPayload(
            metadata=metadata,
            rows=_parse_rows(total.get("rows")),
        )
    if metadata.report_format == ReportFormat.SUMMARY:
        top_groupings = _as_mapping(raw.get("groupingsDown")).get("groupings")
        return SummaryReportPayload(
            metadata=metadata,
            facts=_parse_facts(fact_map),
            group_labels=tuple(
                _as_mapping(grouping).get("label") for grouping in _as_list(top_groupings)
            ),
        )
    if metadata.report_format == ReportFormat.MATRIX:
        return MatrixReportPayload(metadata=metadata, facts=_parse_facts(fact_map))
    return UnknownReportPayload(metadata=metadata)


# ---------------------------------------------------------------------------
# Field extraction helpers
# ---------------------------------------------------------------------------


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _parse_metadata(raw: Mapping[str, Any]) -> ReportMetadata:
    report_meta = _as_mapping(raw.get("reportMetadata"))
    extended = _as_mapping(raw.get("reportExtendedMetadata"))

    report_format = report_meta.get("reportFormat")
    name = report_meta.get("name")

    grouping_columns: list[str] = []
    for descriptor in _as_list(report_meta.get("groupingsDown")):
        column = _as_mapping(descriptor).get("name")
        grouping_columns.append(column if isinstance(column, str) else "")

    aggregate_labels: list[str | None] = []
    for descriptor in _as_list(report_meta.get("aggregates")):
        # Aggregates may be bare API names ("s!AMOUNT") with no display label.
        label = _as_mapping(descriptor).get("label")
        aggregate_labels.append(label if isinstance(label, str) else None)

    return ReportMetadata(
        report_format=report_format if isinstance(report_format, str) else "",
        name=name if isinstance(name, str) else None,
        # Positions matter: cells are matched to columns by index.
        detail_columns=tuple(
            column if isinstance(column, str) else ""
            for column in _as_list(report_meta.get("detailColumns"))
        ),
        grouping_columns=tuple(grouping_columns),
        aggregate_labels=tuple(aggregate_labels),
        detail_column_info=_as_mapping(extended.get("detailColumnInfo")),
        grouping_column_info=_as_mapping(extended.get("groupingColumnInfo")),
    )


def _parse_rows(value: Any) -> tuple[tuple[DataCell, ...], ...]:
    rows: list[tuple[DataCell, ...]] = []
    for row in _as_list(value):
        cells = tuple(
            DataCell(
                label=_as_mapping(cell).get("label"),
                value=_as_mapping(cell).get("value"),
            )
            for cell in _as_list(_as_mapping(row).get("dataCells"))
        )
        rows.append(cells)
    return tuple(rows)


def _parse_facts(fact_map: Mapping[str, Any]) -> tuple[FactEntry, ...]:
    # Payload order is preserved; JSON objects decode to insertion-ordered dicts.
    facts: list[FactEntry] = []
    for key, entry in fact_map.items():
        entry_map = _as_mapping(entry)
        facts.append(
            FactEntry(
                key=str(key),
                aggregates=tuple(
                    AggregateValue(
                        label=_as_mapping(aggregate).get("label"),
                        value=_as_mapping(aggregate).get("value"),
                    )
                    for aggregate in _as_list(entry_map.get("aggregates"))
                ),
            )
        )
    return tuple(facts)
