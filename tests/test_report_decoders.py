"""
tests/test_report_decoders.py

Pytest unit tests for the TABULAR, SUMMARY and MATRIX decoders.

All tests are pure Python, with no database and no I/O. Payloads are run through
``parse_payload`` first, exactly as the normalizer does.
"""

from __future__ import annotations

import pytest

from reporting.decoders import GENERIC_VALUE_KEY, MatrixDecoder, SummaryDecoder, TabularDecoder
from reporting.decoders.base import group_index_from_key
from reporting.metadata import MetadataResolver
from reporting.payload import parse_payload
from tests.payloads import matrix_payload, summary_payload, tabular_payload


def _decode(decoder, raw):
    payload = parse_payload(raw)
    return decoder.decode(payload, MetadataResolver.from_metadata(payload.metadata))


# ---------------------------------------------------------------------------
# Tabular
# ---------------------------------------------------------------------------


class TestTabularDecoder:
    def test_account_scenario(self) -> None:
        raw = tabular_payload(
            columns=["Name", "Amount"],
            rows=[[{"label": "Acme"}, {"label": "100"}]],
            column_info={"Name": {"label": "Account Name"}, "Amount": {"label": "Amount"}},
        )

        assert _decode(TabularDecoder(), raw) == [{"Account Name": "Acme", "Amount": "100"}]

    def test_one_record_per_row_in_input_order(self) -> None:
        rows = [[{"label": f"Account {i}"}, {"label": str(i)}] for i in range(5)]
        raw = tabular_payload(columns=["Name", "Amount"], rows=rows)

        records = _decode(TabularDecoder(), raw)

        assert len(records) == 5
        assert [record["Name"] for record in records] == [f"Account {i}" for i in range(5)]

    def test_field_order_follows_detail_columns(self) -> None:
        raw = tabular_payload(
            columns=["Z_COL", "A_COL", "M_COL"],
            rows=[[{"label": "z"}, {"label": "a"}, {"label": "m"}]],
        )

        (record,) = _decode(TabularDecoder(), raw)

        assert list(record) == ["Z_COL", "A_COL", "M_COL"]

    def test_missing_column_is_synthesized(self) -> None:
        raw = tabular_payload(
            columns=["Name"],
            rows=[[{"label": "Acme"}, {"label": "extra"}]],
        )

        (record,) = _decode(TabularDecoder(), raw)

        assert record == {"Name": "Acme", "col_1": "extra"}

    def test_raw_value_used_when_label_absent_or_empty(self) -> None:
        raw = tabular_payload(
            columns=["Amount", "Closed"],
            rows=[[{"value": 250.5}, {"label": "", "value": False}]],
        )

        (record,) = _decode(TabularDecoder(), raw)

        assert record == {"Amount": 250.5, "Closed": False}

    def test_column_label_falls_back_to_key(self) -> None:
        raw = tabular_payload(
            columns=["ACCOUNT.NAME"],
            rows=[[{"label": "Acme"}]],
            column_info={"OTHER": {"label": "Other"}},
        )

        assert _decode(TabularDecoder(), raw) == [{"ACCOUNT.NAME": "Acme"}]

    def test_no_rows_yields_no_records(self) -> None:
        raw = tabular_payload(columns=["Name"], rows=[])
        raw["factMap"] = {}

        assert _decode(TabularDecoder(), raw) == []


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class TestSummaryDecoder:
    def test_stage_scenario(self) -> None:
        raw = summary_payload(
            fact_map={
                "0!0": {"aggregates": [{"label": "$500", "value": 500}]},
                "T!T": {"aggregates": [{"label": "$500", "value": 500}]},
            },
            group_labels=["Closed Won"],
        )

        records = _decode(SummaryDecoder(), raw)

        assert records == [
            {"name": "Closed Won", "Stage": "Closed Won", "Sum of Amount": 500, "value": 500}
        ]
        assert list(records[0]) == ["name", "Stage", "Sum of Amount", "value"]

    def test_generic_value_equals_first_aggregate(self) -> None:
        raw = summary_payload(
            fact_map={
                "0!T": {"aggregates": [{"value": 10}, {"value": 3}]},
                "1!T": {"aggregates": [{"value": 20}, {"value": 4}]},
            },
            group_labels=["Prospecting", "Negotiation"],
            aggregates=[{"label": "Sum of Amount"}, {"label": "Record Count"}],
        )

        records = _decode(SummaryDecoder(), raw)

        assert [record[GENERIC_VALUE_KEY] for record in records] == [10, 20]
        assert records[1] == {
            "name": "Negotiation",
            "Stage": "Negotiation",
            "Sum of Amount": 20,
            "value": 20,
            "Record Count": 4,
        }

    def test_grand_total_never_emitted(self) -> None:
        raw = summary_payload(
            fact_map={"T!T": {"aggregates": [{"value": 99}]}},
            group_labels=[],
        )

        assert _decode(SummaryDecoder(), raw) == []

    def test_entries_without_aggregates_are_skipped(self) -> None:
        raw = summary_payload(
            fact_map={
                "0!T": {"aggregates": []},
                "1!T": {"rows": []},
                "2!T": {"aggregates": [{"value": 7}]},
            },
            group_labels=["A", "B", "C"],
        )

        records = _decode(SummaryDecoder(), raw)

        assert [record["name"] for record in records] == ["C"]

    def test_payload_order_is_preserved(self) -> None:
        raw = summary_payload(
            fact_map={
                "2!T": {"aggregates": [{"value": 3}]},
                "0!T": {"aggregates": [{"value": 1}]},
                "1!T": {"aggregates": [{"value": 2}]},
            },
            group_labels=["A", "B", "C"],
        )

        assert [record["name"] for record in _decode(SummaryDecoder(), raw)] == ["C", "A", "B"]

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("5!T", "Group 5"),
            ("x!T", "A"),
            ("-1!T", "Group -1"),
        ],
    )
    def test_group_name_fallbacks(self, key: str, expected: str) -> None:
        raw = summary_payload(
            fact_map={key: {"aggregates": [{"value": 1}]}},
            group_labels=["A"],
        )

        (record,) = _decode(SummaryDecoder(), raw)

        assert record["name"] == expected

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("1!T", 1),
            ("1_0!T", 1),
            ("12abc!T", 12),
            (" 2!T", 2),
            ("+1!T", 1),
            ("-1!T", -1),
            ("١!T", 0),
            ("x1!T", 0),
            ("", 0),
        ],
    )
    def test_group_index_reads_leading_ascii_digits(self, key: str, expected: int) -> None:
        assert group_index_from_key(key) == expected

    def test_underscored_index_resolves_to_leading_group(self) -> None:
        raw = summary_payload(
            fact_map={"1_0!T": {"aggregates": [{"value": 1}]}},
            group_labels=["A", "B"],
        )

        (record,) = _decode(SummaryDecoder(), raw)

        assert record["name"] == "B"

    def test_default_grouping_label_without_groupings(self) -> None:
        raw = summary_payload(
            fact_map={"0!T": {"aggregates": [{"value": 1}]}},
            group_labels=["Only"],
            grouping_column=None,
        )

        (record,) = _decode(SummaryDecoder(), raw)

        assert record["Group"] == "Only"

    def test_grouping_label_falls_back_to_column_key(self) -> None:
        raw = summary_payload(
            fact_map={"0!T": {"aggregates": [{"value": 1}]}},
            group_labels=["Only"],
            grouping_info={},
        )

        (record,) = _decode(SummaryDecoder(), raw)

        assert record["STAGE_NAME"] == "Only"

    def test_unlabelled_aggregates_use_positional_names(self) -> None:
        raw = summary_payload(
            fact_map={"0!T": {"aggregates": [{"value": 1}, {"value": 2}]}},
            group_labels=["A"],
            aggregates=["s!AMOUNT"],
        )

        (record,) = _decode(SummaryDecoder(), raw)

        assert record == {"name": "A", "Stage": "A", "Value 0": 1, "value": 1, "Value 1": 2}


# ---------------------------------------------------------------------------
# Matrix
# ---------------------------------------------------------------------------


class TestMatrixDecoder:
    def test_matrix_scenario(self) -> None:
        raw = matrix_payload(
            fact_map={
                "0!0": {"aggregates": [{"value": 10}]},
                "T!T": {"aggregates": [{"value": 10}]},
            }
        )

        assert _decode(MatrixDecoder(), raw) == [{"name": "0!0", "value": 10}]

    def test_only_first_aggregate_is_kept(self) -> None:
        raw = matrix_payload(fact_map={"1!2": {"aggregates": [{"value": 4}, {"value": 9}]}})

        assert _decode(MatrixDecoder(), raw) == [{"name": "1!2", "value": 4}]

    def test_missing_first_value_defaults_to_zero(self) -> None:
        raw = matrix_payload(fact_map={"0!T": {"aggregates": [{"label": "-"}]}})

        assert _decode(MatrixDecoder(), raw) == [{"name": "0!T", "value": 0}]

    def test_empty_aggregates_skipped(self) -> None:
        raw = matrix_payload(
            fact_map={
                "0!0": {"aggregates": []},
                "0!1": {"aggregates": [{"value": 2}]},
            }
        )

        assert _decode(MatrixDecoder(), raw) == [{"name": "0!1", "value": 2}]
