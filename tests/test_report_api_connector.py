"""
tests/test_report_api_connector.py

ReportAPIConnector with a stubbed ``requests.Session``; no network I/O.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from app.config import ReportAPICredentials, ReportAPISettings
from app.connectors import ConnectorRequestError, ReportAPIAuthError, ReportAPIConnector

_CREDENTIALS = ReportAPICredentials(access_token="tok-123", instance_url="https://example.my.salesforce.com")


def _response(status_code: int, body: Any = None, *, text: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://example.my.salesforce.com/stub"
    payload = text if text is not None else json.dumps(body)
    response._content = payload.encode("utf-8")
    response.encoding = "utf-8"
    return response


class _StubSession:
    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> requests.Response:
        self.calls.append(kwargs)
        outcome = self._responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("app.connectors.base.time.sleep", lambda _seconds: None)


def _connector(session: _StubSession, credentials: ReportAPICredentials | None = _CREDENTIALS) -> ReportAPIConnector:
    return ReportAPIConnector(
        settings=ReportAPISettings(max_retries=2, rate_limit_per_second=1000.0),
        credentials_provider=lambda: credentials,
        session=session,  # type: ignore[arg-type]
    )


class TestFetchReport:
    def test_requests_report_with_bearer_token(self) -> None:
        session = _StubSession(_response(200, {"reportMetadata": {"reportFormat": "TABULAR"}}))

        payload = _connector(session).fetch_report("00O5g000001")

        assert payload == {"reportMetadata": {"reportFormat": "TABULAR"}}
        (call,) = session.calls
        assert call["method"] == "GET"
        assert call["url"] == (
            "https://example.my.salesforce.com/services/data/v59.0/analytics/reports/00O5g000001"
        )
        assert call["headers"]["Authorization"] == "Bearer tok-123"

    def test_missing_credentials_raise_auth_error(self) -> None:
        session = _StubSession()

        with pytest.raises(ReportAPIAuthError):
            _connector(session, credentials=None).fetch_report("00O1")
        assert session.calls == []

    def test_unauthorized_response_raises_auth_error(self) -> None:
        session = _StubSession(_response(401, text='[{"errorCode":"INVALID_SESSION_ID"}]'))

        with pytest.raises(ReportAPIAuthError) as excinfo:
            _connector(session).fetch_report("00O1")

        assert "401" in str(excinfo.value)
        assert "INVALID_SESSION_ID" in str(excinfo.value)

    def test_client_error_is_not_retried(self) -> None:
        session = _StubSession(_response(404, text="not found"))

        with pytest.raises(ConnectorRequestError):
            _connector(session).fetch_report("00O1")
        assert len(session.calls) == 1

    def test_retryable_status_is_retried(self) -> None:
        session = _StubSession(
            _response(503, text="busy"),
            requests.ConnectionError("reset"),
            _response(200, {"reportMetadata": {"reportFormat": "MATRIX"}}),
        )

        payload = _connector(session).fetch_report("00O1")

        assert payload["reportMetadata"]["reportFormat"] == "MATRIX"
        assert len(session.calls) == 3

    def test_retries_exhausted(self) -> None:
        session = _StubSession(*(requests.Timeout("slow") for _ in range(3)))

        with pytest.raises(ConnectorRequestError):
            _connector(session).fetch_report("00O1")
        assert len(session.calls) == 3

    def test_invalid_json_raises(self) -> None:
        session = _StubSession(_response(200, text="<html>"))

        with pytest.raises(ConnectorRequestError):
            _connector(session).fetch_report("00O1")

    def test_non_object_body_raises(self) -> None:
        session = _StubSession(_response(200, [1, 2, 3]))

        with pytest.raises(ConnectorRequestError):
            _connector(session).fetch_report("00O1")

    def test_blank_report_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            _connector(_StubSession()).fetch_report("  ")


class TestListReports:
    def test_parses_catalog_rows(self) -> None:
        session = _StubSession(
            _response(
                200,
                {
                    "records": [
                        {
                            "Id": "00O1",
                            "Name": "Pipeline",
                            "DeveloperName": "Pipeline",
                            "FolderName": "Sales",
                            "Format": "Summary",
                            "LastRunDate": "2026-10-01T10:00:00.000+0000",
                        },
                        {"Name": "no id"},
                    ]
                },
            )
        )

        (descriptor,) = _connector(session).list_reports()

        assert descriptor.report_id == "00O1"
        assert descriptor.report_format == "SUMMARY"
        assert descriptor.folder_name == "Sales"
        assert "FROM Report" in session.calls[0]["params"]["q"]

    def test_missing_records_raises(self) -> None:
        session = _StubSession(_response(200, {"done": True}))

        with pytest.raises(ConnectorRequestError):
            _connector(session).list_reports()
