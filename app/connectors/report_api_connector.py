"""
app/connectors/report_api_connector.py

Connector for the analytics report REST API.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

import requests

from app.config import ReportAPICredentials, ReportAPISettings, get_report_api_credentials
from app.connectors.base import BaseConnector, ConnectorRequestError, ReportAPIAuthError
from app.domain.reports import ReportDescriptor

logger = logging.getLogger(__name__)

CredentialsProvider = Callable[[], Optional[ReportAPICredentials]]

_REPORT_LIST_SOQL = (
    "SELECT Id, Name, DeveloperName, FolderName, Format, LastRunDate "
    "FROM Report ORDER BY LastRunDate DESC NULLS LAST LIMIT {limit}"
)


class ReportAPIConnector(BaseConnector):
    """
    Fetches raw report payloads and the report catalog.

    Credentials are read through ``credentials_provider`` on every call,
    so a token rotated by the OAuth collaborator is picked up without
    rebuilding the connector.
    """

    def __init__(
        self,
        *,
        settings: ReportAPISettings,
        credentials_provider: CredentialsProvider = get_report_api_credentials,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="report_api", http_settings=settings, session=session)
        self._settings = settings
        self._credentials_provider = credentials_provider

    def fetch_report(self, report_id: str) -> dict[str, Any]:
        """
        Return the raw JSON payload for one report.

        Raises
        ------
        ReportAPIAuthError
            No stored credentials, or the API rejected them.
        ConnectorRequestError
            Transport failure, non-2xx response or non-object body.
        """

        report_id = (report_id or "").strip()
        if not report_id:
            raise ValueError("Missing report_id")

        credentials = self._require_credentials()
        payload = self._request_json(
            method="GET",
            url=f"{self._base_url(credentials)}/analytics/reports/{report_id}",
            headers=_auth_headers(credentials),
        )
        if not isinstance(payload, dict):
            logger.error("Unexpected report payload shape report_id=%s", report_id)
            raise ConnectorRequestError(f"{self.source}: report {report_id} payload was not a JSON object.")
        return payload

    def list_reports(self) -> list[ReportDescriptor]:
        """
        Return the most recently run reports visible to the credentials.
        """

        credentials = self._require_credentials()
        payload = self._request_json(
            method="GET",
            url=f"{self._base_url(credentials)}/query",
            params={"q": _REPORT_LIST_SOQL.format(limit=self._settings.list_limit)},
            headers=_auth_headers(credentials),
        )
        rows = payload.get("records") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            logger.error("Unexpected report listing payload shape.")
            raise ConnectorRequestError(f"{self.source}: report listing payload had no records.")

        descriptors: list[ReportDescriptor] = []
        for row in rows:
            descriptor = _parse_descriptor(row)
            if descriptor is None:
                logger.warning("Skipping malformed report listing row=%r", row)
                continue
            descriptors.append(descriptor)
        return descriptors

    def _require_credentials(self) -> ReportAPICredentials:
        credentials = self._credentials_provider()
        if credentials is None:
            raise ReportAPIAuthError("Report API not connected. Please authorize access first.")
        if not credentials.access_token or not credentials.instance_url:
            raise ReportAPIAuthError("Report API credentials are incomplete.")
        return credentials

    def _base_url(self, credentials: ReportAPICredentials) -> str:
        return f"{credentials.instance_url.rstrip('/')}/services/data/{self._settings.api_version}"


def _auth_headers(credentials: ReportAPICredentials) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {credentials.access_token}",
        "Content-Type": "application/json",
    }


def _parse_descriptor(row: Any) -> ReportDescriptor | None:
    if not isinstance(row, dict):
        return None
    report_id = row.get("Id")
    if not isinstance(report_id, str) or not report_id:
        return None
    report_format = row.get("Format")
    return ReportDescriptor(
        report_id=report_id,
        report_format=report_format.upper() if isinstance(report_format, str) else "",
        name=row.get("Name") or report_id,
        folder_name=row.get("FolderName"),
        developer_name=row.get("DeveloperName"),
        last_run_date=row.get("LastRunDate"),
    )
