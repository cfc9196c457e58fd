"""
app/services/report_refresh_service.py

Orchestration service: fetch raw reports, normalize, persist snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from functools import lru_cache

from sqlalchemy.orm import Session

from app.config import get_report_api_settings
from app.connectors import ConnectorRequestError, ReportAPIConnector
from app.domain.reports import ReportDescriptor, ReportSnapshotView
from app.services.snapshot_store import SnapshotStore
from db.base import utc_now
from reporting.normalizer import NormalizationResult, ReportNormalizer

logger = logging.getLogger(__name__)

SnapshotStoreFactory = Callable[[Session], SnapshotStore]


class ReportRefreshService:
    """
    Coordinates report fetching, normalization and snapshot persistence.

    Reports are processed strictly one at a time: each fetch and each
    snapshot write completes before the next report starts, which keeps
    the external API under its rate limits.
    """

    def __init__(
        self,
        *,
        connector: ReportAPIConnector,
        normalizer: ReportNormalizer | None = None,
        store_factory: SnapshotStoreFactory = SnapshotStore,
    ) -> None:
        self._connector = connector
        self._normalizer = normalizer or ReportNormalizer()
        self._store_factory = store_factory

    def fetch_report(self, *, db: Session, report_id: str) -> NormalizationResult:
        """
        Fetch, normalize and persist one report.

        Connector failures propagate to the caller. A failed snapshot write
        does not: the decoded result is returned regardless.
        """

        return self._fetch_and_store(db=db, report_id=report_id, captured_at=utc_now())

    def refresh(self, *, db: Session, report_ids: Iterable[str]) -> dict[str, ReportSnapshotView]:
        """
        Refresh every report in ``report_ids``.

        Reports that fail to fetch are logged and omitted from the result;
        one failure never aborts the batch. Each returned snapshot carries
        the same ``captured_at`` that was written to the store.
        """

        selected = sorted({report_id.strip() for report_id in report_ids if report_id and report_id.strip()})
        snapshots: dict[str, ReportSnapshotView] = {}

        for report_id in selected:
            captured_at = utc_now()
            try:
                result = self._fetch_and_store(db=db, report_id=report_id, captured_at=captured_at)
            except ConnectorRequestError as exc:
                logger.error(
                    "Report fetch failed report_id=%s error=%s",
                    report_id,
                    exc,
                )
                continue
            except Exception as exc:
                logger.exception(
                    "Unhandled report refresh failure report_id=%s error=%s",
                    report_id,
                    exc,
                )
                continue

            snapshots[report_id] = ReportSnapshotView(
                report_id=report_id,
                report_format=result.report_format,
                data=result.records,
                row_count=result.row_count,
                captured_at=captured_at,
            )

        logger.info(
            "Report refresh complete requested=%s refreshed=%s failed=%s",
            len(selected),
            len(snapshots),
            len(selected) - len(snapshots),
        )
        return snapshots

    def list_reports(self) -> list[ReportDescriptor]:
        return self._connector.list_reports()

    def refresh_all(self, *, db: Session) -> dict[str, ReportSnapshotView]:
        """
        Refresh every report returned by the report listing call.
        """

        descriptors = self.list_reports()
        return self.refresh(db=db, report_ids=[descriptor.report_id for descriptor in descriptors])

    def _fetch_and_store(self, *, db: Session, report_id: str, captured_at: datetime) -> NormalizationResult:
        raw_payload = self._connector.fetch_report(report_id)
        result = self._normalizer.normalize(raw_payload)
        self._store_factory(db).put(
            report_id,
            result.records,
            report_format=result.report_format,
            captured_at=captured_at,
        )
        logger.info(
            "Report normalized report_id=%s format=%s rows=%s",
            report_id,
            result.report_format,
            result.row_count,
        )
        return result


@lru_cache(maxsize=1)
def get_report_refresh_service() -> ReportRefreshService:
    """
    Build and cache the report refresh service.
    """

    connector = ReportAPIConnector(settings=get_report_api_settings())
    return ReportRefreshService(connector=connector)
