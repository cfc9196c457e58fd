"""
app/services/snapshot_store.py

Sole writer of report snapshots and sole source of "latest data" reads.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.reports import ReportSnapshotView
from db.models.report_snapshot import ReportSnapshot
from db.repositories.report_snapshot_repository import ReportSnapshotRepository

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Commits one snapshot per ``put`` call.

    A failed write is logged and rolled back but never raised: the caller
    already holds the decoded records, and readers simply keep seeing the
    previous snapshot.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = ReportSnapshotRepository(session)

    def put(
        self,
        report_id: str,
        records: Sequence[dict[str, Any]],
        *,
        report_format: str = "",
        captured_at: datetime | None = None,
    ) -> bool:
        """
        Upsert the latest snapshot for ``report_id``.

        ``captured_at`` defaults to now (UTC). Returns ``True`` when the
        snapshot was committed.
        """

        try:
            self._repository.upsert_snapshot(
                report_id=report_id,
                report_format=report_format,
                records=records,
                captured_at=captured_at,
            )
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception(
                "Snapshot save failed report_id=%s rows=%s error=%s",
                report_id,
                len(records),
                exc,
            )
            return False

        logger.info(
            "Snapshot saved report_id=%s format=%s rows=%s",
            report_id,
            report_format,
            len(records),
        )
        return True

    def get(self, report_id: str) -> ReportSnapshotView | None:
        snapshot = self._repository.get_by_report_id(report_id)
        return _to_view(snapshot) if snapshot is not None else None

    def list_snapshots(self) -> list[ReportSnapshotView]:
        return [_to_view(snapshot) for snapshot in self._repository.list_snapshots()]


def _to_view(snapshot: ReportSnapshot) -> ReportSnapshotView:
    captured_at = snapshot.captured_at
    # Backends without timezone support (SQLite) return naive UTC values.
    if captured_at is not None and captured_at.tzinfo is None:
        captured_at = captured_at.replace(tzinfo=timezone.utc)
    return ReportSnapshotView(
        report_id=snapshot.report_id,
        report_format=snapshot.report_format,
        data=list(snapshot.data or []),
        row_count=snapshot.row_count,
        captured_at=captured_at,
    )
