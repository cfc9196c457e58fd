"""
db/repositories/report_snapshot_repository.py

Persistence layer for ReportSnapshot rows.

All methods are transaction-safe. The caller controls commit/rollback;
this repository never commits on its own.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from db.base import utc_now
from db.models.report_snapshot import ReportSnapshot

_CONFLICT_COLUMNS = ["report_id"]


class ReportSnapshotRepository:
    """
    Repository for writing and querying ReportSnapshot rows.

    Upsert semantics: writing a snapshot for a ``report_id`` that already
    exists overwrites ``data``, ``row_count``, ``report_format`` and
    ``captured_at`` in a single statement. Whichever write lands last wins.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def upsert_snapshot(
        self,
        *,
        report_id: str,
        report_format: str,
        records: Sequence[dict[str, Any]],
        captured_at: datetime | None = None,
    ) -> None:
        """
        Insert or fully replace the snapshot for ``report_id``.

        Parameters
        ----------
        report_id:
            External report identifier; unique key of the table.
        report_format:
            Format tag reported by the normalization engine.
        records:
            Ordered normalized records. Stored as-is.
        captured_at:
            Capture time; defaults to now (UTC).
        """
        data = [dict(record) for record in records]
        values = {
            "id": uuid.uuid4(),
            "report_id": report_id,
            "report_format": report_format,
            "data": data,
            "row_count": len(data),
            "captured_at": captured_at or utc_now(),
        }

        insert = self._insert_for_dialect()
        stmt = insert(ReportSnapshot).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_COLUMNS,
            set_={
                "report_format": stmt.excluded.report_format,
                "data": stmt.excluded.data,
                "row_count": stmt.excluded.row_count,
                "captured_at": stmt.excluded.captured_at,
            },
        )
        self._session.execute(stmt)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_report_id(self, report_id: str) -> ReportSnapshot | None:
        stmt = (
            select(ReportSnapshot)
            .where(ReportSnapshot.report_id == report_id)
            .execution_options(populate_existing=True)
        )
        return self._session.scalars(stmt).one_or_none()

    def list_snapshots(self) -> list[ReportSnapshot]:
        """Return every stored snapshot ordered by ``report_id``."""
        stmt = (
            select(ReportSnapshot)
            .order_by(ReportSnapshot.report_id)
            .execution_options(populate_existing=True)
        )
        return list(self._session.scalars(stmt).all())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _insert_for_dialect(self) -> Any:
        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise RuntimeError(f"Snapshot upsert is not supported on dialect '{dialect}'.")
