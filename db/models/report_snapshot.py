"""
db/models/report_snapshot.py

Latest normalized output of one source report.
One row per report identifier.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, utc_now

_UPSERT_CONSTRAINT = "uq_report_snapshots_report_id"


class ReportSnapshot(Base):
    """
    Stores the flat records produced by the normalization engine for a
    single report.

    ``data`` holds the ordered record list, e.g.::

        [
            {"name": "Closed Won", "Stage": "Closed Won",
             "Sum of Amount": 500, "value": 500},
            ...
        ]

    The unique constraint on ``report_id`` drives upsert semantics: a new
    normalization run replaces ``data``, ``row_count``, ``report_format``
    and ``captured_at`` of the existing row. No history is retained.
    """

    __tablename__ = "report_snapshots"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    report_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Identifier of the source report in the external report API",
    )
    report_format: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="",
        comment="TABULAR, SUMMARY, MATRIX or the unrecognized raw tag",
    )
    # Plain json, not jsonb: jsonb reorders object keys, and record field
    # order must come back exactly as the decoder wrote it.
    data: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        comment="Ordered normalized records",
    )
    row_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    captured_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    __table_args__ = (
        UniqueConstraint("report_id", name=_UPSERT_CONSTRAINT),
        Index("ix_report_snapshots_captured_at", "captured_at"),
    )
