"""
app/domain/reports.py

Domain models for report fetching and snapshot refresh.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ReportDescriptor:
    """
    One entry of the external report catalog.
    """

    report_id: str
    report_format: str
    name: str
    folder_name: str | None = None
    developer_name: str | None = None
    last_run_date: str | None = None


@dataclass(frozen=True)
class ReportSnapshotView:
    """
    Detached, read-only view of a persisted (or just-computed) snapshot.
    """

    report_id: str
    report_format: str
    data: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    captured_at: datetime | None = None
