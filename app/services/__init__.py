"""
app/services package marker.
"""

from app.services.report_refresh_service import (
    ReportRefreshService,
    get_report_refresh_service,
)
from app.services.snapshot_store import SnapshotStore

__all__ = [
    "ReportRefreshService",
    "SnapshotStore",
    "get_report_refresh_service",
]
