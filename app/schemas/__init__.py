"""
app/schemas package marker.
"""

from app.schemas.reports import (
    ReportDescriptorResponse,
    ReportFetchResponse,
    ReportRefreshRequest,
    ReportRefreshResponse,
    ReportSnapshotResponse,
)

__all__ = [
    "ReportDescriptorResponse",
    "ReportFetchResponse",
    "ReportRefreshRequest",
    "ReportRefreshResponse",
    "ReportSnapshotResponse",
]
