"""
app/domain package marker.
"""

from app.domain.reports import ReportDescriptor, ReportSnapshotView

__all__ = ["ReportDescriptor", "ReportSnapshotView"]
