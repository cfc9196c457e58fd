"""
Repository-layer exports.
"""

from db.repositories.report_snapshot_repository import ReportSnapshotRepository

__all__ = ["ReportSnapshotRepository"]
