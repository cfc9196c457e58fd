"""
app/scheduler/jobs.py

APScheduler-based periodic snapshot refresh.

Report discovery
----------------
``REPORT_REFRESH_IDS`` (comma-separated) pins the set of reports to refresh.
When it is empty, every report returned by the report listing call is
refreshed.

Schedule
--------
  report_refresh: every ``REPORT_REFRESH_INTERVAL_MINUTES`` minutes, only
                   registered when ``REPORT_REFRESH_ENABLED`` is true.

Lifecycle
----------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
Start it on app boot; shut it down gracefully on app shutdown.
The scheduler is wired into FastAPI via the ``lifespan`` context in main.py.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from app.config import RefreshSchedulerSettings, get_refresh_scheduler_settings
from app.connectors import ConnectorRequestError
from app.services.report_refresh_service import (
    ReportRefreshService,
    get_report_refresh_service,
)
from db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def _session_scope() -> Iterator[Session]:
    """Yield a fresh session and ensure it is closed on exit."""
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def run_report_refresh(
    service: ReportRefreshService | None = None,
    settings: RefreshSchedulerSettings | None = None,
) -> None:
    """
    Refresh snapshots for the configured reports, or all listed reports.
    SnapshotStore commits per report; no explicit commit is needed here.
    """
    service = service or get_report_refresh_service()
    settings = settings or get_refresh_scheduler_settings()
    logger.info("Scheduler: report_refresh starting")

    with _session_scope() as db:
        try:
            if settings.report_ids:
                snapshots = service.refresh(db=db, report_ids=settings.report_ids)
            else:
                snapshots = service.refresh_all(db=db)
        except ConnectorRequestError as exc:
            logger.warning("Scheduler: report_refresh could not list reports: %s", exc)
            return

    logger.info("Scheduler: report_refresh complete refreshed=%s", len(snapshots))


def build_scheduler(settings: RefreshSchedulerSettings | None = None) -> BackgroundScheduler:
    """
    Build and register periodic jobs.

    Returns a configured but *not yet started* ``BackgroundScheduler``.
    The caller must call ``.start()`` and ``.shutdown(wait=True)`` at the
    appropriate lifecycle points.
    """
    settings = settings or get_refresh_scheduler_settings()
    scheduler = BackgroundScheduler(timezone="UTC")

    if not settings.enabled:
        logger.info("Scheduler: report_refresh disabled")
        return scheduler

    scheduler.add_job(
        run_report_refresh,
        trigger="interval",
        minutes=settings.interval_minutes,
        id="report_refresh",
        name="Periodic report snapshot refresh",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=600,
    )
    return scheduler
