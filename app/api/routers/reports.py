"""
app/api/routers/reports.py

Report fetch, snapshot refresh and snapshot read endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.connectors import ConnectorRequestError
from app.domain.reports import ReportSnapshotView
from app.schemas.reports import (
    ReportDescriptorResponse,
    ReportFetchResponse,
    ReportRefreshRequest,
    ReportRefreshResponse,
    ReportSnapshotResponse,
)
from app.services.report_refresh_service import (
    ReportRefreshService,
    get_report_refresh_service,
)
from app.services.snapshot_store import SnapshotStore
from db.session import get_db

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=list[ReportDescriptorResponse])
def list_reports(
    refresh_service: ReportRefreshService = Depends(get_report_refresh_service),
) -> list[ReportDescriptorResponse]:
    """
    List reports available from the external report API.
    """

    try:
        descriptors = refresh_service.list_reports()
    except ConnectorRequestError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return [
        ReportDescriptorResponse(
            report_id=descriptor.report_id,
            report_format=descriptor.report_format,
            name=descriptor.name,
            folder_name=descriptor.folder_name,
            last_run_date=descriptor.last_run_date,
        )
        for descriptor in descriptors
    ]


@router.post("/{report_id}/fetch", response_model=ReportFetchResponse)
def fetch_report(
    report_id: str,
    db: Session = Depends(get_db),
    refresh_service: ReportRefreshService = Depends(get_report_refresh_service),
) -> ReportFetchResponse:
    """
    Fetch one report, normalize it and store it as the latest snapshot.
    """

    try:
        result = refresh_service.fetch_report(db=db, report_id=report_id)
    except (ConnectorRequestError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ReportFetchResponse(
        report_name=result.report_name,
        report_format=result.report_format,
        row_count=result.row_count,
        data=result.records,
    )


@router.post("/refresh", response_model=ReportRefreshResponse)
def refresh_reports(
    request: ReportRefreshRequest,
    db: Session = Depends(get_db),
    refresh_service: ReportRefreshService = Depends(get_report_refresh_service),
) -> ReportRefreshResponse:
    """
    Refresh snapshots for a batch of reports. Failed reports are listed
    in ``failed`` instead of failing the request.
    """

    snapshots = refresh_service.refresh(db=db, report_ids=request.report_ids)
    requested = sorted({report_id.strip() for report_id in request.report_ids if report_id.strip()})
    return ReportRefreshResponse(
        refreshed={report_id: _to_response(view) for report_id, view in snapshots.items()},
        failed=[report_id for report_id in requested if report_id not in snapshots],
    )


@router.get("/snapshots", response_model=list[ReportSnapshotResponse])
def list_snapshots(db: Session = Depends(get_db)) -> list[ReportSnapshotResponse]:
    return [_to_response(view) for view in SnapshotStore(db).list_snapshots()]


@router.get("/{report_id}/snapshot", response_model=ReportSnapshotResponse)
def get_snapshot(report_id: str, db: Session = Depends(get_db)) -> ReportSnapshotResponse:
    view = SnapshotStore(db).get(report_id)
    if view is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No snapshot for report '{report_id}'.",
        )
    return _to_response(view)


def _to_response(view: ReportSnapshotView) -> ReportSnapshotResponse:
    return ReportSnapshotResponse(
        report_id=view.report_id,
        report_format=view.report_format,
        row_count=view.row_count,
        captured_at=view.captured_at,
        data=view.data,
    )
