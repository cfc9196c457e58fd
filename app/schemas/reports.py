"""
Schemas for report fetch, refresh and snapshot endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ReportFetchResponse(BaseModel):
    success: bool = True
    report_name: str | None = None
    report_format: str
    row_count: int = Field(..., ge=0)
    data: list[dict[str, Any]] = Field(default_factory=list)


class ReportRefreshRequest(BaseModel):
    report_ids: list[str] = Field(..., min_length=1)


class ReportSnapshotResponse(BaseModel):
    report_id: str
    report_format: str
    row_count: int = Field(..., ge=0)
    captured_at: datetime | None = None
    data: list[dict[str, Any]] = Field(default_factory=list)


class ReportRefreshResponse(BaseModel):
    refreshed: dict[str, ReportSnapshotResponse] = Field(default_factory=dict)
    failed: list[str] = Field(default_factory=list)


class ReportDescriptorResponse(BaseModel):
    report_id: str
    report_format: str
    name: str
    folder_name: str | None = None
    last_run_date: str | None = None
