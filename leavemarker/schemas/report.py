# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from leavemarker.models.enums import LeaveStatus, LeaveType


class AuditLogEntryResponse(BaseModel):
    """Response schema for a single audit log entry."""

    id: uuid.UUID
    company_id: uuid.UUID
    actor_id: uuid.UUID
    entity_type: str
    entity_id: uuid.UUID
    action: str
    before_json: dict[str, Any] | None
    after_json: dict[str, Any] | None
    created_at: datetime


class AuditLogListResponse(BaseModel):
    """Paginated list of audit log entries."""

    items: list[AuditLogEntryResponse]
    total: int


class EmployeeBalanceSummary(BaseModel):
    """Balance summary row for one employee and leave type."""

    employee_id: uuid.UUID
    employee_name: str | None
    leave_type: LeaveType
    total_quota: float
    used: float
    pending: float
    available: float
    carried_forward: float


class BalanceSummaryResponse(BaseModel):
    """Balance summary across all employees of a company for one year."""

    year: int
    items: list[EmployeeBalanceSummary]
    total: int


class LeaveReportEntry(BaseModel):
    """Leave application row for the date-range report."""

    application_id: uuid.UUID
    employee_id: uuid.UUID
    employee_name: str | None
    department: str | None
    leave_type: LeaveType
    start_date: date
    end_date: date
    number_of_days: float
    status: LeaveStatus


class LeaveReportResponse(BaseModel):
    """Leave applications overlapping a date window, with per-type day totals."""

    start_date: date
    end_date: date
    items: list[LeaveReportEntry]
    total: int
    days_by_leave_type: dict[str, float]
