# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from leavemarker.models.enums import LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class ApplyLeavePayload(BaseModel):
    """Request body for applying for leave.

    Date ordering and half-day rules are enforced by the ledger so that they
    surface as ValidationError rather than a schema error.
    """

    leave_type: LeaveType
    start_date: date
    end_date: date
    is_half_day: bool = False
    reason: str | None = Field(default=None, max_length=1000)
    attachment_url: str | None = Field(default=None, max_length=500)


class ApprovalPayload(BaseModel):
    """Request body for manager and HR decisions."""

    approved: bool
    reason: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveApplicationResponse(BaseModel):
    """Response schema for a single leave application."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: LeaveType
    start_date: date
    end_date: date
    is_half_day: bool
    number_of_days: float
    balance_year: int | None = None
    reason: str | None
    attachment_url: str | None
    status: LeaveStatus
    requires_hr_approval: bool
    manager_approved_by: uuid.UUID | None
    manager_approval_date: date | None
    hr_approved_by: uuid.UUID | None
    hr_approval_date: date | None
    rejection_reason: str | None
    rejection_date: date | None
    created_at: datetime


class LeaveApplicationListResponse(BaseModel):
    """Paginated list of leave applications."""

    items: list[LeaveApplicationResponse]
    total: int


class PendingCountResponse(BaseModel):
    """Number of the caller's applications still awaiting a decision."""

    pending: int
