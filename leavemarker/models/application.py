# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import SoftDeleteMixin, TimestampMixin, UUIDBase
from leavemarker.models.enums import LeaveStatus


class LeaveApplication(UUIDBase, TimestampMixin, SoftDeleteMixin, table=True):
    """An employee's leave application with its manager/HR approval state."""

    __tablename__ = "leave_application"
    __table_args__ = (
        sa.Index("ix_leave_application_company_status", "company_id", "status"),
        sa.Index("ix_leave_application_employee_dates", "employee_id", "start_date", "end_date"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(max_length=30)
    start_date: date
    end_date: date
    is_half_day: bool = False
    number_of_days: float
    # Year of the balance row holding the reserved days; None when none existed at apply time.
    balance_year: int | None = None
    reason: str | None = Field(default=None, max_length=1000)
    attachment_url: str | None = Field(default=None, max_length=500)
    status: str = Field(
        default=LeaveStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    requires_hr_approval: bool = False
    manager_approved_by: uuid.UUID | None = None
    manager_approval_date: date | None = None
    hr_approved_by: uuid.UUID | None = None
    hr_approval_date: date | None = None
    rejection_reason: str | None = Field(default=None, max_length=1000)
    rejection_date: date | None = None
