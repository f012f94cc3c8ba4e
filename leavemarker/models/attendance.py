# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import SoftDeleteMixin, TimestampMixin, UUIDBase
from leavemarker.models.enums import AttendanceStatus


class AttendanceRecord(UUIDBase, TimestampMixin, SoftDeleteMixin, table=True):
    """One employee's attendance for one day, with any correction awaiting review.

    The ``corrected_*`` columns hold the values an employee asked for; they
    are copied onto the punch columns only when the correction is approved.
    """

    __tablename__ = "attendance"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
        sa.Index("ix_attendance_company_date", "company_id", "date"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    date: datetime.date
    punch_in_time: datetime.time | None = None
    punch_out_time: datetime.time | None = None
    work_type: str | None = Field(default=None, max_length=20)
    status: str = Field(default=AttendanceStatus.PRESENT, max_length=20)
    remarks: str | None = Field(default=None, max_length=500)

    correction_requested: bool = False
    correction_approved: bool = False
    corrected_punch_in_time: datetime.time | None = None
    corrected_punch_out_time: datetime.time | None = None
    corrected_work_type: str | None = Field(default=None, max_length=20)
    correction_reason: str | None = Field(default=None, max_length=500)
    correction_reviewed_by: uuid.UUID | None = None
    correction_review_date: datetime.date | None = None
    correction_rejection_reason: str | None = Field(default=None, max_length=500)
