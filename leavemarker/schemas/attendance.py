# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel, Field, model_validator

from leavemarker.models.enums import AttendanceStatus, WorkType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class AttendancePunchPayload(BaseModel):
    """Request body for punching in or out of the current day."""

    date: datetime.date
    punch_time: datetime.time
    is_punch_in: bool
    work_type: WorkType | None = None


class AttendanceMarkPayload(BaseModel):
    """Request body for HR recording an employee's day directly."""

    employee_id: uuid.UUID
    date: datetime.date
    status: AttendanceStatus
    punch_in_time: datetime.time | None = None
    punch_out_time: datetime.time | None = None
    work_type: WorkType | None = None
    remarks: str | None = Field(default=None, max_length=500)


class CorrectionRequestPayload(BaseModel):
    """Corrected values an employee asks a reviewer to apply."""

    punch_in_time: datetime.time | None = None
    punch_out_time: datetime.time | None = None
    work_type: WorkType | None = None
    reason: str = Field(min_length=1, max_length=500)

    @model_validator(mode="after")
    def _require_a_correction(self) -> CorrectionRequestPayload:
        if self.punch_in_time is None and self.punch_out_time is None and self.work_type is None:
            raise ValueError("At least one of punch_in_time, punch_out_time or work_type must be corrected")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AttendanceResponse(BaseModel):
    """Response schema for one attendance record."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID
    date: datetime.date
    punch_in_time: datetime.time | None
    punch_out_time: datetime.time | None
    work_type: WorkType | None
    status: AttendanceStatus
    remarks: str | None
    correction_requested: bool
    correction_approved: bool
    corrected_punch_in_time: datetime.time | None
    corrected_punch_out_time: datetime.time | None
    corrected_work_type: WorkType | None
    correction_reason: str | None
    correction_reviewed_by: uuid.UUID | None
    correction_review_date: datetime.date | None
    correction_rejection_reason: str | None
    created_at: datetime.datetime


class AttendanceListResponse(BaseModel):
    """Paginated list of attendance records."""

    items: list[AttendanceResponse]
    total: int


class AttendanceRateResponse(BaseModel):
    """Day counts by outcome over an inclusive date window."""

    employee_id: uuid.UUID
    start_date: datetime.date
    end_date: datetime.date
    total_days: int
    present_days: int
    absent_days: int
    leave_days: int
    attendance_rate: float
