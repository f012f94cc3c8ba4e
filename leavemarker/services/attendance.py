# ruff: noqa: TC003
"""Daily attendance: punches, HR marking and the correction review workflow.

One record per employee per day. An employee punches in and out of the
current day only; anything else goes through a correction request that the
employee's direct manager (or HR) approves or rejects. Requested values are
kept apart from the recorded ones until approval copies them across.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, time
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leavemarker.exceptions import ConflictError, NotFoundError, ValidationError
from leavemarker.models.attendance import AttendanceRecord
from leavemarker.models.enums import AttendanceStatus, AuditAction, AuditEntityType, WorkType
from leavemarker.schemas.attendance import (
    AttendanceListResponse,
    AttendanceRateResponse,
    AttendanceResponse,
)
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import (
    APPROVER_ROLES,
    HR_ROLES,
    require_direct_manager,
    require_hr,
    require_owner,
)
from leavemarker.services.employee import get_employee_directory, get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.application import ApprovalPayload
    from leavemarker.schemas.attendance import (
        AttendanceMarkPayload,
        AttendancePunchPayload,
        CorrectionRequestPayload,
    )
    from leavemarker.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

_PRESENT_STATUSES = {AttendanceStatus.PRESENT.value, AttendanceStatus.WORK_FROM_HOME.value}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _work_type(value: str | None) -> WorkType | None:
    return WorkType(value) if value is not None else None


def _build_attendance_response(record: AttendanceRecord) -> AttendanceResponse:
    return AttendanceResponse(
        id=record.id,
        company_id=record.company_id,
        employee_id=record.employee_id,
        date=record.date,
        punch_in_time=record.punch_in_time,
        punch_out_time=record.punch_out_time,
        work_type=_work_type(record.work_type),
        status=AttendanceStatus(record.status),
        remarks=record.remarks,
        correction_requested=record.correction_requested,
        correction_approved=record.correction_approved,
        corrected_punch_in_time=record.corrected_punch_in_time,
        corrected_punch_out_time=record.corrected_punch_out_time,
        corrected_work_type=_work_type(record.corrected_work_type),
        correction_reason=record.correction_reason,
        correction_reviewed_by=record.correction_reviewed_by,
        correction_review_date=record.correction_review_date,
        correction_rejection_reason=record.correction_rejection_reason,
        created_at=record.created_at,
    )


def _check_punch_order(punch_in: time | None, punch_out: time | None) -> None:
    if punch_in is not None and punch_out is not None and punch_out < punch_in:
        raise ValidationError("Punch-out time cannot be before punch-in time")


async def _find_record(
    session: AsyncSession,
    employee_id: uuid.UUID,
    day: date,
    *,
    deleted: bool = False,
) -> AttendanceRecord | None:
    result = await session.execute(
        select(AttendanceRecord).where(
            col(AttendanceRecord.employee_id) == employee_id,
            col(AttendanceRecord.date) == day,
            col(AttendanceRecord.deleted) == deleted,
        )
    )
    return result.scalar_one_or_none()


async def _get_record_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    attendance_id: uuid.UUID,
    *,
    deleted: bool = False,
) -> AttendanceRecord:
    result = await session.execute(
        select(AttendanceRecord).where(
            col(AttendanceRecord.id) == attendance_id,
            col(AttendanceRecord.company_id) == company_id,
            col(AttendanceRecord.deleted) == deleted,
        )
    )
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFoundError("Attendance record not found")
    return record


async def _require_reviewer(auth: AuthContext, record: AttendanceRecord) -> None:
    """HR reviews any correction; a manager only those of direct reports."""
    if auth.role in HR_ROLES:
        return
    employee = await get_employee_or_404(record.company_id, record.employee_id)
    require_direct_manager(auth, employee, "You are not authorized to review this attendance correction")


async def _commit_change(
    session: AsyncSession,
    auth: AuthContext,
    record: AttendanceRecord,
    action: AuditAction,
    before_json: dict[str, object] | None,
) -> AttendanceResponse:
    await session.flush()

    await write_audit_log(
        session,
        company_id=record.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.ATTENDANCE,
        entity_id=record.id,
        action=action,
        before_json=before_json,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    await session.refresh(record)
    return _build_attendance_response(record)


# ---------------------------------------------------------------------------
# Public API: recording
# ---------------------------------------------------------------------------


async def punch(
    session: AsyncSession,
    auth: AuthContext,
    payload: AttendancePunchPayload,
) -> AttendanceResponse:
    """Punch the caller in or out of today.

    Punch-in creates the day's PRESENT record; punch-out completes it. Each
    happens once per day.
    """
    today = date.today()
    employee = await get_employee_or_404(auth.company_id, auth.user_id)
    if payload.date != today:
        raise ValidationError("Can only punch in/out for today's date")

    record = await _find_record(session, employee.id, today)

    if payload.is_punch_in:
        if record is not None:
            raise ConflictError("Already punched in for today")
        record = AttendanceRecord(
            company_id=auth.company_id,
            employee_id=employee.id,
            date=today,
            punch_in_time=payload.punch_time,
            work_type=payload.work_type.value if payload.work_type is not None else None,
            status=AttendanceStatus.PRESENT.value,
        )
        session.add(record)
        logger.info("Punch in: employee=%s at %s", employee.id, payload.punch_time)
        return await _commit_change(session, auth, record, AuditAction.PUNCH_IN, None)

    if record is None or record.punch_in_time is None:
        raise ConflictError("No punch-in record found for today")
    if record.punch_out_time is not None:
        raise ConflictError("Already punched out for today")
    _check_punch_order(record.punch_in_time, payload.punch_time)

    before_dict = model_to_audit_dict(record)
    record.punch_out_time = payload.punch_time
    if payload.work_type is not None:
        record.work_type = payload.work_type.value
    logger.info("Punch out: employee=%s at %s", employee.id, payload.punch_time)
    return await _commit_change(session, auth, record, AuditAction.PUNCH_OUT, before_dict)


async def mark_attendance(
    session: AsyncSession,
    auth: AuthContext,
    payload: AttendanceMarkPayload,
) -> AttendanceResponse:
    """Record or overwrite an employee's day (HR only)."""
    require_hr(auth)
    employee = await get_employee_or_404(auth.company_id, payload.employee_id)

    record = await _find_record(session, employee.id, payload.date)
    punch_in, punch_out = payload.punch_in_time, payload.punch_out_time
    if record is not None:
        punch_in = punch_in if punch_in is not None else record.punch_in_time
        punch_out = punch_out if punch_out is not None else record.punch_out_time
    _check_punch_order(punch_in, punch_out)

    before_dict = None
    if record is None:
        record = AttendanceRecord(company_id=auth.company_id, employee_id=employee.id, date=payload.date)
        session.add(record)
    else:
        before_dict = model_to_audit_dict(record)

    record.status = payload.status.value
    record.punch_in_time = punch_in
    record.punch_out_time = punch_out
    if payload.work_type is not None:
        record.work_type = payload.work_type.value
    if payload.remarks is not None:
        record.remarks = payload.remarks

    logger.info("Attendance marked: employee=%s date=%s status=%s", employee.id, payload.date, record.status)
    return await _commit_change(session, auth, record, AuditAction.MARK_ATTENDANCE, before_dict)


# ---------------------------------------------------------------------------
# Public API: corrections
# ---------------------------------------------------------------------------


async def request_correction(
    session: AsyncSession,
    auth: AuthContext,
    attendance_id: uuid.UUID,
    payload: CorrectionRequestPayload,
) -> AttendanceResponse:
    """Ask for the caller's own record to be corrected."""
    record = await _get_record_or_404(session, auth.company_id, attendance_id)
    require_owner(auth, record.employee_id, "You can only request correction for your own attendance")
    if record.correction_requested:
        raise ConflictError("Correction request is already pending")

    _check_punch_order(
        payload.punch_in_time if payload.punch_in_time is not None else record.punch_in_time,
        payload.punch_out_time if payload.punch_out_time is not None else record.punch_out_time,
    )

    before_dict = model_to_audit_dict(record)
    record.correction_requested = True
    record.correction_approved = False
    record.corrected_punch_in_time = payload.punch_in_time
    record.corrected_punch_out_time = payload.punch_out_time
    record.corrected_work_type = payload.work_type.value if payload.work_type is not None else None
    record.correction_reason = payload.reason
    record.correction_reviewed_by = None
    record.correction_review_date = None
    record.correction_rejection_reason = None

    logger.info("Attendance correction requested: record=%s employee=%s", record.id, record.employee_id)
    return await _commit_change(session, auth, record, AuditAction.REQUEST_CORRECTION, before_dict)


async def review_correction(
    session: AsyncSession,
    auth: AuthContext,
    attendance_id: uuid.UUID,
    payload: ApprovalPayload,
) -> AttendanceResponse:
    """Approve or reject a pending correction.

    Approval copies the requested values onto the record; rejection leaves
    the record as it was and keeps the reason.
    """
    record = await _get_record_or_404(session, auth.company_id, attendance_id)
    await _require_reviewer(auth, record)
    if not record.correction_requested:
        raise ConflictError("No correction request found for this attendance")

    before_dict = model_to_audit_dict(record)
    record.correction_requested = False
    record.correction_reviewed_by = auth.user_id
    record.correction_review_date = date.today()

    if not payload.approved:
        record.correction_approved = False
        record.correction_rejection_reason = payload.reason
        logger.info("Attendance correction %s rejected by %s", record.id, auth.user_id)
        return await _commit_change(session, auth, record, AuditAction.REJECT_CORRECTION, before_dict)

    if record.corrected_punch_in_time is not None:
        record.punch_in_time = record.corrected_punch_in_time
    if record.corrected_punch_out_time is not None:
        record.punch_out_time = record.corrected_punch_out_time
    if record.corrected_work_type is not None:
        record.work_type = record.corrected_work_type
    record.correction_approved = True

    logger.info("Attendance correction %s approved by %s", record.id, auth.user_id)
    return await _commit_change(session, auth, record, AuditAction.APPROVE_CORRECTION, before_dict)


async def list_pending_corrections(
    session: AsyncSession,
    auth: AuthContext,
) -> AttendanceListResponse:
    """Corrections awaiting review: the whole company for HR, direct reports for a manager."""
    filters = [
        col(AttendanceRecord.company_id) == auth.company_id,
        col(AttendanceRecord.correction_requested).is_(True),
        col(AttendanceRecord.deleted).is_(False),
    ]
    if auth.role not in HR_ROLES:
        reports = await get_employee_directory().list_direct_reports(auth.company_id, auth.user_id)
        if not reports:
            return AttendanceListResponse(items=[], total=0)
        filters.append(col(AttendanceRecord.employee_id).in_([e.id for e in reports]))

    result = await session.execute(select(AttendanceRecord).where(*filters).order_by(col(AttendanceRecord.date)))
    records = list(result.scalars().all())
    return AttendanceListResponse(
        items=[_build_attendance_response(r) for r in records],
        total=len(records),
    )


# ---------------------------------------------------------------------------
# Public API: queries
# ---------------------------------------------------------------------------


async def get_attendance(
    session: AsyncSession,
    auth: AuthContext,
    attendance_id: uuid.UUID,
) -> AttendanceResponse:
    record = await _get_record_or_404(session, auth.company_id, attendance_id)
    if auth.role not in APPROVER_ROLES:
        require_owner(auth, record.employee_id, "You can only view your own attendance")
    return _build_attendance_response(record)


async def get_today_attendance(session: AsyncSession, auth: AuthContext) -> AttendanceResponse:
    record = await _find_record(session, auth.user_id, date.today())
    if record is None or record.company_id != auth.company_id:
        raise NotFoundError("No attendance record for today")
    return _build_attendance_response(record)


async def list_attendance(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    employee_id: uuid.UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    deleted: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> AttendanceListResponse:
    """List attendance records ordered by date, newest first."""
    filters = [
        col(AttendanceRecord.company_id) == company_id,
        col(AttendanceRecord.deleted) == deleted,
    ]
    if employee_id is not None:
        filters.append(col(AttendanceRecord.employee_id) == employee_id)
    if start_date is not None:
        filters.append(col(AttendanceRecord.date) >= start_date)
    if end_date is not None:
        filters.append(col(AttendanceRecord.date) <= end_date)

    count_result = await session.execute(select(func.count()).select_from(AttendanceRecord).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(AttendanceRecord)
        .where(*filters)
        .order_by(col(AttendanceRecord.date).desc())
        .offset(offset)
        .limit(limit)
    )
    records = list(result.scalars().all())

    return AttendanceListResponse(
        items=[_build_attendance_response(r) for r in records],
        total=total,
    )


async def get_attendance_rate(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> AttendanceRateResponse:
    """Present, absent and on-leave day counts over an inclusive window.

    Every calendar day counts towards the total; PRESENT and WORK_FROM_HOME
    both count as present.
    """
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")

    result = await session.execute(
        select(AttendanceRecord.status).where(
            col(AttendanceRecord.company_id) == company_id,
            col(AttendanceRecord.employee_id) == employee_id,
            col(AttendanceRecord.date) >= start_date,
            col(AttendanceRecord.date) <= end_date,
            col(AttendanceRecord.deleted).is_(False),
        )
    )
    statuses = list(result.scalars().all())

    total_days = (end_date - start_date).days + 1
    present_days = sum(1 for s in statuses if s in _PRESENT_STATUSES)
    return AttendanceRateResponse(
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        total_days=total_days,
        present_days=present_days,
        absent_days=statuses.count(AttendanceStatus.ABSENT.value),
        leave_days=statuses.count(AttendanceStatus.ON_LEAVE.value),
        attendance_rate=round(present_days / total_days * 100, 2),
    )
