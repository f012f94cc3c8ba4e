# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from leavemarker.api.deps import ApproverDep, AuthDep, HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.schemas.application import ApprovalPayload
from leavemarker.schemas.attendance import (
    AttendanceListResponse,
    AttendanceMarkPayload,
    AttendancePunchPayload,
    AttendanceRateResponse,
    AttendanceResponse,
    CorrectionRequestPayload,
)
from leavemarker.services import attendance as attendance_service

attendance_router = APIRouter(
    prefix="/companies/{company_id}/attendance",
    tags=["attendance"],
    dependencies=[Depends(validate_company_scope)],
)


@attendance_router.post("/punch", response_model=AttendanceResponse)
async def punch(
    payload: AttendancePunchPayload,
    session: SessionDep,
    auth: AuthDep,
) -> AttendanceResponse:
    """Punch the calling employee in or out of today."""
    return await attendance_service.punch(session, auth, payload)


@attendance_router.post("/mark", response_model=AttendanceResponse)
async def mark_attendance(
    payload: AttendanceMarkPayload,
    session: SessionDep,
    auth: HRDep,
) -> AttendanceResponse:
    """Record or overwrite an employee's day (HR only)."""
    return await attendance_service.mark_attendance(session, auth, payload)


@attendance_router.get("/today", response_model=AttendanceResponse)
async def get_today_attendance(
    session: SessionDep,
    auth: AuthDep,
) -> AttendanceResponse:
    return await attendance_service.get_today_attendance(session, auth)


@attendance_router.get("/mine", response_model=AttendanceListResponse)
async def list_my_attendance(
    session: SessionDep,
    auth: AuthDep,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AttendanceListResponse:
    return await attendance_service.list_attendance(
        session,
        auth.company_id,
        employee_id=auth.user_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@attendance_router.get("/mine/rate", response_model=AttendanceRateResponse)
async def get_my_attendance_rate(
    session: SessionDep,
    auth: AuthDep,
    start_date: date = Query(),
    end_date: date = Query(),
) -> AttendanceRateResponse:
    return await attendance_service.get_attendance_rate(session, auth.company_id, auth.user_id, start_date, end_date)


@attendance_router.get("", response_model=AttendanceListResponse)
async def list_attendance(
    session: SessionDep,
    auth: ApproverDep,
    employee_id: uuid.UUID | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AttendanceListResponse:
    """List company attendance with optional employee and date filters (managers and HR)."""
    return await attendance_service.list_attendance(
        session,
        auth.company_id,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@attendance_router.get("/rate", response_model=AttendanceRateResponse)
async def get_attendance_rate(
    session: SessionDep,
    auth: ApproverDep,
    employee_id: uuid.UUID = Query(),
    start_date: date = Query(),
    end_date: date = Query(),
) -> AttendanceRateResponse:
    return await attendance_service.get_attendance_rate(session, auth.company_id, employee_id, start_date, end_date)


@attendance_router.get("/corrections/pending", response_model=AttendanceListResponse)
async def list_pending_corrections(
    session: SessionDep,
    auth: ApproverDep,
) -> AttendanceListResponse:
    """Corrections awaiting the caller's review."""
    return await attendance_service.list_pending_corrections(session, auth)


@attendance_router.get("/{attendance_id}", response_model=AttendanceResponse)
async def get_attendance(
    attendance_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> AttendanceResponse:
    return await attendance_service.get_attendance(session, auth, attendance_id)


@attendance_router.post("/{attendance_id}/correction", response_model=AttendanceResponse)
async def request_correction(
    attendance_id: uuid.UUID,
    payload: CorrectionRequestPayload,
    session: SessionDep,
    auth: AuthDep,
) -> AttendanceResponse:
    """Ask for the caller's own attendance record to be corrected."""
    return await attendance_service.request_correction(session, auth, attendance_id, payload)


@attendance_router.post("/{attendance_id}/correction/review", response_model=AttendanceResponse)
async def review_correction(
    attendance_id: uuid.UUID,
    payload: ApprovalPayload,
    session: SessionDep,
    auth: ApproverDep,
) -> AttendanceResponse:
    """Approve or reject a pending correction (direct manager or HR)."""
    return await attendance_service.review_correction(session, auth, attendance_id, payload)
