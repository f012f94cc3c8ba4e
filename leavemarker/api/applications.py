# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from leavemarker.api.deps import ApproverDep, AuthDep, HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.models.enums import LeaveStatus, LeaveType
from leavemarker.schemas.application import (
    ApplyLeavePayload,
    ApprovalPayload,
    LeaveApplicationListResponse,
    LeaveApplicationResponse,
    PendingCountResponse,
)
from leavemarker.services import application as application_service

applications_router = APIRouter(
    prefix="/companies/{company_id}/leave-applications",
    tags=["leave-applications"],
    dependencies=[Depends(validate_company_scope)],
)


@applications_router.post("", response_model=LeaveApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_leave(
    payload: ApplyLeavePayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveApplicationResponse:
    """Apply for leave as the calling employee."""
    return await application_service.apply_leave(session, auth, payload)


@applications_router.get("", response_model=LeaveApplicationListResponse)
async def list_applications(
    session: SessionDep,
    auth: ApproverDep,
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    employee_id: uuid.UUID | None = Query(default=None),
    leave_type: LeaveType | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveApplicationListResponse:
    """List company leave applications with optional filters (managers and HR)."""
    return await application_service.list_applications(
        session,
        auth.company_id,
        status_filter=status_filter,
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@applications_router.get("/mine", response_model=LeaveApplicationListResponse)
async def list_my_applications(
    session: SessionDep,
    auth: AuthDep,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveApplicationListResponse:
    return await application_service.list_my_applications(session, auth, offset, limit)


@applications_router.get("/mine/pending/count", response_model=PendingCountResponse)
async def count_my_pending(
    session: SessionDep,
    auth: AuthDep,
) -> PendingCountResponse:
    return await application_service.count_my_pending(session, auth)


@applications_router.get("/pending/manager", response_model=LeaveApplicationListResponse)
async def list_pending_for_manager(
    session: SessionDep,
    auth: AuthDep,
) -> LeaveApplicationListResponse:
    """Applications of the caller's direct reports awaiting a manager decision."""
    return await application_service.list_pending_for_manager(session, auth)


@applications_router.get("/pending/hr", response_model=LeaveApplicationListResponse)
async def list_pending_for_hr(
    session: SessionDep,
    auth: HRDep,
) -> LeaveApplicationListResponse:
    """Manager-approved applications awaiting an HR decision."""
    return await application_service.list_pending_for_hr(session, auth)


@applications_router.get("/{application_id}", response_model=LeaveApplicationResponse)
async def get_application(
    application_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveApplicationResponse:
    return await application_service.get_application(session, auth, application_id)


@applications_router.post("/{application_id}/approve/manager", response_model=LeaveApplicationResponse)
async def approve_by_manager(
    application_id: uuid.UUID,
    payload: ApprovalPayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveApplicationResponse:
    """Approve or reject as the applicant's direct manager."""
    return await application_service.approve_by_manager(session, auth, application_id, payload)


@applications_router.post("/{application_id}/approve/hr", response_model=LeaveApplicationResponse)
async def approve_by_hr(
    application_id: uuid.UUID,
    payload: ApprovalPayload,
    session: SessionDep,
    auth: HRDep,
) -> LeaveApplicationResponse:
    """Approve or reject as HR, after the manager has approved."""
    return await application_service.approve_by_hr(session, auth, application_id, payload)


@applications_router.post("/{application_id}/cancel", response_model=LeaveApplicationResponse)
async def cancel_leave(
    application_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveApplicationResponse:
    """Cancel the caller's own application."""
    return await application_service.cancel_leave(session, auth, application_id)
