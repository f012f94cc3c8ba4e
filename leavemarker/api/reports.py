# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from leavemarker.api.deps import HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.models.enums import LeaveStatus, LeaveType
from leavemarker.schemas.report import AuditLogListResponse, BalanceSummaryResponse, LeaveReportResponse
from leavemarker.services import report as report_service

reports_router = APIRouter(
    prefix="/companies/{company_id}",
    tags=["reports"],
    dependencies=[Depends(validate_company_scope)],
)


@reports_router.get("/audit-log", response_model=AuditLogListResponse)
async def query_audit_log(
    session: SessionDep,
    auth: HRDep,
    entity_type: str | None = Query(default=None),
    entity_id: uuid.UUID | None = Query(default=None),
    action: str | None = Query(default=None),
    actor_id: uuid.UUID | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AuditLogListResponse:
    """Query audit log entries with optional filters (HR only)."""
    return await report_service.query_audit_log(
        session,
        auth,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        actor_id=actor_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@reports_router.get("/reports/balances", response_model=BalanceSummaryResponse)
async def get_balance_summary(
    session: SessionDep,
    auth: HRDep,
    year: int | None = Query(default=None),
    leave_type: LeaveType | None = Query(default=None),
) -> BalanceSummaryResponse:
    """Balances of every employee for one year (current year by default)."""
    return await report_service.get_company_balance_summary(
        session,
        auth,
        year if year is not None else date.today().year,
        leave_type=leave_type,
    )


@reports_router.get("/reports/leaves", response_model=LeaveReportResponse)
async def get_leave_report(
    session: SessionDep,
    auth: HRDep,
    start_date: date = Query(),
    end_date: date = Query(),
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    department: str | None = Query(default=None),
) -> LeaveReportResponse:
    """Leave applications overlapping a date window (HR only)."""
    return await report_service.get_leave_report(
        session,
        auth,
        start_date,
        end_date,
        status_filter=status_filter,
        department=department,
    )
