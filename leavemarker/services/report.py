"""Reporting service: audit log queries, balance summaries and leave reports."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, date, datetime, time, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leavemarker.exceptions import ValidationError
from leavemarker.models.application import LeaveApplication
from leavemarker.models.audit import AuditLog
from leavemarker.models.enums import LeaveStatus, LeaveType
from leavemarker.schemas.report import (
    AuditLogEntryResponse,
    AuditLogListResponse,
    BalanceSummaryResponse,
    EmployeeBalanceSummary,
    LeaveReportEntry,
    LeaveReportResponse,
)
from leavemarker.services.authorization import HR_ROLES, require_role
from leavemarker.services.balance import list_company_balances
from leavemarker.services.employee import EmployeeInfo, get_employee_directory

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.auth import AuthContext


async def _directory_index(company_id: uuid.UUID) -> dict[uuid.UUID, EmployeeInfo]:
    employees = await get_employee_directory().list_employees(company_id, active_only=False)
    return {e.id: e for e in employees}


async def query_audit_log(
    session: AsyncSession,
    auth: AuthContext,
    *,
    entity_type: str | None = None,
    entity_id: uuid.UUID | None = None,
    action: str | None = None,
    actor_id: uuid.UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    offset: int = 0,
    limit: int = 50,
) -> AuditLogListResponse:
    """Query audit log entries with optional filters, newest first.

    ``end_date`` is inclusive of the whole day.
    """
    require_role(auth, HR_ROLES)
    filters = [col(AuditLog.company_id) == auth.company_id]

    if entity_type is not None:
        filters.append(col(AuditLog.entity_type) == entity_type)
    if entity_id is not None:
        filters.append(col(AuditLog.entity_id) == entity_id)
    if action is not None:
        filters.append(col(AuditLog.action) == action)
    if actor_id is not None:
        filters.append(col(AuditLog.actor_id) == actor_id)
    if start_date is not None:
        filters.append(col(AuditLog.created_at) >= datetime.combine(start_date, time.min, tzinfo=UTC))
    if end_date is not None:
        next_day = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=UTC)
        filters.append(col(AuditLog.created_at) < next_day)

    count_result = await session.execute(select(func.count()).select_from(AuditLog).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(AuditLog).where(*filters).order_by(col(AuditLog.created_at).desc()).offset(offset).limit(limit)
    )
    entries = list(result.scalars().all())

    return AuditLogListResponse(
        items=[
            AuditLogEntryResponse(
                id=e.id,
                company_id=e.company_id,
                actor_id=e.actor_id,
                entity_type=e.entity_type,
                entity_id=e.entity_id,
                action=e.action,
                before_json=e.before_json,
                after_json=e.after_json,
                created_at=e.created_at,
            )
            for e in entries
        ],
        total=total,
    )


async def get_company_balance_summary(
    session: AsyncSession,
    auth: AuthContext,
    year: int,
    *,
    leave_type: LeaveType | None = None,
) -> BalanceSummaryResponse:
    """Every employee's balances for one year, with directory names attached."""
    require_role(auth, HR_ROLES)
    balances = await list_company_balances(session, auth.company_id, year, leave_type=leave_type)
    employees = await _directory_index(auth.company_id)

    items: list[EmployeeBalanceSummary] = []
    for balance in balances:
        employee = employees.get(balance.employee_id)
        items.append(
            EmployeeBalanceSummary(
                employee_id=balance.employee_id,
                employee_name=employee.full_name if employee else None,
                leave_type=LeaveType(balance.leave_type),
                total_quota=balance.total_quota,
                used=balance.used,
                pending=balance.pending,
                available=balance.available,
                carried_forward=balance.carried_forward,
            )
        )

    return BalanceSummaryResponse(year=year, items=items, total=len(items))


async def get_leave_report(
    session: AsyncSession,
    auth: AuthContext,
    start_date: date,
    end_date: date,
    *,
    status_filter: LeaveStatus | None = None,
    department: str | None = None,
) -> LeaveReportResponse:
    """Applications overlapping [start_date, end_date], ordered by start date.

    ``days_by_leave_type`` sums ``number_of_days`` of the returned rows.
    """
    require_role(auth, HR_ROLES)
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")

    filters = [
        col(LeaveApplication.company_id) == auth.company_id,
        col(LeaveApplication.deleted).is_(False),
        col(LeaveApplication.start_date) <= end_date,
        col(LeaveApplication.end_date) >= start_date,
    ]
    if status_filter is not None:
        filters.append(col(LeaveApplication.status) == status_filter.value)

    result = await session.execute(
        select(LeaveApplication)
        .where(*filters)
        .order_by(col(LeaveApplication.start_date), col(LeaveApplication.employee_id))
    )
    applications = list(result.scalars().all())
    employees = await _directory_index(auth.company_id)

    items: list[LeaveReportEntry] = []
    days_by_leave_type: dict[str, float] = defaultdict(float)
    for application in applications:
        employee = employees.get(application.employee_id)
        employee_department = employee.department if employee else None
        if department is not None and employee_department != department:
            continue

        items.append(
            LeaveReportEntry(
                application_id=application.id,
                employee_id=application.employee_id,
                employee_name=employee.full_name if employee else None,
                department=employee_department,
                leave_type=LeaveType(application.leave_type),
                start_date=application.start_date,
                end_date=application.end_date,
                number_of_days=application.number_of_days,
                status=LeaveStatus(application.status),
            )
        )
        days_by_leave_type[application.leave_type] += application.number_of_days

    return LeaveReportResponse(
        start_date=start_date,
        end_date=end_date,
        items=items,
        total=len(items),
        days_by_leave_type=dict(days_by_leave_type),
    )
