# ruff: noqa: TC003
"""Leave application lifecycle and its effect on the balance ledger.

State machine::

    PENDING --manager approve, no HR needed--> APPROVED
    PENDING --manager approve, HR needed-----> PENDING (manager approved)
    PENDING (manager approved) --HR approve--> APPROVED
    PENDING --manager or HR reject-----------> REJECTED
    PENDING, APPROVED (not started) --cancel-> CANCELLED

REJECTED and CANCELLED are terminal. Balance rows are optional: when none
exists for the current year the application still proceeds and no ledger
arithmetic happens. Otherwise the application remembers the year of the row
holding its days (``balance_year``) and every later decision or cancellation
settles against that same row, whatever the date of the decision.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leavemarker.config import get_settings
from leavemarker.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
)
from leavemarker.models.application import LeaveApplication
from leavemarker.models.enums import AuditAction, AuditEntityType, LeaveStatus, LeaveType
from leavemarker.schemas.application import (
    LeaveApplicationListResponse,
    LeaveApplicationResponse,
    PendingCountResponse,
)
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import (
    HR_ROLES,
    require_direct_manager,
    require_owner,
    require_role,
)
from leavemarker.services.balance import (
    consume_pending,
    find_balance,
    hold_pending,
    release_pending,
    restore_used,
)
from leavemarker.services.duration import calculate_leave_days
from leavemarker.services.employee import get_employee_directory, get_employee_or_404
from leavemarker.services.policy import find_policy

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.models.balance import LeaveBalance
    from leavemarker.schemas.application import ApplyLeavePayload, ApprovalPayload
    from leavemarker.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = [LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value]
_TERMINAL_STATUSES = {LeaveStatus.REJECTED.value, LeaveStatus.CANCELLED.value}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_application_response(application: LeaveApplication) -> LeaveApplicationResponse:
    """Map an application model to its response schema."""
    return LeaveApplicationResponse(
        id=application.id,
        company_id=application.company_id,
        employee_id=application.employee_id,
        leave_type=LeaveType(application.leave_type),
        start_date=application.start_date,
        end_date=application.end_date,
        is_half_day=application.is_half_day,
        number_of_days=application.number_of_days,
        balance_year=application.balance_year,
        reason=application.reason,
        attachment_url=application.attachment_url,
        status=LeaveStatus(application.status),
        requires_hr_approval=application.requires_hr_approval,
        manager_approved_by=application.manager_approved_by,
        manager_approval_date=application.manager_approval_date,
        hr_approved_by=application.hr_approved_by,
        hr_approval_date=application.hr_approval_date,
        rejection_reason=application.rejection_reason,
        rejection_date=application.rejection_date,
        created_at=application.created_at,
    )


async def _get_application_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    application_id: uuid.UUID,
    *,
    deleted: bool = False,
) -> LeaveApplication:
    """Fetch an application scoped to company. Raises NotFoundError if absent."""
    result = await session.execute(
        select(LeaveApplication).where(
            col(LeaveApplication.id) == application_id,
            col(LeaveApplication.company_id) == company_id,
            col(LeaveApplication.deleted) == deleted,
        )
    )
    application = result.scalar_one_or_none()
    if application is None:
        raise NotFoundError("Leave application not found")
    return application


async def _check_overlap(
    session: AsyncSession,
    employee_id: uuid.UUID,
    start_date: date,
    end_date: date,
    *,
    deleted: bool = False,
) -> None:
    """Raise ConflictError if a pending or approved application shares any date.

    Both ranges are inclusive, so touching boundaries count as an overlap.
    """
    result = await session.execute(
        select(LeaveApplication.id)
        .where(
            col(LeaveApplication.employee_id) == employee_id,
            col(LeaveApplication.status).in_(_ACTIVE_STATUSES),
            col(LeaveApplication.deleted) == deleted,
            col(LeaveApplication.start_date) <= end_date,
            col(LeaveApplication.end_date) >= start_date,
        )
        .limit(1)
    )
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Leave dates overlap with an existing leave application")


async def _reserved_balance_for_update(session: AsyncSession, application: LeaveApplication) -> LeaveBalance | None:
    """Lock the balance row the application's days were reserved on, if any."""
    if application.balance_year is None:
        return None
    return await find_balance(
        session,
        application.employee_id,
        application.leave_type,
        application.balance_year,
        for_update=True,
    )


def _validate_dates(start_date: date, end_date: date, is_half_day: bool, today: date) -> None:
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")
    if start_date < today:
        raise ValidationError("Cannot apply leave for past dates")
    if is_half_day and start_date != end_date:
        raise ValidationError("Half day leave can only be for a single day")


def _reject(application: LeaveApplication, reason: str | None, today: date) -> None:
    application.status = LeaveStatus.REJECTED.value
    application.rejection_reason = reason
    application.rejection_date = today


async def _commit_transition(
    session: AsyncSession,
    auth: AuthContext,
    application: LeaveApplication,
    action: AuditAction,
    before_json: dict[str, object] | None,
) -> LeaveApplicationResponse:
    """Flush, audit, commit and return the updated application."""
    await session.flush()

    await write_audit_log(
        session,
        company_id=application.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=application.id,
        action=action,
        before_json=before_json,
        after_json=model_to_audit_dict(application),
    )

    await session.commit()
    await session.refresh(application)
    return _build_application_response(application)


# ---------------------------------------------------------------------------
# Public API: lifecycle
# ---------------------------------------------------------------------------


async def apply_leave(
    session: AsyncSession,
    auth: AuthContext,
    payload: ApplyLeavePayload,
) -> LeaveApplicationResponse:
    """Apply for leave on behalf of the caller.

    Flow:
    1. Resolve the applicant in the directory
    2. Validate the date range and half-day rule
    3. Check the company's policy for the leave type (active, half-day allowed)
    4. Count weekdays
    5. Reject overlaps with pending or approved applications
    6. Lock the current-year balance and enforce availability
    7. Create the PENDING application and reserve the days as pending
    8. Audit and commit
    """
    today = date.today()
    employee = await get_employee_or_404(auth.company_id, auth.user_id)

    _validate_dates(payload.start_date, payload.end_date, payload.is_half_day, today)

    policy = await find_policy(session, auth.company_id, payload.leave_type)
    if policy is None:
        raise NotFoundError("Leave policy not found for this leave type")
    if not policy.active:
        raise ValidationError("This leave type is not active")
    if payload.is_half_day and not policy.half_day_allowed:
        raise ValidationError("Half day leave is not allowed for this leave type")

    number_of_days = calculate_leave_days(payload.start_date, payload.end_date, payload.is_half_day)
    if number_of_days <= 0:
        raise ValidationError("Leave covers no working days")

    await _check_overlap(session, employee.id, payload.start_date, payload.end_date)

    balance = await find_balance(session, employee.id, payload.leave_type, today.year, for_update=True)
    if balance is not None and balance.available < number_of_days:
        raise InsufficientBalanceError(f"Insufficient leave balance. Available: {balance.available} days")

    application = LeaveApplication(
        company_id=auth.company_id,
        employee_id=employee.id,
        leave_type=payload.leave_type.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_half_day=payload.is_half_day,
        number_of_days=number_of_days,
        reason=payload.reason,
        attachment_url=payload.attachment_url,
        status=LeaveStatus.PENDING.value,
        requires_hr_approval=number_of_days > get_settings().hr_approval_threshold_days,
    )
    session.add(application)

    if balance is not None:
        hold_pending(balance, number_of_days)
        application.balance_year = balance.year

    logger.info(
        "Leave applied: employee=%s type=%s days=%s hr_required=%s",
        employee.id,
        application.leave_type,
        number_of_days,
        application.requires_hr_approval,
    )
    return await _commit_transition(session, auth, application, AuditAction.APPLY, None)


async def approve_by_manager(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
    payload: ApprovalPayload,
) -> LeaveApplicationResponse:
    """Record the direct manager's decision.

    Approval of an application that needs HR leaves it PENDING with the
    days still reserved; otherwise the days move from pending to used.
    """
    application = await _get_application_or_404(session, auth.company_id, application_id)

    applicant = await get_employee_or_404(application.company_id, application.employee_id)
    require_direct_manager(auth, applicant)

    if application.status != LeaveStatus.PENDING.value:
        raise ConflictError("Leave application is not in pending status")
    if application.manager_approved_by is not None:
        raise ConflictError("Leave application has already been approved by the manager")

    today = date.today()
    before_dict = model_to_audit_dict(application)
    balance = await _reserved_balance_for_update(session, application)

    if not payload.approved:
        _reject(application, payload.reason, today)
        if balance is not None:
            release_pending(balance, application.number_of_days)
        logger.info("Leave %s rejected by manager %s", application.id, auth.user_id)
        return await _commit_transition(session, auth, application, AuditAction.REJECT, before_dict)

    application.manager_approved_by = auth.user_id
    application.manager_approval_date = today

    if not application.requires_hr_approval:
        application.status = LeaveStatus.APPROVED.value
        if balance is not None:
            consume_pending(balance, application.number_of_days)

    logger.info(
        "Leave %s approved by manager %s (status=%s)", application.id, auth.user_id, application.status
    )
    return await _commit_transition(session, auth, application, AuditAction.MANAGER_APPROVE, before_dict)


async def approve_by_hr(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
    payload: ApprovalPayload,
) -> LeaveApplicationResponse:
    """Record HR's decision on a manager-approved application that needs HR."""
    require_role(auth, HR_ROLES)
    application = await _get_application_or_404(session, auth.company_id, application_id)

    if application.status != LeaveStatus.PENDING.value:
        raise ConflictError("Leave application is not in pending status")
    if not application.requires_hr_approval:
        raise ConflictError("This leave application does not require HR approval")
    if application.manager_approved_by is None:
        raise ConflictError("Leave must be approved by manager first")

    today = date.today()
    before_dict = model_to_audit_dict(application)
    balance = await _reserved_balance_for_update(session, application)

    if not payload.approved:
        _reject(application, payload.reason, today)
        if balance is not None:
            release_pending(balance, application.number_of_days)
        logger.info("Leave %s rejected by HR %s", application.id, auth.user_id)
        return await _commit_transition(session, auth, application, AuditAction.REJECT, before_dict)

    application.hr_approved_by = auth.user_id
    application.hr_approval_date = today
    application.status = LeaveStatus.APPROVED.value
    if balance is not None:
        consume_pending(balance, application.number_of_days)

    logger.info("Leave %s approved by HR %s", application.id, auth.user_id)
    return await _commit_transition(session, auth, application, AuditAction.HR_APPROVE, before_dict)


async def cancel_leave(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
) -> LeaveApplicationResponse:
    """Cancel the caller's own pending or not-yet-started approved application."""
    application = await _get_application_or_404(session, auth.company_id, application_id)
    require_owner(auth, application.employee_id, "You can only cancel your own leave applications")

    if application.status in _TERMINAL_STATUSES:
        raise ConflictError(f"Leave application is already {application.status}")

    today = date.today()
    if application.status == LeaveStatus.APPROVED.value and application.start_date < today:
        raise ConflictError("Cannot cancel leave that has already started")

    before_dict = model_to_audit_dict(application)
    previous_status = application.status
    balance = await _reserved_balance_for_update(session, application)

    application.status = LeaveStatus.CANCELLED.value
    if balance is not None:
        if previous_status == LeaveStatus.APPROVED.value:
            restore_used(balance, application.number_of_days)
        else:
            release_pending(balance, application.number_of_days)

    logger.info("Leave %s cancelled (was %s)", application.id, previous_status)
    return await _commit_transition(session, auth, application, AuditAction.CANCEL, before_dict)


# ---------------------------------------------------------------------------
# Public API: queries
# ---------------------------------------------------------------------------


async def get_application(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
) -> LeaveApplicationResponse:
    application = await _get_application_or_404(session, auth.company_id, application_id)
    return _build_application_response(application)


async def list_applications(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    status_filter: LeaveStatus | None = None,
    employee_id: uuid.UUID | None = None,
    leave_type: LeaveType | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    deleted: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> LeaveApplicationListResponse:
    """List applications, newest first.

    ``start_date``/``end_date`` select applications overlapping that window.
    """
    filters = [
        col(LeaveApplication.company_id) == company_id,
        col(LeaveApplication.deleted) == deleted,
    ]
    if status_filter is not None:
        filters.append(col(LeaveApplication.status) == status_filter.value)
    if employee_id is not None:
        filters.append(col(LeaveApplication.employee_id) == employee_id)
    if leave_type is not None:
        filters.append(col(LeaveApplication.leave_type) == leave_type.value)
    if start_date is not None:
        filters.append(col(LeaveApplication.end_date) >= start_date)
    if end_date is not None:
        filters.append(col(LeaveApplication.start_date) <= end_date)

    count_result = await session.execute(select(func.count()).select_from(LeaveApplication).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveApplication)
        .where(*filters)
        .order_by(col(LeaveApplication.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    applications = list(result.scalars().all())

    return LeaveApplicationListResponse(
        items=[_build_application_response(a) for a in applications],
        total=total,
    )


async def list_my_applications(
    session: AsyncSession,
    auth: AuthContext,
    offset: int = 0,
    limit: int = 50,
) -> LeaveApplicationListResponse:
    return await list_applications(session, auth.company_id, employee_id=auth.user_id, offset=offset, limit=limit)


async def count_my_pending(session: AsyncSession, auth: AuthContext) -> PendingCountResponse:
    result = await session.execute(
        select(func.count())
        .select_from(LeaveApplication)
        .where(
            col(LeaveApplication.company_id) == auth.company_id,
            col(LeaveApplication.employee_id) == auth.user_id,
            col(LeaveApplication.status) == LeaveStatus.PENDING.value,
            col(LeaveApplication.deleted).is_(False),
        )
    )
    return PendingCountResponse(pending=result.scalar_one())


async def list_pending_for_manager(
    session: AsyncSession,
    auth: AuthContext,
) -> LeaveApplicationListResponse:
    """Pending applications of the caller's direct reports still awaiting the manager."""
    reports = await get_employee_directory().list_direct_reports(auth.company_id, auth.user_id)
    report_ids = [e.id for e in reports]
    if not report_ids:
        return LeaveApplicationListResponse(items=[], total=0)

    result = await session.execute(
        select(LeaveApplication)
        .where(
            col(LeaveApplication.company_id) == auth.company_id,
            col(LeaveApplication.employee_id).in_(report_ids),
            col(LeaveApplication.status) == LeaveStatus.PENDING.value,
            col(LeaveApplication.manager_approved_by).is_(None),
            col(LeaveApplication.deleted).is_(False),
        )
        .order_by(col(LeaveApplication.start_date))
    )
    applications = list(result.scalars().all())
    return LeaveApplicationListResponse(
        items=[_build_application_response(a) for a in applications],
        total=len(applications),
    )


async def list_pending_for_hr(
    session: AsyncSession,
    auth: AuthContext,
) -> LeaveApplicationListResponse:
    """Manager-approved applications that still need an HR decision."""
    require_role(auth, HR_ROLES)
    result = await session.execute(
        select(LeaveApplication)
        .where(
            col(LeaveApplication.company_id) == auth.company_id,
            col(LeaveApplication.status) == LeaveStatus.PENDING.value,
            col(LeaveApplication.requires_hr_approval).is_(True),
            col(LeaveApplication.manager_approved_by).is_not(None),
            col(LeaveApplication.hr_approved_by).is_(None),
            col(LeaveApplication.deleted).is_(False),
        )
        .order_by(col(LeaveApplication.start_date))
    )
    applications = list(result.scalars().all())
    return LeaveApplicationListResponse(
        items=[_build_application_response(a) for a in applications],
        total=len(applications),
    )
