# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leavemarker.exceptions import NotFoundError
from leavemarker.models.balance import LeaveBalance
from leavemarker.models.enums import AuditAction, AuditEntityType, LeaveType
from leavemarker.schemas.balance import LeaveBalanceListResponse, LeaveBalanceResponse, LossOfPayResponse
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import APPROVER_ROLES, require_hr, require_role
from leavemarker.services.employee import get_employee_or_404
from leavemarker.services.policy import list_active_policies

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.auth import AuthContext


# ---------------------------------------------------------------------------
# Ledger arithmetic
#
# Every helper keeps available == total_quota - used - pending.
# ---------------------------------------------------------------------------


def hold_pending(balance: LeaveBalance, days: float) -> None:
    """Reserve days for a new application."""
    balance.pending += days
    balance.recompute_available()


def release_pending(balance: LeaveBalance, days: float) -> None:
    """Give back reserved days (rejection or cancellation of a pending application)."""
    balance.pending -= days
    balance.recompute_available()


def consume_pending(balance: LeaveBalance, days: float) -> None:
    """Turn reserved days into used days on final approval."""
    balance.pending -= days
    balance.used += days
    balance.recompute_available()


def restore_used(balance: LeaveBalance, days: float) -> None:
    """Give back used days when an approved application is cancelled."""
    balance.used -= days
    balance.recompute_available()


def add_quota(balance: LeaveBalance, days: float) -> None:
    balance.total_quota += days
    balance.recompute_available()


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------


def _build_balance_response(balance: LeaveBalance) -> LeaveBalanceResponse:
    return LeaveBalanceResponse(
        id=balance.id,
        employee_id=balance.employee_id,
        leave_type=LeaveType(balance.leave_type),
        year=balance.year,
        total_quota=balance.total_quota,
        used=balance.used,
        pending=balance.pending,
        available=balance.available,
        carried_forward=balance.carried_forward,
        updated_at=balance.updated_at,
    )


async def find_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type: LeaveType | str,
    year: int,
    *,
    deleted: bool = False,
    for_update: bool = False,
) -> LeaveBalance | None:
    """Return the balance row for (employee, leave type, year), or None.

    With ``for_update`` the row is locked until the caller's transaction ends.
    """
    query = select(LeaveBalance).where(
        col(LeaveBalance.employee_id) == employee_id,
        col(LeaveBalance.leave_type) == str(leave_type),
        col(LeaveBalance.year) == year,
        col(LeaveBalance.deleted) == deleted,
    )
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def list_company_balances(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    *,
    leave_type: LeaveType | str | None = None,
    deleted: bool = False,
    for_update: bool = False,
) -> list[LeaveBalance]:
    filters = [
        col(LeaveBalance.company_id) == company_id,
        col(LeaveBalance.year) == year,
        col(LeaveBalance.deleted) == deleted,
    ]
    if leave_type is not None:
        filters.append(col(LeaveBalance.leave_type) == str(leave_type))

    query = select(LeaveBalance).where(*filters).order_by(col(LeaveBalance.employee_id), col(LeaveBalance.leave_type))
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    return list(result.scalars().all())


async def _list_employee_balance_rows(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    year: int,
    *,
    deleted: bool = False,
) -> list[LeaveBalance]:
    result = await session.execute(
        select(LeaveBalance)
        .where(
            col(LeaveBalance.company_id) == company_id,
            col(LeaveBalance.employee_id) == employee_id,
            col(LeaveBalance.year) == year,
            col(LeaveBalance.deleted) == deleted,
        )
        .order_by(col(LeaveBalance.leave_type))
    )
    return list(result.scalars().all())


def _require_balance_reader(auth: AuthContext, employee_id: uuid.UUID) -> None:
    """Employees read their own balances; approvers read anyone's in the company."""
    if auth.user_id == employee_id:
        return
    require_role(auth, APPROVER_ROLES)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def initialize_balances(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    year: int,
) -> LeaveBalanceListResponse:
    """Create missing balances for every active policy of the employee's company.

    Existing balances are left untouched, so the call is safe to repeat.
    """
    require_hr(auth)
    employee = await get_employee_or_404(auth.company_id, employee_id)

    policies = await list_active_policies(session, auth.company_id)
    for policy in policies:
        if await find_balance(session, employee.id, policy.leave_type, year) is not None:
            continue

        balance = LeaveBalance(
            company_id=auth.company_id,
            employee_id=employee.id,
            leave_type=policy.leave_type,
            year=year,
            total_quota=float(policy.annual_quota),
            used=0.0,
            pending=0.0,
            carried_forward=0.0,
        )
        balance.recompute_available()
        session.add(balance)
        await session.flush()

        await write_audit_log(
            session,
            company_id=auth.company_id,
            actor_id=auth.user_id,
            entity_type=AuditEntityType.LEAVE_BALANCE,
            entity_id=balance.id,
            action=AuditAction.CREATE,
            after_json=model_to_audit_dict(balance),
        )

    await session.commit()

    rows = await _list_employee_balance_rows(session, auth.company_id, employee.id, year)
    return LeaveBalanceListResponse(items=[_build_balance_response(b) for b in rows], total=len(rows))


async def get_balance(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    year: int,
) -> LeaveBalanceResponse:
    _require_balance_reader(auth, employee_id)
    balance = await find_balance(session, employee_id, leave_type, year)
    if balance is None or balance.company_id != auth.company_id:
        raise NotFoundError("Leave balance not found")
    return _build_balance_response(balance)


async def list_employee_balances(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    year: int,
) -> LeaveBalanceListResponse:
    """All balances of an employee for one year."""
    _require_balance_reader(auth, employee_id)
    rows = await _list_employee_balance_rows(session, auth.company_id, employee_id, year)
    return LeaveBalanceListResponse(items=[_build_balance_response(b) for b in rows], total=len(rows))


async def calculate_lop_days(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    year: int,
) -> LossOfPayResponse:
    """Loss-of-pay days used by an employee in a year."""
    _require_balance_reader(auth, employee_id)
    rows = await _list_employee_balance_rows(session, auth.company_id, employee_id, year)
    days = sum(b.used for b in rows if b.leave_type == LeaveType.LOSS_OF_PAY.value)
    return LossOfPayResponse(employee_id=employee_id, year=year, days=days)
