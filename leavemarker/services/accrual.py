"""Periodic balance sweeps: monthly accrual and year-end carry-forward.

Each sweep is recorded in ``leave_accrual_run`` and is applied at most once
per (company, kind, year, month). Re-running a processed period is a no-op
that reports ``already_processed``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leavemarker.exceptions import ValidationError
from leavemarker.models.accrual_run import LeaveAccrualRun
from leavemarker.models.audit import SYSTEM_ACTOR_ID
from leavemarker.models.enums import AccrualRunKind, AuditAction, AuditEntityType
from leavemarker.models.policy import LeavePolicy
from leavemarker.schemas.accrual import AccrualRunResponse
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import require_hr
from leavemarker.services.balance import add_quota, find_balance, list_company_balances
from leavemarker.services.policy import list_active_policies

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

# month recorded for sweeps that run once a year
_YEARLY = 0


@dataclass
class AccrualRunResult:
    """Summary of one sweep for one company."""

    company_id: uuid.UUID
    kind: AccrualRunKind
    year: int
    month: int = _YEARLY
    balances_updated: int = 0
    skipped: int = 0
    already_processed: bool = False

    def to_response(self) -> AccrualRunResponse:
        return AccrualRunResponse(
            kind=self.kind,
            year=self.year,
            month=self.month,
            balances_updated=self.balances_updated,
            already_processed=self.already_processed,
        )


# ---------------------------------------------------------------------------
# Run markers
# ---------------------------------------------------------------------------


async def _find_run(
    session: AsyncSession,
    company_id: uuid.UUID,
    kind: AccrualRunKind,
    year: int,
    month: int,
) -> LeaveAccrualRun | None:
    result = await session.execute(
        select(LeaveAccrualRun).where(
            col(LeaveAccrualRun.company_id) == company_id,
            col(LeaveAccrualRun.kind) == kind.value,
            col(LeaveAccrualRun.year) == year,
            col(LeaveAccrualRun.month) == month,
        )
    )
    return result.scalar_one_or_none()


async def list_company_ids_with_policies(session: AsyncSession) -> list[uuid.UUID]:
    """Companies that have at least one active leave policy."""
    result = await session.execute(
        select(LeavePolicy.company_id)
        .where(col(LeavePolicy.active).is_(True), col(LeavePolicy.deleted).is_(False))
        .distinct()
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Sweeps
# ---------------------------------------------------------------------------


async def run_monthly_accrual(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    month: int,
    *,
    actor_id: uuid.UUID = SYSTEM_ACTOR_ID,
) -> AccrualRunResult:
    """Credit ``monthly_accrual`` days to every balance of the year.

    Only active policies with a positive monthly accrual contribute. The
    caller's session is committed on success.
    """
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")

    result = AccrualRunResult(company_id=company_id, kind=AccrualRunKind.MONTHLY_ACCRUAL, year=year, month=month)
    if await _find_run(session, company_id, result.kind, year, month) is not None:
        logger.info("Monthly accrual already processed: company=%s period=%s-%02d", company_id, year, month)
        result.already_processed = True
        return result

    for policy in await list_active_policies(session, company_id):
        if policy.monthly_accrual <= 0:
            continue

        balances = await list_company_balances(
            session, company_id, year, leave_type=policy.leave_type, for_update=True
        )
        for balance in balances:
            before_dict = model_to_audit_dict(balance)
            add_quota(balance, policy.monthly_accrual)
            await write_audit_log(
                session,
                company_id=company_id,
                actor_id=actor_id,
                entity_type=AuditEntityType.LEAVE_BALANCE,
                entity_id=balance.id,
                action=AuditAction.ACCRUE,
                before_json=before_dict,
                after_json=model_to_audit_dict(balance),
            )
            result.balances_updated += 1

    session.add(
        LeaveAccrualRun(
            company_id=company_id,
            kind=result.kind.value,
            year=year,
            month=month,
            balances_updated=result.balances_updated,
        )
    )
    await session.commit()

    logger.info(
        "Monthly accrual done: company=%s period=%s-%02d balances=%d",
        company_id,
        year,
        month,
        result.balances_updated,
    )
    return result


async def run_year_end_carry_forward(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    *,
    actor_id: uuid.UUID = SYSTEM_ACTOR_ID,
) -> AccrualRunResult:
    """Move unused days of ``year`` into the balances of ``year + 1``.

    For each carry-forward policy the carried amount is
    ``min(available, max_carry_forward)``, never negative. Employees without
    a balance for the next year are skipped; initialize balances first.
    """
    result = AccrualRunResult(company_id=company_id, kind=AccrualRunKind.CARRY_FORWARD, year=year)
    if await _find_run(session, company_id, result.kind, year, _YEARLY) is not None:
        logger.info("Carry-forward already processed: company=%s year=%s", company_id, year)
        result.already_processed = True
        return result

    for policy in await list_active_policies(session, company_id):
        if not policy.carry_forward:
            continue

        for balance in await list_company_balances(session, company_id, year, leave_type=policy.leave_type):
            carry = max(0.0, min(balance.available, float(policy.max_carry_forward)))
            if carry <= 0:
                result.skipped += 1
                continue

            next_balance = await find_balance(
                session, balance.employee_id, policy.leave_type, year + 1, for_update=True
            )
            if next_balance is None:
                result.skipped += 1
                continue

            before_dict = model_to_audit_dict(next_balance)
            next_balance.carried_forward = carry
            add_quota(next_balance, carry)
            await write_audit_log(
                session,
                company_id=company_id,
                actor_id=actor_id,
                entity_type=AuditEntityType.LEAVE_BALANCE,
                entity_id=next_balance.id,
                action=AuditAction.CARRY_FORWARD,
                before_json=before_dict,
                after_json=model_to_audit_dict(next_balance),
            )
            result.balances_updated += 1

    session.add(
        LeaveAccrualRun(
            company_id=company_id,
            kind=result.kind.value,
            year=year,
            month=_YEARLY,
            balances_updated=result.balances_updated,
        )
    )
    await session.commit()

    logger.info(
        "Carry-forward done: company=%s year=%s balances=%d skipped=%d",
        company_id,
        year,
        result.balances_updated,
        result.skipped,
    )
    return result


async def run_scheduled_sweeps(session: AsyncSession, target_date: date | None = None) -> list[AccrualRunResult]:
    """Run the sweeps due on ``target_date`` for every company with policies.

    The 1st of a month triggers that month's accrual; Jan 1 also triggers
    the carry-forward of the previous year. A failing company is logged and
    does not stop the others.
    """
    if target_date is None:
        target_date = date.today()

    results: list[AccrualRunResult] = []
    if target_date.day != 1:
        return results

    for company_id in await list_company_ids_with_policies(session):
        try:
            if target_date.month == 1:
                results.append(await run_year_end_carry_forward(session, company_id, target_date.year - 1))
            results.append(await run_monthly_accrual(session, company_id, target_date.year, target_date.month))
        except Exception:
            logger.exception("Scheduled sweep failed for company=%s date=%s", company_id, target_date)
            await session.rollback()

    return results


# ---------------------------------------------------------------------------
# Manual triggers (HR)
# ---------------------------------------------------------------------------


async def trigger_monthly_accrual(
    session: AsyncSession,
    auth: AuthContext,
    year: int,
    month: int,
) -> AccrualRunResponse:
    require_hr(auth)
    result = await run_monthly_accrual(session, auth.company_id, year, month, actor_id=auth.user_id)
    return result.to_response()


async def trigger_carry_forward(
    session: AsyncSession,
    auth: AuthContext,
    year: int,
) -> AccrualRunResponse:
    require_hr(auth)
    result = await run_year_end_carry_forward(session, auth.company_id, year, actor_id=auth.user_id)
    return result.to_response()
