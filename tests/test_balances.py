"""Tests for balance initialization, lookups and loss-of-pay totals."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import select
from sqlmodel import col

from leavemarker.exceptions import AuthorizationError, NotFoundError
from leavemarker.models.audit import AuditLog
from leavemarker.models.balance import LeaveBalance
from leavemarker.models.enums import LeaveType, Role
from leavemarker.models.policy import LeavePolicy
from leavemarker.services import balance as balance_service
from tests.helpers import CURRENT_YEAR

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from tests.helpers import Org


async def _seed_policies(db_session: AsyncSession, org: Org) -> None:
    db_session.add_all(
        [
            LeavePolicy(company_id=org.company_id, leave_type="CASUAL_LEAVE", annual_quota=12),
            LeavePolicy(company_id=org.company_id, leave_type="SICK_LEAVE", annual_quota=8),
            LeavePolicy(company_id=org.company_id, leave_type="EARNED_LEAVE", annual_quota=15, active=False),
        ]
    )
    await db_session.flush()


def _balances_url(org: Org, employee_id: uuid.UUID, suffix: str = "") -> str:
    return org.url(f"/employees/{employee_id}/balances{suffix}")


# ---------------------------------------------------------------------------
# Ledger arithmetic
# ---------------------------------------------------------------------------


def _balance(**kwargs: Any) -> LeaveBalance:
    balance = LeaveBalance(
        company_id=uuid.uuid4(),
        employee_id=uuid.uuid4(),
        leave_type="CASUAL_LEAVE",
        year=CURRENT_YEAR,
        **kwargs,
    )
    balance.recompute_available()
    return balance


def _holds_invariant(balance: LeaveBalance) -> bool:
    return balance.available == balance.total_quota - balance.used - balance.pending


def test_hold_and_release_pending() -> None:
    balance = _balance(total_quota=10.0)
    balance_service.hold_pending(balance, 3.0)
    assert (balance.pending, balance.available) == (3.0, 7.0)
    balance_service.release_pending(balance, 3.0)
    assert (balance.pending, balance.available) == (0.0, 10.0)
    assert _holds_invariant(balance)


def test_consume_pending_moves_days_to_used() -> None:
    balance = _balance(total_quota=10.0)
    balance_service.hold_pending(balance, 2.5)
    balance_service.consume_pending(balance, 2.5)
    assert (balance.used, balance.pending, balance.available) == (2.5, 0.0, 7.5)
    assert _holds_invariant(balance)


def test_restore_used_and_add_quota() -> None:
    balance = _balance(total_quota=10.0, used=4.0)
    balance_service.restore_used(balance, 4.0)
    balance_service.add_quota(balance, 1.5)
    assert (balance.total_quota, balance.used, balance.available) == (11.5, 0.0, 11.5)
    assert _holds_invariant(balance)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


async def test_initialize_creates_balances_for_active_policies(
    async_client: AsyncClient, org: Org, db_session: AsyncSession
) -> None:
    await _seed_policies(db_session, org)

    resp = await async_client.post(_balances_url(org, org.employee_id, "/initialize"), headers=org.hr_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    by_type = {item["leave_type"]: item for item in data["items"]}
    assert set(by_type) == {"CASUAL_LEAVE", "SICK_LEAVE"}
    casual = by_type["CASUAL_LEAVE"]
    assert casual["year"] == CURRENT_YEAR
    assert casual["total_quota"] == 12.0
    assert casual["available"] == 12.0
    assert casual["used"] == 0.0
    assert casual["pending"] == 0.0


async def test_initialize_is_idempotent(async_client: AsyncClient, org: Org, db_session: AsyncSession) -> None:
    await _seed_policies(db_session, org)
    url = _balances_url(org, org.employee_id, "/initialize")
    await async_client.post(url, headers=org.hr_headers)
    resp = await async_client.post(url, headers=org.hr_headers)
    assert resp.json()["total"] == 2

    result = await db_session.execute(select(LeaveBalance).where(col(LeaveBalance.employee_id) == org.employee_id))
    assert len(result.scalars().all()) == 2


async def test_initialize_keeps_existing_balance(db_session: AsyncSession, org: Org) -> None:
    await _seed_policies(db_session, org)
    existing = _balance(total_quota=20.0, used=5.0)
    existing.company_id = org.company_id
    existing.employee_id = org.employee_id
    existing.recompute_available()
    db_session.add(existing)
    await db_session.flush()

    response = await balance_service.initialize_balances(
        db_session, org.auth(org.hr_id, Role.HR_ADMIN), org.employee_id, CURRENT_YEAR
    )
    casual = next(b for b in response.items if b.leave_type == LeaveType.CASUAL_LEAVE)
    assert casual.total_quota == 20.0
    assert casual.used == 5.0


async def test_initialize_for_explicit_year(async_client: AsyncClient, org: Org, db_session: AsyncSession) -> None:
    await _seed_policies(db_session, org)
    resp = await async_client.post(
        _balances_url(org, org.employee_id, f"/initialize?year={CURRENT_YEAR + 1}"), headers=org.hr_headers
    )
    assert {item["year"] for item in resp.json()["items"]} == {CURRENT_YEAR + 1}


async def test_initialize_writes_audit(async_client: AsyncClient, org: Org, db_session: AsyncSession) -> None:
    await _seed_policies(db_session, org)
    await async_client.post(_balances_url(org, org.employee_id, "/initialize"), headers=org.hr_headers)

    result = await db_session.execute(
        select(AuditLog).where(col(AuditLog.entity_type) == "LEAVE_BALANCE", col(AuditLog.action) == "CREATE")
    )
    assert len(result.scalars().all()) == 2


async def test_initialize_requires_hr(async_client: AsyncClient, org: Org) -> None:
    resp = await async_client.post(_balances_url(org, org.employee_id, "/initialize"), headers=org.manager_headers)
    assert resp.status_code == 403


async def test_initialize_unknown_employee(async_client: AsyncClient, org: Org) -> None:
    resp = await async_client.post(_balances_url(org, uuid.uuid4(), "/initialize"), headers=org.hr_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Employee not found"


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def test_employee_reads_own_balances(async_client: AsyncClient, org: Org, db_session: AsyncSession) -> None:
    await _seed_policies(db_session, org)
    await async_client.post(_balances_url(org, org.employee_id, "/initialize"), headers=org.hr_headers)

    resp = await async_client.get(_balances_url(org, org.employee_id), headers=org.employee_headers)
    assert resp.status_code == 200
    assert resp.json()["total"] == 2

    single = await async_client.get(_balances_url(org, org.employee_id, "/SICK_LEAVE"), headers=org.employee_headers)
    assert single.status_code == 200
    assert single.json()["total_quota"] == 8.0


async def test_employee_cannot_read_colleague(async_client: AsyncClient, org: Org) -> None:
    resp = await async_client.get(_balances_url(org, org.colleague_id), headers=org.employee_headers)
    assert resp.status_code == 403


async def test_manager_reads_report_balances(async_client: AsyncClient, org: Org) -> None:
    resp = await async_client.get(_balances_url(org, org.employee_id), headers=org.manager_headers)
    assert resp.status_code == 200
    assert resp.json()["total"] == 0


async def test_get_balance_missing(db_session: AsyncSession, org: Org) -> None:
    with pytest.raises(NotFoundError, match="Leave balance not found"):
        await balance_service.get_balance(
            db_session,
            org.auth(org.employee_id, Role.EMPLOYEE),
            org.employee_id,
            LeaveType.COMP_OFF,
            CURRENT_YEAR,
        )


async def test_get_balance_ignores_other_company(db_session: AsyncSession, org: Org) -> None:
    foreign = _balance(total_quota=5.0)
    foreign.employee_id = org.employee_id
    db_session.add(foreign)
    await db_session.flush()

    with pytest.raises(NotFoundError):
        await balance_service.get_balance(
            db_session, org.auth(org.hr_id, Role.HR_ADMIN), org.employee_id, LeaveType.CASUAL_LEAVE, CURRENT_YEAR
        )


async def test_get_balance_ignores_soft_deleted(db_session: AsyncSession, org: Org) -> None:
    balance = _balance(total_quota=5.0)
    balance.company_id = org.company_id
    balance.employee_id = org.employee_id
    balance.deleted = True
    db_session.add(balance)
    await db_session.flush()

    assert await balance_service.find_balance(db_session, org.employee_id, "CASUAL_LEAVE", CURRENT_YEAR) is None
    found = await balance_service.find_balance(db_session, org.employee_id, "CASUAL_LEAVE", CURRENT_YEAR, deleted=True)
    assert found is not None


# ---------------------------------------------------------------------------
# Loss of pay
# ---------------------------------------------------------------------------


async def test_lop_days_sums_used_loss_of_pay(async_client: AsyncClient, org: Org, db_session: AsyncSession) -> None:
    lop = _balance(total_quota=0.0, used=2.5)
    lop.company_id = org.company_id
    lop.employee_id = org.employee_id
    lop.leave_type = "LOSS_OF_PAY"
    casual = _balance(total_quota=12.0, used=4.0)
    casual.company_id = org.company_id
    casual.employee_id = org.employee_id
    db_session.add_all([lop, casual])
    await db_session.flush()

    resp = await async_client.get(_balances_url(org, org.employee_id, "/lop"), headers=org.employee_headers)
    assert resp.status_code == 200
    assert resp.json() == {"employee_id": str(org.employee_id), "year": CURRENT_YEAR, "days": 2.5}


async def test_lop_days_requires_reader_and_defaults_to_zero(db_session: AsyncSession, org: Org) -> None:
    with pytest.raises(AuthorizationError):
        await balance_service.calculate_lop_days(
            db_session, org.auth(org.colleague_id, Role.EMPLOYEE), org.employee_id, CURRENT_YEAR
        )
    result = await balance_service.calculate_lop_days(
        db_session, org.auth(org.hr_id, Role.HR_ADMIN), org.employee_id, CURRENT_YEAR
    )
    assert result.days == 0
