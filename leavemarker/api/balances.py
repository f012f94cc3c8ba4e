# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from leavemarker.api.deps import AuthDep, HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.models.enums import LeaveType
from leavemarker.schemas.balance import LeaveBalanceListResponse, LeaveBalanceResponse, LossOfPayResponse
from leavemarker.services import balance as balance_service

employee_balance_router = APIRouter(
    prefix="/companies/{company_id}/employees/{employee_id}/balances",
    tags=["balances"],
    dependencies=[Depends(validate_company_scope)],
)


def _resolve_year(year: int | None) -> int:
    return year if year is not None else date.today().year


@employee_balance_router.get("", response_model=LeaveBalanceListResponse)
async def list_employee_balances(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    year: int | None = Query(default=None),
) -> LeaveBalanceListResponse:
    """All balances of an employee for one year (current year by default)."""
    return await balance_service.list_employee_balances(session, auth, employee_id, _resolve_year(year))


@employee_balance_router.post("/initialize", response_model=LeaveBalanceListResponse)
async def initialize_balances(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: HRDep,
    year: int | None = Query(default=None),
) -> LeaveBalanceListResponse:
    """Create missing balances from the company's active policies (HR only)."""
    return await balance_service.initialize_balances(session, auth, employee_id, _resolve_year(year))


@employee_balance_router.get("/lop", response_model=LossOfPayResponse)
async def get_lop_days(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    year: int | None = Query(default=None),
) -> LossOfPayResponse:
    return await balance_service.calculate_lop_days(session, auth, employee_id, _resolve_year(year))


@employee_balance_router.get("/{leave_type}", response_model=LeaveBalanceResponse)
async def get_balance(
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    session: SessionDep,
    auth: AuthDep,
    year: int | None = Query(default=None),
) -> LeaveBalanceResponse:
    return await balance_service.get_balance(session, auth, employee_id, leave_type, _resolve_year(year))
