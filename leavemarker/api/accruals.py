# ruff: noqa: B008, TC001, TC003
"""Manual triggers for the periodic balance sweeps."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from leavemarker.api.deps import HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.schemas.accrual import AccrualRunResponse
from leavemarker.services import accrual as accrual_service

accruals_router = APIRouter(
    prefix="/companies/{company_id}/accruals",
    tags=["accruals"],
    dependencies=[Depends(validate_company_scope)],
)


@accruals_router.post("/monthly", response_model=AccrualRunResponse)
async def trigger_monthly_accrual(
    session: SessionDep,
    auth: HRDep,
    year: int | None = Query(default=None),
    month: int | None = Query(default=None, ge=1, le=12),
) -> AccrualRunResponse:
    """Credit this month's accrual to every balance (HR only).

    Defaults to the current month. A period already processed is reported
    with ``already_processed`` and changes nothing.
    """
    today = date.today()
    return await accrual_service.trigger_monthly_accrual(
        session,
        auth,
        year if year is not None else today.year,
        month if month is not None else today.month,
    )


@accruals_router.post("/carry-forward", response_model=AccrualRunResponse)
async def trigger_carry_forward(
    session: SessionDep,
    auth: HRDep,
    year: int | None = Query(default=None),
) -> AccrualRunResponse:
    """Carry unused days of ``year`` (default: last year) into the next year (HR only)."""
    return await accrual_service.trigger_carry_forward(
        session,
        auth,
        year if year is not None else date.today().year - 1,
    )
