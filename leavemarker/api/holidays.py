# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from leavemarker.api.deps import AuthDep, HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.schemas.holiday import HolidayListResponse, HolidayPayload, HolidayResponse
from leavemarker.services import holiday as holiday_service

holidays_router = APIRouter(
    prefix="/companies/{company_id}/holidays",
    tags=["holidays"],
    dependencies=[Depends(validate_company_scope)],
)


@holidays_router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
async def create_holiday(
    payload: HolidayPayload,
    session: SessionDep,
    auth: HRDep,
) -> HolidayResponse:
    """Create a company holiday (HR only)."""
    return await holiday_service.create_holiday(session, auth, payload)


@holidays_router.get("", response_model=HolidayListResponse)
async def list_holidays(
    session: SessionDep,
    auth: AuthDep,
    year: int | None = Query(default=None),
    from_date: date | None = Query(default=None),
    to_date: date | None = Query(default=None),
    active_only: bool = Query(default=False),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> HolidayListResponse:
    """List company holidays with optional year or date-window filters."""
    return await holiday_service.list_holidays(
        session,
        auth.company_id,
        year=year,
        from_date=from_date,
        to_date=to_date,
        active_only=active_only,
        offset=offset,
        limit=limit,
    )


@holidays_router.get("/{holiday_id}", response_model=HolidayResponse)
async def get_holiday(
    holiday_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> HolidayResponse:
    return await holiday_service.get_holiday(session, auth.company_id, holiday_id)


@holidays_router.put("/{holiday_id}", response_model=HolidayResponse)
async def update_holiday(
    holiday_id: uuid.UUID,
    payload: HolidayPayload,
    session: SessionDep,
    auth: HRDep,
) -> HolidayResponse:
    return await holiday_service.update_holiday(session, auth, holiday_id, payload)


@holidays_router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holiday(
    holiday_id: uuid.UUID,
    session: SessionDep,
    auth: HRDep,
) -> None:
    """Soft-delete a company holiday (HR only)."""
    await holiday_service.delete_holiday(session, auth, holiday_id)
