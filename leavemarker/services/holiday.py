# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import extract, func, select
from sqlmodel import col

from leavemarker.exceptions import NotFoundError, ValidationError
from leavemarker.models.enums import AuditAction, AuditEntityType, HolidayType
from leavemarker.models.holiday import Holiday
from leavemarker.schemas.holiday import HolidayListResponse, HolidayResponse
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import require_hr

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.auth import AuthContext
    from leavemarker.schemas.holiday import HolidayPayload


def _build_holiday_response(holiday: Holiday) -> HolidayResponse:
    return HolidayResponse(
        id=holiday.id,
        company_id=holiday.company_id,
        date=holiday.date,
        name=holiday.name,
        type=HolidayType(holiday.type),
        state=holiday.state,
        active=holiday.active,
    )


def _reject_past_date(holiday_date: date) -> None:
    if holiday_date < date.today():
        raise ValidationError("Cannot create holiday for past dates")


async def _get_holiday_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    holiday_id: uuid.UUID,
    *,
    deleted: bool = False,
) -> Holiday:
    result = await session.execute(
        select(Holiday).where(
            col(Holiday.id) == holiday_id,
            col(Holiday.company_id) == company_id,
            col(Holiday.deleted) == deleted,
        )
    )
    holiday = result.scalar_one_or_none()
    if holiday is None:
        raise NotFoundError("Holiday not found")
    return holiday


async def create_holiday(
    session: AsyncSession,
    auth: AuthContext,
    payload: HolidayPayload,
) -> HolidayResponse:
    """Create a company holiday. Past dates are rejected."""
    require_hr(auth)
    _reject_past_date(payload.date)

    holiday = Holiday(
        company_id=auth.company_id,
        date=payload.date,
        name=payload.name,
        type=payload.type.value,
        state=payload.state,
        active=payload.active,
    )
    session.add(holiday)
    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(holiday),
    )

    await session.commit()
    await session.refresh(holiday)
    return _build_holiday_response(holiday)


async def get_holiday(
    session: AsyncSession,
    company_id: uuid.UUID,
    holiday_id: uuid.UUID,
) -> HolidayResponse:
    holiday = await _get_holiday_or_404(session, company_id, holiday_id)
    return _build_holiday_response(holiday)


async def list_holidays(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    year: int | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    active_only: bool = False,
    deleted: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> HolidayListResponse:
    """List company holidays ordered by date, with optional year or window filters."""
    filters = [
        col(Holiday.company_id) == company_id,
        col(Holiday.deleted) == deleted,
    ]
    if year is not None:
        filters.append(extract("year", col(Holiday.date)) == year)
    if from_date is not None:
        filters.append(col(Holiday.date) >= from_date)
    if to_date is not None:
        filters.append(col(Holiday.date) <= to_date)
    if active_only:
        filters.append(col(Holiday.active).is_(True))

    count_result = await session.execute(select(func.count()).select_from(Holiday).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(Holiday).where(*filters).order_by(col(Holiday.date)).offset(offset).limit(limit)
    )
    holidays = list(result.scalars().all())

    return HolidayListResponse(
        items=[_build_holiday_response(h) for h in holidays],
        total=total,
    )


async def update_holiday(
    session: AsyncSession,
    auth: AuthContext,
    holiday_id: uuid.UUID,
    payload: HolidayPayload,
) -> HolidayResponse:
    """Replace a holiday's fields. Moving it into the past is rejected."""
    require_hr(auth)
    holiday = await _get_holiday_or_404(session, auth.company_id, holiday_id)
    if payload.date != holiday.date:
        _reject_past_date(payload.date)

    before_dict = model_to_audit_dict(holiday)
    holiday.date = payload.date
    holiday.name = payload.name
    holiday.type = payload.type.value
    holiday.state = payload.state
    holiday.active = payload.active
    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(holiday),
    )

    await session.commit()
    await session.refresh(holiday)
    return _build_holiday_response(holiday)


async def delete_holiday(
    session: AsyncSession,
    auth: AuthContext,
    holiday_id: uuid.UUID,
) -> None:
    """Soft-delete a company holiday."""
    require_hr(auth)
    holiday = await _get_holiday_or_404(session, auth.company_id, holiday_id)

    before_dict = model_to_audit_dict(holiday)
    holiday.deleted = True
    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.DELETE,
        before_json=before_dict,
        after_json=model_to_audit_dict(holiday),
    )
    await session.commit()
