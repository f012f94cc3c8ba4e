# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel, Field

from leavemarker.models.enums import HolidayType


class HolidayPayload(BaseModel):
    """Request body for creating or replacing a company holiday."""

    date: datetime.date
    name: str = Field(min_length=1, max_length=255)
    type: HolidayType = HolidayType.COMPANY
    state: str | None = Field(default=None, max_length=60)
    active: bool = True


class HolidayResponse(BaseModel):
    """Response schema for a company holiday."""

    id: uuid.UUID
    company_id: uuid.UUID
    date: datetime.date
    name: str
    type: HolidayType
    state: str | None
    active: bool


class HolidayListResponse(BaseModel):
    """Paginated list of company holidays."""

    items: list[HolidayResponse]
    total: int
