# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import SoftDeleteMixin, UUIDBase
from leavemarker.models.enums import HolidayType


class Holiday(UUIDBase, SoftDeleteMixin, table=True):
    """A company holiday, optionally scoped to one state/region."""

    __tablename__ = "holiday"
    __table_args__ = (sa.Index("ix_holiday_company_date", "company_id", "date"),)

    company_id: uuid.UUID = Field(index=True)
    date: datetime.date
    name: str = Field(max_length=255)
    type: str = Field(default=HolidayType.COMPANY, max_length=20)
    state: str | None = Field(default=None, max_length=60)
    active: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
