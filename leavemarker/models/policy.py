# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import SoftDeleteMixin, TimestampMixin, UUIDBase


class LeavePolicy(UUIDBase, TimestampMixin, SoftDeleteMixin, table=True):
    """Per-company configuration for one leave type."""

    __tablename__ = "leave_policy"
    __table_args__ = (sa.UniqueConstraint("company_id", "leave_type", name="uq_leave_policy_company_type"),)

    company_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(max_length=30)
    annual_quota: int
    monthly_accrual: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    carry_forward: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
    max_carry_forward: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    encashment_allowed: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
    half_day_allowed: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
    active: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
