# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import TimestampMixin, UUIDBase


class LeaveAccrualRun(UUIDBase, TimestampMixin, table=True):
    """Marks a periodic balance sweep as done for one company and period.

    ``month`` is 0 for yearly sweeps (carry-forward).
    """

    __tablename__ = "leave_accrual_run"
    __table_args__ = (
        sa.UniqueConstraint("company_id", "kind", "year", "month", name="uq_accrual_run_period"),
    )

    company_id: uuid.UUID = Field(index=True)
    kind: str = Field(max_length=30)
    year: int
    month: int = 0
    balances_updated: int = 0
