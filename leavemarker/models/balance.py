# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field

from leavemarker.models.base import SoftDeleteMixin, UUIDBase


def _now_utc() -> datetime:
    return datetime.now(UTC)


class LeaveBalance(UUIDBase, SoftDeleteMixin, table=True):
    """Per-year leave bookkeeping for one employee and leave type.

    ``available`` is always ``total_quota - used - pending``; every writer
    recomputes it through :meth:`recompute_available`.
    """

    __tablename__ = "leave_balance"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "leave_type", "year", name="uq_leave_balance_employee_type_year"),
        sa.Index("ix_leave_balance_company_year", "company_id", "year"),
    )

    company_id: uuid.UUID
    employee_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(max_length=30)
    year: int
    total_quota: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    used: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    pending: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    available: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    carried_forward: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=_now_utc,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )

    def recompute_available(self) -> None:
        self.available = self.total_quota - self.used - self.pending
        self.updated_at = _now_utc()
