# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from leavemarker.models.enums import LeaveType


class LeaveBalanceResponse(BaseModel):
    """Balance for one leave type in one year."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: LeaveType
    year: int
    total_quota: float
    used: float
    pending: float
    available: float
    carried_forward: float
    updated_at: datetime | None


class LeaveBalanceListResponse(BaseModel):
    """All balances of an employee for a year."""

    items: list[LeaveBalanceResponse]
    total: int


class LossOfPayResponse(BaseModel):
    """Loss-of-pay days consumed by an employee in a year."""

    employee_id: uuid.UUID
    year: int
    days: float
