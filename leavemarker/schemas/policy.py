# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from leavemarker.models.enums import LeaveType


class LeavePolicyPayload(BaseModel):
    """Request body for creating or replacing a leave policy."""

    leave_type: LeaveType
    annual_quota: int = Field(ge=0, le=366)
    monthly_accrual: float = Field(default=0.0, ge=0)
    carry_forward: bool = False
    max_carry_forward: int | None = Field(default=None, ge=0)
    encashment_allowed: bool = False
    half_day_allowed: bool = True
    active: bool = True

    @model_validator(mode="after")
    def _validate_carry_forward(self) -> Self:
        if self.carry_forward and self.max_carry_forward is None:
            msg = "max_carry_forward must be specified when carry_forward is enabled"
            raise ValueError(msg)
        return self


class LeavePolicyResponse(BaseModel):
    """Response schema for a leave policy."""

    id: uuid.UUID
    company_id: uuid.UUID
    leave_type: LeaveType
    annual_quota: int
    monthly_accrual: float
    carry_forward: bool
    max_carry_forward: int
    encashment_allowed: bool
    half_day_allowed: bool
    active: bool
    created_at: datetime


class LeavePolicyListResponse(BaseModel):
    """All leave policies of a company."""

    items: list[LeavePolicyResponse]
    total: int
