# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field

from leavemarker.models.enums import Role


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee in the in-memory directory."""

    employee_code: str = Field(min_length=1, max_length=50)
    full_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=100)
    role: Role = Role.EMPLOYEE
    manager_id: uuid.UUID | None = None
    department: str | None = Field(default=None, max_length=100)
    date_of_joining: date | None = None
    active: bool = True


class EmployeeResponse(BaseModel):
    """Response schema for a directory entry."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_code: str
    full_name: str
    email: str
    role: Role
    manager_id: uuid.UUID | None
    department: str | None
    date_of_joining: date | None
    active: bool


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
