# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from leavemarker.exceptions import NotFoundError
from leavemarker.models.enums import Role


class EmployeeInfo(BaseModel):
    """Employee record as exposed by the employee directory."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_code: str
    full_name: str
    email: str
    role: Role = Role.EMPLOYEE
    manager_id: uuid.UUID | None = None  # direct manager, also an employee of the company
    department: str | None = None
    date_of_joining: date | None = None
    active: bool = True


@runtime_checkable
class EmployeeDirectory(Protocol):
    """Read-only interface to the employee directory."""

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        ...

    async def list_employees(self, company_id: uuid.UUID, *, active_only: bool = True) -> list[EmployeeInfo]:
        """List employees of a company."""
        ...

    async def list_direct_reports(self, company_id: uuid.UUID, manager_id: uuid.UUID) -> list[EmployeeInfo]:
        """List active employees whose direct manager is ``manager_id``."""
        ...


class InMemoryEmployeeDirectory:
    """In-memory directory used for development and tests."""

    def __init__(self) -> None:
        self._employees: dict[tuple[uuid.UUID, uuid.UUID], EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Insert or replace an employee."""
        self._employees[(employee.company_id, employee.id)] = employee

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        return self._employees.get((company_id, employee_id))

    async def list_employees(self, company_id: uuid.UUID, *, active_only: bool = True) -> list[EmployeeInfo]:
        return [
            e
            for e in self._employees.values()
            if e.company_id == company_id and (e.active or not active_only)
        ]

    async def list_direct_reports(self, company_id: uuid.UUID, manager_id: uuid.UUID) -> list[EmployeeInfo]:
        return [e for e in await self.list_employees(company_id) if e.manager_id == manager_id]


_employee_directory: EmployeeDirectory = InMemoryEmployeeDirectory()


def get_employee_directory() -> EmployeeDirectory:
    """Return the configured employee directory."""
    return _employee_directory


def set_employee_directory(directory: EmployeeDirectory) -> None:
    """Override the directory (for testing or production wiring)."""
    global _employee_directory
    _employee_directory = directory


async def get_employee_or_404(company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo:
    """Resolve an active employee of ``company_id`` through the directory."""
    employee = await get_employee_directory().get_employee(company_id, employee_id)
    if employee is None or not employee.active:
        raise NotFoundError("Employee not found")
    return employee
