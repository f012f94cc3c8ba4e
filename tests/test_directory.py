"""Tests for the in-memory employee and company directories."""

from __future__ import annotations

import uuid

import pytest

from leavemarker.exceptions import NotFoundError
from leavemarker.services.company import CompanyDirectory, CompanyInfo, InMemoryCompanyDirectory
from leavemarker.services.employee import (
    EmployeeDirectory,
    EmployeeInfo,
    InMemoryEmployeeDirectory,
    get_employee_or_404,
    set_employee_directory,
)

COMPANY_A = uuid.uuid4()
COMPANY_B = uuid.uuid4()


def _make_employee(
    company_id: uuid.UUID,
    name: str = "Jane",
    *,
    manager_id: uuid.UUID | None = None,
    active: bool = True,
) -> EmployeeInfo:
    return EmployeeInfo(
        id=uuid.uuid4(),
        company_id=company_id,
        employee_code=name.upper(),
        full_name=f"{name} Doe",
        email=f"{name.lower()}@example.com",
        manager_id=manager_id,
        active=active,
    )


def test_in_memory_directories_satisfy_protocols() -> None:
    assert isinstance(InMemoryEmployeeDirectory(), EmployeeDirectory)
    assert isinstance(InMemoryCompanyDirectory(), CompanyDirectory)


async def test_employee_get_not_found() -> None:
    directory = InMemoryEmployeeDirectory()
    assert await directory.get_employee(COMPANY_A, uuid.uuid4()) is None


async def test_employee_seed_is_scoped_by_company() -> None:
    directory = InMemoryEmployeeDirectory()
    employee = _make_employee(COMPANY_A)
    directory.seed(employee)
    assert await directory.get_employee(COMPANY_A, employee.id) == employee
    assert await directory.get_employee(COMPANY_B, employee.id) is None


async def test_seed_replaces_existing_entry() -> None:
    directory = InMemoryEmployeeDirectory()
    employee = _make_employee(COMPANY_A)
    directory.seed(employee)
    directory.seed(employee.model_copy(update={"full_name": "Renamed"}))
    found = await directory.get_employee(COMPANY_A, employee.id)
    assert found is not None
    assert found.full_name == "Renamed"


async def test_list_employees_filters_inactive() -> None:
    directory = InMemoryEmployeeDirectory()
    directory.seed(_make_employee(COMPANY_A, "Active"))
    directory.seed(_make_employee(COMPANY_A, "Gone", active=False))
    directory.seed(_make_employee(COMPANY_B, "Other"))

    assert len(await directory.list_employees(COMPANY_A)) == 1
    assert len(await directory.list_employees(COMPANY_A, active_only=False)) == 2


async def test_list_direct_reports() -> None:
    directory = InMemoryEmployeeDirectory()
    manager = _make_employee(COMPANY_A, "Boss")
    report = _make_employee(COMPANY_A, "Report", manager_id=manager.id)
    directory.seed(manager)
    directory.seed(report)
    directory.seed(_make_employee(COMPANY_A, "Elsewhere", manager_id=uuid.uuid4()))

    reports = await directory.list_direct_reports(COMPANY_A, manager.id)
    assert [e.id for e in reports] == [report.id]


async def test_get_employee_or_404_rejects_inactive() -> None:
    directory = InMemoryEmployeeDirectory()
    inactive = _make_employee(COMPANY_A, "Left", active=False)
    directory.seed(inactive)
    set_employee_directory(directory)
    try:
        with pytest.raises(NotFoundError, match="Employee not found"):
            await get_employee_or_404(COMPANY_A, inactive.id)
        with pytest.raises(NotFoundError):
            await get_employee_or_404(COMPANY_A, uuid.uuid4())
    finally:
        set_employee_directory(InMemoryEmployeeDirectory())


async def test_company_directory_seed_and_get() -> None:
    directory = InMemoryCompanyDirectory()
    directory.seed(CompanyInfo(id=COMPANY_A, name="Alpha"))
    company = await directory.get_company(COMPANY_A)
    assert company is not None
    assert company.name == "Alpha"
    assert company.active is True
    assert await directory.get_company(COMPANY_B) is None
