# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from leavemarker.api.deps import AuthDep, HRDep, validate_company_scope
from leavemarker.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from leavemarker.services.employee import EmployeeInfo, get_employee_directory, get_employee_or_404

employees_router = APIRouter(
    prefix="/companies/{company_id}/employees",
    tags=["employees"],
    dependencies=[Depends(validate_company_scope)],
)


def _to_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse.model_validate(employee.model_dump())


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def upsert_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: HRDep,
) -> EmployeeResponse:
    """Create or update an entry in the in-memory directory (HR only)."""
    employee = EmployeeInfo(id=employee_id, company_id=company_id, **payload.model_dump())
    get_employee_directory().seed(employee)  # ty: ignore[unresolved-attribute]
    return _to_response(employee)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeResponse:
    employee = await get_employee_or_404(company_id, employee_id)
    return _to_response(employee)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    company_id: uuid.UUID,
    auth: AuthDep,
    active_only: bool = Query(default=True),
) -> EmployeeListResponse:
    employees = await get_employee_directory().list_employees(company_id, active_only=active_only)
    items = [_to_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))
