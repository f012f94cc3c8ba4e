from fastapi import APIRouter

from leavemarker.api.accruals import accruals_router
from leavemarker.api.applications import applications_router
from leavemarker.api.attendance import attendance_router
from leavemarker.api.balances import employee_balance_router
from leavemarker.api.employees import employees_router
from leavemarker.api.holidays import holidays_router
from leavemarker.api.policies import router as policies_router
from leavemarker.api.reports import reports_router

api_router = APIRouter()
api_router.include_router(policies_router)
api_router.include_router(applications_router)
api_router.include_router(employee_balance_router)
api_router.include_router(holidays_router)
api_router.include_router(accruals_router)
api_router.include_router(employees_router)
api_router.include_router(reports_router)
api_router.include_router(attendance_router)
