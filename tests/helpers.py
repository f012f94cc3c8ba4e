"""Shared test data: a seeded organisation and date helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, timedelta

from leavemarker.models.enums import Role
from leavemarker.schemas.auth import AuthContext


@dataclass(frozen=True)
class Org:
    """One seeded company: an HR admin, a manager and two of the manager's reports."""

    company_id: uuid.UUID
    hr_id: uuid.UUID
    manager_id: uuid.UUID
    employee_id: uuid.UUID
    colleague_id: uuid.UUID

    def headers(self, user_id: uuid.UUID, role: Role) -> dict[str, str]:
        return {"X-Company-Id": str(self.company_id), "X-User-Id": str(user_id), "X-Role": role.value}

    @property
    def hr_headers(self) -> dict[str, str]:
        return self.headers(self.hr_id, Role.HR_ADMIN)

    @property
    def manager_headers(self) -> dict[str, str]:
        return self.headers(self.manager_id, Role.MANAGER)

    @property
    def employee_headers(self) -> dict[str, str]:
        return self.headers(self.employee_id, Role.EMPLOYEE)

    @property
    def colleague_headers(self) -> dict[str, str]:
        return self.headers(self.colleague_id, Role.EMPLOYEE)

    def auth(self, user_id: uuid.UUID, role: Role) -> AuthContext:
        return AuthContext(company_id=self.company_id, user_id=user_id, role=role)

    def url(self, path: str) -> str:
        return f"/companies/{self.company_id}{path}"


def next_weekday(weekday: int, *, weeks_ahead: int = 1) -> date:
    """The given weekday (0 = Monday) at least ``weeks_ahead`` weeks from today."""
    today = date.today()
    days = (weekday - today.weekday()) % 7 + 7 * weeks_ahead
    return today + timedelta(days=days)


CURRENT_YEAR = date.today().year
