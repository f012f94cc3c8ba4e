# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from leavemarker.models.enums import Role


class AuthContext(BaseModel):
    """Resolved caller identity, extracted from request headers in development."""

    company_id: uuid.UUID
    user_id: uuid.UUID
    role: Role = Role.EMPLOYEE
