# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, Path

from leavemarker.exceptions import AuthorizationError
from leavemarker.models.enums import Role
from leavemarker.schemas.auth import AuthContext
from leavemarker.services.authorization import APPROVER_ROLES, HR_ROLES, require_role


async def get_auth_context(
    x_company_id: uuid.UUID = Header(),
    x_user_id: uuid.UUID = Header(),
    x_role: Role = Header(default=Role.EMPLOYEE),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(company_id=x_company_id, user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_hr_context(auth: AuthDep) -> AuthContext:
    """Require HR_ADMIN or SUPER_ADMIN for the request."""
    require_role(auth, HR_ROLES)
    return auth


HRDep = Annotated[AuthContext, Depends(require_hr_context)]


async def require_approver_context(auth: AuthDep) -> AuthContext:
    """Require a manager or HR role for the request."""
    require_role(auth, APPROVER_ROLES)
    return auth


ApproverDep = Annotated[AuthContext, Depends(require_approver_context)]


async def validate_company_scope(
    company_id: uuid.UUID = Path(),
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Ensure the path company_id matches the auth header company_id."""
    if company_id != auth.company_id:
        raise AuthorizationError("Company ID mismatch")
    return auth
