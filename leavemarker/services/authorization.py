"""Explicit authorization checks.

Each service operation calls the relevant check first; routers only add the
coarse role gate. The checks raise AuthorizationError and never touch the
transport layer, so they can be exercised directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from leavemarker.exceptions import AuthorizationError
from leavemarker.models.enums import Role

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable

    from leavemarker.schemas.auth import AuthContext
    from leavemarker.services.employee import EmployeeInfo

HR_ROLES = frozenset({Role.SUPER_ADMIN, Role.HR_ADMIN})
APPROVER_ROLES = HR_ROLES | {Role.MANAGER}


def require_role(auth: AuthContext, roles: Iterable[Role]) -> None:
    """Raise unless the caller holds one of ``roles``."""
    allowed = frozenset(roles)
    if auth.role not in allowed:
        names = ", ".join(sorted(r.value for r in allowed))
        raise AuthorizationError(f"One of the following roles is required: {names}")


def require_hr(auth: AuthContext) -> None:
    require_role(auth, HR_ROLES)


def require_company(auth: AuthContext, company_id: uuid.UUID) -> None:
    """Raise when a resource belongs to another tenant."""
    if auth.company_id != company_id:
        raise AuthorizationError("Access denied for this company")


def require_direct_manager(
    auth: AuthContext,
    employee: EmployeeInfo,
    message: str = "You are not authorized to approve this leave",
) -> None:
    """Raise unless the caller is ``employee``'s direct manager."""
    require_company(auth, employee.company_id)
    if employee.manager_id is None or employee.manager_id != auth.user_id:
        raise AuthorizationError(message)


def require_owner(auth: AuthContext, owner_id: uuid.UUID, message: str) -> None:
    if auth.user_id != owner_id:
        raise AuthorizationError(message)
