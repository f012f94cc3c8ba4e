# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leavemarker.exceptions import ConflictError, NotFoundError
from leavemarker.models.enums import AuditAction, AuditEntityType, LeaveType
from leavemarker.models.policy import LeavePolicy
from leavemarker.schemas.policy import LeavePolicyListResponse, LeavePolicyResponse
from leavemarker.services.audit import model_to_audit_dict, write_audit_log
from leavemarker.services.authorization import require_hr
from leavemarker.services.company import get_company_directory

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavemarker.schemas.auth import AuthContext
    from leavemarker.schemas.policy import LeavePolicyPayload

# Constraint name fragments mapped to the message shown to the caller.
_CONSTRAINT_MESSAGES = {
    "uq_leave_policy_company_type": "Leave policy for this leave type already exists",
}


def _translate_integrity_error(exc: IntegrityError) -> ConflictError:
    """Map a storage-level unique violation to a friendly ConflictError."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for constraint, message in _CONSTRAINT_MESSAGES.items():
        if constraint in text:
            return ConflictError(message)
    return ConflictError("Leave policy conflicts with an existing record")


def _build_policy_response(policy: LeavePolicy) -> LeavePolicyResponse:
    return LeavePolicyResponse(
        id=policy.id,
        company_id=policy.company_id,
        leave_type=LeaveType(policy.leave_type),
        annual_quota=policy.annual_quota,
        monthly_accrual=policy.monthly_accrual,
        carry_forward=policy.carry_forward,
        max_carry_forward=policy.max_carry_forward,
        encashment_allowed=policy.encashment_allowed,
        half_day_allowed=policy.half_day_allowed,
        active=policy.active,
        created_at=policy.created_at,
    )


async def find_policy(
    session: AsyncSession,
    company_id: uuid.UUID,
    leave_type: LeaveType | str,
    *,
    deleted: bool = False,
) -> LeavePolicy | None:
    """Return the policy for (company, leave type), or None."""
    result = await session.execute(
        select(LeavePolicy).where(
            col(LeavePolicy.company_id) == company_id,
            col(LeavePolicy.leave_type) == str(leave_type),
            col(LeavePolicy.deleted) == deleted,
        )
    )
    return result.scalar_one_or_none()


async def list_active_policies(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    deleted: bool = False,
) -> list[LeavePolicy]:
    """Active policies of a company, ordered by leave type."""
    result = await session.execute(
        select(LeavePolicy)
        .where(
            col(LeavePolicy.company_id) == company_id,
            col(LeavePolicy.active).is_(True),
            col(LeavePolicy.deleted) == deleted,
        )
        .order_by(col(LeavePolicy.leave_type))
    )
    return list(result.scalars().all())


async def _get_policy_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    policy_id: uuid.UUID,
    *,
    deleted: bool = False,
) -> LeavePolicy:
    result = await session.execute(
        select(LeavePolicy).where(
            col(LeavePolicy.id) == policy_id,
            col(LeavePolicy.company_id) == company_id,
            col(LeavePolicy.deleted) == deleted,
        )
    )
    policy = result.scalar_one_or_none()
    if policy is None:
        raise NotFoundError("Leave policy not found")
    return policy


async def _flush_or_conflict(session: AsyncSession) -> None:
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise _translate_integrity_error(exc) from None


async def create_policy(
    session: AsyncSession,
    auth: AuthContext,
    payload: LeavePolicyPayload,
) -> LeavePolicyResponse:
    """Create the policy for one leave type of the caller's company."""
    require_hr(auth)

    company = await get_company_directory().get_company(auth.company_id)
    if company is None or not company.active:
        raise NotFoundError("Company not found")

    if await find_policy(session, auth.company_id, payload.leave_type) is not None:
        raise ConflictError("Leave policy for this leave type already exists")

    policy = LeavePolicy(
        company_id=auth.company_id,
        leave_type=payload.leave_type.value,
        annual_quota=payload.annual_quota,
        monthly_accrual=payload.monthly_accrual,
        carry_forward=payload.carry_forward,
        max_carry_forward=payload.max_carry_forward or 0,
        encashment_allowed=payload.encashment_allowed,
        half_day_allowed=payload.half_day_allowed,
        active=payload.active,
    )
    session.add(policy)
    await _flush_or_conflict(session)

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_POLICY,
        entity_id=policy.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(policy),
    )

    await session.commit()
    await session.refresh(policy)
    return _build_policy_response(policy)


async def get_policy(
    session: AsyncSession,
    company_id: uuid.UUID,
    policy_id: uuid.UUID,
) -> LeavePolicyResponse:
    policy = await _get_policy_or_404(session, company_id, policy_id)
    return _build_policy_response(policy)


async def list_policies(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    active_only: bool = False,
    deleted: bool = False,
) -> LeavePolicyListResponse:
    """List the company's policies, optionally only the active ones."""
    filters = [
        col(LeavePolicy.company_id) == company_id,
        col(LeavePolicy.deleted) == deleted,
    ]
    if active_only:
        filters.append(col(LeavePolicy.active).is_(True))

    count_result = await session.execute(select(func.count()).select_from(LeavePolicy).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(select(LeavePolicy).where(*filters).order_by(col(LeavePolicy.leave_type)))
    policies = list(result.scalars().all())

    return LeavePolicyListResponse(items=[_build_policy_response(p) for p in policies], total=total)


async def update_policy(
    session: AsyncSession,
    auth: AuthContext,
    policy_id: uuid.UUID,
    payload: LeavePolicyPayload,
) -> LeavePolicyResponse:
    """Replace a policy's settings. Changing the leave type must not collide."""
    require_hr(auth)
    policy = await _get_policy_or_404(session, auth.company_id, policy_id)

    if policy.leave_type != payload.leave_type.value:
        if await find_policy(session, auth.company_id, payload.leave_type) is not None:
            raise ConflictError("Leave policy for this leave type already exists")

    before_dict = model_to_audit_dict(policy)

    policy.leave_type = payload.leave_type.value
    policy.annual_quota = payload.annual_quota
    policy.monthly_accrual = payload.monthly_accrual
    policy.carry_forward = payload.carry_forward
    policy.max_carry_forward = payload.max_carry_forward or 0
    policy.encashment_allowed = payload.encashment_allowed
    policy.half_day_allowed = payload.half_day_allowed
    policy.active = payload.active
    await _flush_or_conflict(session)

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_POLICY,
        entity_id=policy.id,
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(policy),
    )

    await session.commit()
    await session.refresh(policy)
    return _build_policy_response(policy)


async def delete_policy(
    session: AsyncSession,
    auth: AuthContext,
    policy_id: uuid.UUID,
) -> None:
    """Soft-delete a policy."""
    require_hr(auth)
    policy = await _get_policy_or_404(session, auth.company_id, policy_id)

    before_dict = model_to_audit_dict(policy)
    policy.deleted = True
    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_POLICY,
        entity_id=policy.id,
        action=AuditAction.DELETE,
        before_json=before_dict,
        after_json=model_to_audit_dict(policy),
    )
    await session.commit()
