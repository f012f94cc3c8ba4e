# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from leavemarker.api.deps import AuthDep, HRDep, validate_company_scope
from leavemarker.db import SessionDep
from leavemarker.schemas.policy import LeavePolicyListResponse, LeavePolicyPayload, LeavePolicyResponse
from leavemarker.services import policy as policy_service

router = APIRouter(
    prefix="/companies/{company_id}/leave-policies",
    tags=["leave-policies"],
    dependencies=[Depends(validate_company_scope)],
)


@router.post("", response_model=LeavePolicyResponse, status_code=status.HTTP_201_CREATED)
async def create_policy(
    payload: LeavePolicyPayload,
    session: SessionDep,
    auth: HRDep,
) -> LeavePolicyResponse:
    """Create the policy for one leave type."""
    return await policy_service.create_policy(session, auth, payload)


@router.get("", response_model=LeavePolicyListResponse)
async def list_policies(
    session: SessionDep,
    auth: AuthDep,
    active_only: bool = Query(default=False),
) -> LeavePolicyListResponse:
    return await policy_service.list_policies(session, auth.company_id, active_only=active_only)


@router.get("/{policy_id}", response_model=LeavePolicyResponse)
async def get_policy(
    policy_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeavePolicyResponse:
    return await policy_service.get_policy(session, auth.company_id, policy_id)


@router.put("/{policy_id}", response_model=LeavePolicyResponse)
async def update_policy(
    policy_id: uuid.UUID,
    payload: LeavePolicyPayload,
    session: SessionDep,
    auth: HRDep,
) -> LeavePolicyResponse:
    """Replace a policy's settings."""
    return await policy_service.update_policy(session, auth, policy_id, payload)


@router.delete("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_policy(
    policy_id: uuid.UUID,
    session: SessionDep,
    auth: HRDep,
) -> None:
    """Soft-delete a policy."""
    await policy_service.delete_policy(session, auth, policy_id)
