"""Append-only audit trail shared by every mutating service.

Snapshots are plain JSON: UUIDs, dates, times and enums become strings so the
before/after pair can be compared without the models.
"""

from __future__ import annotations

import enum
import logging
import uuid
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any

from leavemarker.models.audit import AuditLog

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

    from leavemarker.models.enums import AuditAction, AuditEntityType

logger = logging.getLogger(__name__)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    return value


def model_to_audit_dict(model: SQLModel) -> dict[str, Any]:
    """Snapshot a model's columns for the audit log."""
    return {key: _to_json_value(value) for key, value in model.model_dump().items()}


def changed_fields(before: dict[str, Any] | None, after: dict[str, Any] | None) -> list[str]:
    """Names of the snapshot keys whose values differ, sorted."""
    before = before or {}
    after = after or {}
    return sorted(key for key in before.keys() | after.keys() if before.get(key) != after.get(key))


async def write_audit_log(
    session: AsyncSession,
    *,
    company_id: uuid.UUID,
    actor_id: uuid.UUID,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
    action: AuditAction,
    before_json: dict[str, Any] | None = None,
    after_json: dict[str, Any] | None = None,
) -> AuditLog:
    """Add an audit row to the caller's transaction; the caller commits."""
    entry = AuditLog(
        company_id=company_id,
        actor_id=actor_id,
        entity_type=entity_type.value,
        entity_id=entity_id,
        action=action.value,
        before_json=before_json,
        after_json=after_json,
    )
    session.add(entry)
    logger.debug(
        "audit %s %s %s by %s changed=%s",
        entity_type.value,
        entity_id,
        action.value,
        actor_id,
        changed_fields(before_json, after_json),
    )
    return entry
