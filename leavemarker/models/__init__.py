from sqlmodel import SQLModel

from leavemarker.models.accrual_run import LeaveAccrualRun
from leavemarker.models.application import LeaveApplication
from leavemarker.models.attendance import AttendanceRecord
from leavemarker.models.audit import SYSTEM_ACTOR_ID, AuditLog
from leavemarker.models.balance import LeaveBalance
from leavemarker.models.base import SoftDeleteMixin, TimestampMixin, UUIDBase
from leavemarker.models.enums import (
    AccrualRunKind,
    AttendanceStatus,
    AuditAction,
    AuditEntityType,
    HolidayType,
    LeaveStatus,
    LeaveType,
    Role,
    WorkType,
)
from leavemarker.models.holiday import Holiday
from leavemarker.models.policy import LeavePolicy

__all__ = [
    "SYSTEM_ACTOR_ID",
    "AccrualRunKind",
    "AttendanceRecord",
    "AttendanceStatus",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Holiday",
    "HolidayType",
    "LeaveAccrualRun",
    "LeaveApplication",
    "LeaveBalance",
    "LeavePolicy",
    "LeaveStatus",
    "LeaveType",
    "Role",
    "SQLModel",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDBase",
    "WorkType",
]
