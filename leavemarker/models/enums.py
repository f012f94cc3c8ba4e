from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Category of leave an employee can apply for."""

    CASUAL_LEAVE = "CASUAL_LEAVE"
    SICK_LEAVE = "SICK_LEAVE"
    EARNED_LEAVE = "EARNED_LEAVE"
    LOSS_OF_PAY = "LOSS_OF_PAY"
    COMP_OFF = "COMP_OFF"
    OPTIONAL_HOLIDAY = "OPTIONAL_HOLIDAY"


class LeaveStatus(enum.StrEnum):
    """State machine for leave applications."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class Role(enum.StrEnum):
    """Role carried by the caller's auth context."""

    SUPER_ADMIN = "SUPER_ADMIN"
    HR_ADMIN = "HR_ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class HolidayType(enum.StrEnum):
    """Scope of a company holiday."""

    NATIONAL = "NATIONAL"
    STATE = "STATE"
    COMPANY = "COMPANY"


class AttendanceStatus(enum.StrEnum):
    """Outcome recorded for an employee's working day."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"
    ON_LEAVE = "ON_LEAVE"
    WEEKLY_OFF = "WEEKLY_OFF"
    HOLIDAY = "HOLIDAY"
    WORK_FROM_HOME = "WORK_FROM_HOME"


class WorkType(enum.StrEnum):
    OFFICE = "OFFICE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    FIELD_WORK = "FIELD_WORK"
    CLIENT_SITE = "CLIENT_SITE"


class AccrualRunKind(enum.StrEnum):
    """Periodic balance sweeps that must run at most once per period."""

    MONTHLY_ACCRUAL = "MONTHLY_ACCRUAL"
    CARRY_FORWARD = "CARRY_FORWARD"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    LEAVE_POLICY = "LEAVE_POLICY"
    LEAVE_BALANCE = "LEAVE_BALANCE"
    LEAVE_APPLICATION = "LEAVE_APPLICATION"
    HOLIDAY = "HOLIDAY"
    ATTENDANCE = "ATTENDANCE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPLY = "APPLY"
    MANAGER_APPROVE = "MANAGER_APPROVE"
    HR_APPROVE = "HR_APPROVE"
    REJECT = "REJECT"
    CANCEL = "CANCEL"
    ACCRUE = "ACCRUE"
    CARRY_FORWARD = "CARRY_FORWARD"
    PUNCH_IN = "PUNCH_IN"
    PUNCH_OUT = "PUNCH_OUT"
    MARK_ATTENDANCE = "MARK_ATTENDANCE"
    REQUEST_CORRECTION = "REQUEST_CORRECTION"
    APPROVE_CORRECTION = "APPROVE_CORRECTION"
    REJECT_CORRECTION = "REJECT_CORRECTION"
