"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _deleted_column() -> sa.Column:
    return sa.Column("deleted", sa.Boolean(), server_default=sa.false(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "leave_policy",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        _deleted_column(),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("leave_type", sa.String(length=30), nullable=False),
        sa.Column("annual_quota", sa.Integer(), nullable=False),
        sa.Column("monthly_accrual", sa.Float(), server_default="0", nullable=False),
        sa.Column("carry_forward", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("max_carry_forward", sa.Integer(), server_default="0", nullable=False),
        sa.Column("encashment_allowed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("half_day_allowed", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "leave_type", name="uq_leave_policy_company_type"),
    )
    op.create_index("ix_leave_policy_company_id", "leave_policy", ["company_id"])
    op.create_index("ix_leave_policy_deleted", "leave_policy", ["deleted"])

    op.create_table(
        "leave_balance",
        sa.Column("id", sa.Uuid(), nullable=False),
        _deleted_column(),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("leave_type", sa.String(length=30), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("total_quota", sa.Float(), server_default="0", nullable=False),
        sa.Column("used", sa.Float(), server_default="0", nullable=False),
        sa.Column("pending", sa.Float(), server_default="0", nullable=False),
        sa.Column("available", sa.Float(), server_default="0", nullable=False),
        sa.Column("carried_forward", sa.Float(), server_default="0", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "leave_type", "year", name="uq_leave_balance_employee_type_year"),
    )
    op.create_index("ix_leave_balance_employee_id", "leave_balance", ["employee_id"])
    op.create_index("ix_leave_balance_company_year", "leave_balance", ["company_id", "year"])
    op.create_index("ix_leave_balance_deleted", "leave_balance", ["deleted"])

    op.create_table(
        "leave_application",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        _deleted_column(),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("leave_type", sa.String(length=30), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_half_day", sa.Boolean(), nullable=False),
        sa.Column("number_of_days", sa.Float(), nullable=False),
        sa.Column("reason", sa.String(length=1000), nullable=True),
        sa.Column("attachment_url", sa.String(length=500), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="PENDING", nullable=False),
        sa.Column("requires_hr_approval", sa.Boolean(), nullable=False),
        sa.Column("manager_approved_by", sa.Uuid(), nullable=True),
        sa.Column("manager_approval_date", sa.Date(), nullable=True),
        sa.Column("hr_approved_by", sa.Uuid(), nullable=True),
        sa.Column("hr_approval_date", sa.Date(), nullable=True),
        sa.Column("rejection_reason", sa.String(length=1000), nullable=True),
        sa.Column("rejection_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leave_application_company_id", "leave_application", ["company_id"])
    op.create_index("ix_leave_application_employee_id", "leave_application", ["employee_id"])
    op.create_index("ix_leave_application_status", "leave_application", ["status"])
    op.create_index("ix_leave_application_deleted", "leave_application", ["deleted"])
    op.create_index("ix_leave_application_company_status", "leave_application", ["company_id", "status"])
    op.create_index(
        "ix_leave_application_employee_dates", "leave_application", ["employee_id", "start_date", "end_date"]
    )

    op.create_table(
        "holiday",
        sa.Column("id", sa.Uuid(), nullable=False),
        _deleted_column(),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("state", sa.String(length=60), nullable=True),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_holiday_company_id", "holiday", ["company_id"])
    op.create_index("ix_holiday_company_date", "holiday", ["company_id", "date"])
    op.create_index("ix_holiday_deleted", "holiday", ["deleted"])

    op.create_table(
        "leave_accrual_run",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(length=30), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("balances_updated", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "kind", "year", "month", name="uq_accrual_run_period"),
    )
    op.create_index("ix_leave_accrual_run_company_id", "leave_accrual_run", ["company_id"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_log_entity", "audit_log", ["entity_type", "entity_id"])
    op.create_index("ix_audit_log_company_created", "audit_log", ["company_id", "created_at"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("leave_accrual_run")
    op.drop_table("holiday")
    op.drop_table("leave_application")
    op.drop_table("leave_balance")
    op.drop_table("leave_policy")
