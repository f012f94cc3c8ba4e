"""attendance records and reserved balance year

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 12:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column("leave_application", sa.Column("balance_year", sa.Integer(), nullable=True))

    op.create_table(
        "attendance",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("punch_in_time", sa.Time(), nullable=True),
        sa.Column("punch_out_time", sa.Time(), nullable=True),
        sa.Column("work_type", sa.String(length=20), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("remarks", sa.String(length=500), nullable=True),
        sa.Column("correction_requested", sa.Boolean(), nullable=False),
        sa.Column("correction_approved", sa.Boolean(), nullable=False),
        sa.Column("corrected_punch_in_time", sa.Time(), nullable=True),
        sa.Column("corrected_punch_out_time", sa.Time(), nullable=True),
        sa.Column("corrected_work_type", sa.String(length=20), nullable=True),
        sa.Column("correction_reason", sa.String(length=500), nullable=True),
        sa.Column("correction_reviewed_by", sa.Uuid(), nullable=True),
        sa.Column("correction_review_date", sa.Date(), nullable=True),
        sa.Column("correction_rejection_reason", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
    )
    op.create_index("ix_attendance_company_id", "attendance", ["company_id"])
    op.create_index("ix_attendance_employee_id", "attendance", ["employee_id"])
    op.create_index("ix_attendance_deleted", "attendance", ["deleted"])
    op.create_index("ix_attendance_company_date", "attendance", ["company_id", "date"])


def downgrade() -> None:
    op.drop_table("attendance")
    op.drop_column("leave_application", "balance_year")
