"""Initial schema: technicians, work orders, users.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Technicians
    op.create_table(
        "technicians",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(200), nullable=False, server_default=""),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("specialty", sa.String(100), nullable=False),
        sa.Column("zone", sa.String(100), nullable=False),
        sa.Column(
            "availability", sa.String(20), nullable=False, server_default="available"
        ),
        sa.Column("current_load", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "certifications", ARRAY(sa.String(100)), nullable=False, server_default="{}"
        ),
        sa.CheckConstraint("current_load >= 0", name="ck_technicians_load_non_negative"),
    )
    op.create_index(
        "idx_technicians_specialty_availability",
        "technicians",
        ["specialty", "availability"],
    )
    op.create_index("idx_technicians_zone", "technicians", ["zone"])

    # Work orders
    op.create_table(
        "work_orders",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("zone", sa.String(100), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("specialty", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column(
            "assigned_technician_id",
            sa.String(50),
            sa.ForeignKey("technicians.id"),
            nullable=True,
        ),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("assigned_by", sa.String(100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "(status = 'pending') = (assigned_technician_id IS NULL)",
            name="ck_work_orders_assigned_iff_not_pending",
        ),
    )
    op.create_index("idx_work_orders_status", "work_orders", ["status"])
    op.create_index("idx_work_orders_zone", "work_orders", ["zone"])
    op.create_index(
        "idx_work_orders_technician", "work_orders", ["assigned_technician_id"]
    )

    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_table("work_orders")
    op.drop_table("technicians")
