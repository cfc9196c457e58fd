"""create report_snapshots table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "report_snapshots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("report_id", sa.String(length=64), nullable=False,
                  comment="Identifier of the source report in the external report API"),
        sa.Column("report_format", sa.String(length=32), nullable=False,
                  comment="TABULAR, SUMMARY, MATRIX or the unrecognized raw tag"),
        sa.Column(
            "data",
            sa.JSON(),
            nullable=False,
            comment="Ordered normalized records",
        ),
        sa.Column("row_count", sa.Integer(), nullable=False),
        sa.Column("captured_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("report_id", name="uq_report_snapshots_report_id"),
    )
    op.create_index(
        "ix_report_snapshots_captured_at",
        "report_snapshots",
        ["captured_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_report_snapshots_captured_at", table_name="report_snapshots")
    op.drop_table("report_snapshots")
