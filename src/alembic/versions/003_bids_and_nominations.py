"""Bids and project nominations

Revision ID: 003
Revises: 002
Create Date: 2026-09-14 00:20:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "bids",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("professional_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("proposal_text", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["professional_id"], ["professional_profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        # One bid per professional per project, enforced under concurrency
        sa.UniqueConstraint(
            "project_id", "professional_id", name="uq_bids_project_professional"
        ),
    )
    op.create_index("ix_bids_project_id", "bids", ["project_id"])
    op.create_index("ix_bids_professional_id", "bids", ["professional_id"])

    op.create_table(
        "project_professionals",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("professional_id", sa.Uuid(), nullable=False),
        sa.Column("role_description", sa.String(length=200), nullable=False),
        sa.Column("appointed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["professional_id"], ["professional_profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "project_id",
            "professional_id",
            name="uq_project_professionals_project_professional",
        ),
    )
    op.create_index(
        "ix_project_professionals_project_id", "project_professionals", ["project_id"]
    )
    op.create_index(
        "ix_project_professionals_professional_id", "project_professionals", ["professional_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_project_professionals_professional_id", table_name="project_professionals")
    op.drop_index("ix_project_professionals_project_id", table_name="project_professionals")
    op.drop_table("project_professionals")
    op.drop_index("ix_bids_professional_id", table_name="bids")
    op.drop_index("ix_bids_project_id", table_name="bids")
    op.drop_table("bids")
