"""Create core tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates users, clients, contacts, projects, positions, time_entries,
       client_notes and activity_logs, plus the three enum types.
How:   Mirrors app/models; see the model modules for column rationale.

Rollback: downgrade() drops every table and enum type (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("consultant", "project_manager", "administrator", name="user_role")
project_status = sa.Enum("active", "completed", "on_hold", "cancelled", name="project_status")
activity_type = sa.Enum("call", "meeting", "email", "other", name="activity_type")


def _timestamps(updated: bool = True) -> list:
    columns = [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]
    if updated:
        columns.append(
            sa.Column(
                "updated_at",
                sa.TIMESTAMP(timezone=True),
                server_default=sa.text("CURRENT_TIMESTAMP"),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False, comment="Login email, unique across users"),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column(
            "hourly_rate",
            sa.Numeric(10, 2),
            nullable=True,
            comment="Internal cost rate; not used for budget consumption",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("industry", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_contacts_client_id", "contacts", ["client_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "budget",
            sa.Numeric(15, 2),
            nullable=True,
            comment="Declared project budget; NULL when no budget was agreed",
        ),
        sa.Column("status", project_status, nullable=False, server_default="active"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_client_id", "projects", ["client_id"])

    op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("budget", sa.Numeric(15, 2), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_positions_project_id", "positions", ["project_id"])

    op.create_table(
        "time_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("position_id", sa.Integer(), sa.ForeignKey("positions.id"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("hours", sa.Numeric(8, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("billable", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    # Utilization and booking reports filter by user and date range
    op.create_index("idx_time_entries_user_date", "time_entries", ["user_id", "date"])
    # Budget consumption sums hours per position
    op.create_index("idx_time_entries_position_id", "time_entries", ["position_id"])

    op.create_table(
        "client_notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_client_notes_client_id", "client_notes", ["client_id"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("activity_type", activity_type, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("activity_date", sa.Date(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_activity_logs_client_date", "activity_logs", ["client_id", "activity_date"]
    )


def downgrade() -> None:
    """Drop every table, children first, then the enum types."""
    op.drop_index("idx_activity_logs_client_date", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("idx_client_notes_client_id", table_name="client_notes")
    op.drop_table("client_notes")
    op.drop_index("idx_time_entries_position_id", table_name="time_entries")
    op.drop_index("idx_time_entries_user_date", table_name="time_entries")
    op.drop_table("time_entries")
    op.drop_index("idx_positions_project_id", table_name="positions")
    op.drop_table("positions")
    op.drop_index("idx_projects_client_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("idx_contacts_client_id", table_name="contacts")
    op.drop_table("contacts")
    op.drop_table("clients")
    op.drop_table("users")

    bind = op.get_bind()
    activity_type.drop(bind, checkfirst=True)
    project_status.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
