"""create league, role, activity and effort entry tables

Revision ID: a3f1c7e2b9d4
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "a3f1c7e2b9d4"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

league_status_enum = ENUM(
    "DRAFT", "LAUNCHED", "ACTIVE", "COMPLETED", name="league_status", create_type=False
)
league_role_enum = ENUM("HOST", "GOVERNOR", "CAPTAIN", "PLAYER", name="league_role", create_type=False)
measurement_type_enum = ENUM(
    "DURATION", "DISTANCE", "STEPS", "HOLE", "NONE", name="activity_measurement_type", create_type=False
)
entry_type_enum = ENUM("WORKOUT", "REST", name="entry_type", create_type=False)
entry_status_enum = ENUM("PENDING", "APPROVED", "REJECTED", name="entry_status", create_type=False)

ALL_ENUMS = (
    league_status_enum,
    league_role_enum,
    measurement_type_enum,
    entry_type_enum,
    entry_status_enum,
)


def upgrade() -> None:
    for enum in ALL_ENUMS:
        enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "leagues",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("status", league_status_enum, server_default="DRAFT", nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("created_by", sa.BigInteger(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_leagues_id"), "leagues", ["id"], unique=False)
    op.create_index(op.f("ix_leagues_status"), "leagues", ["status"], unique=False)

    op.create_table(
        "teams",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("league_id", "name"),
    )
    op.create_index(op.f("ix_teams_id"), "teams", ["id"], unique=False)
    op.create_index(op.f("ix_teams_league_id"), "teams", ["league_id"], unique=False)

    op.create_table(
        "league_members",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("team_id", sa.BigInteger(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("league_id", "user_id"),
    )
    op.create_index(op.f("ix_league_members_id"), "league_members", ["id"], unique=False)
    op.create_index(op.f("ix_league_members_league_id"), "league_members", ["league_id"], unique=False)
    op.create_index(op.f("ix_league_members_user_id"), "league_members", ["user_id"], unique=False)
    op.create_index(op.f("ix_league_members_team_id"), "league_members", ["team_id"], unique=False)

    op.create_table(
        "league_role_assignments",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("role", league_role_enum, nullable=False),
        sa.Column("created_by", sa.BigInteger(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("league_id", "user_id", "role"),
    )
    op.create_index(
        op.f("ix_league_role_assignments_id"), "league_role_assignments", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_league_role_assignments_league_id"),
        "league_role_assignments",
        ["league_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_league_role_assignments_user_id"), "league_role_assignments", ["user_id"], unique=False
    )

    op.create_table(
        "activities",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("measurement_type", measurement_type_enum, server_default="DURATION", nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_activities_id"), "activities", ["id"], unique=False)

    op.create_table(
        "league_activities",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.BigInteger(), nullable=False),
        sa.Column("activity_id", sa.BigInteger(), nullable=False),
        sa.Column("min_value", sa.Float(), nullable=True),
        sa.Column("max_value", sa.Float(), nullable=True),
        sa.Column("age_group_overrides", sa.JSON(), server_default="{}", nullable=False),
        sa.Column("modified_by", sa.BigInteger(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("modified", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["modified_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("league_id", "activity_id"),
    )
    op.create_index(op.f("ix_league_activities_id"), "league_activities", ["id"], unique=False)
    op.create_index(
        op.f("ix_league_activities_league_id"), "league_activities", ["league_id"], unique=False
    )
    op.create_index(
        op.f("ix_league_activities_activity_id"), "league_activities", ["activity_id"], unique=False
    )

    op.create_table(
        "effort_entries",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("league_member_id", sa.BigInteger(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", entry_type_enum, nullable=False),
        sa.Column("activity_id", sa.BigInteger(), nullable=True),
        sa.Column("value", sa.Float(), nullable=True),
        sa.Column("rr_value", sa.Float(), nullable=True),
        sa.Column("status", entry_status_enum, server_default="PENDING", nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("modified_by", sa.BigInteger(), nullable=True),
        sa.Column("modified", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["league_member_id"], ["league_members.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["modified_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_effort_entries_id"), "effort_entries", ["id"], unique=False)
    op.create_index(
        op.f("ix_effort_entries_league_member_id"), "effort_entries", ["league_member_id"], unique=False
    )
    op.create_index(op.f("ix_effort_entries_date"), "effort_entries", ["date"], unique=False)
    op.create_index(op.f("ix_effort_entries_status"), "effort_entries", ["status"], unique=False)
    op.create_index(op.f("ix_effort_entries_created"), "effort_entries", ["created"], unique=False)


def downgrade() -> None:
    op.drop_table("effort_entries")
    op.drop_table("league_activities")
    op.drop_table("activities")
    op.drop_table("league_role_assignments")
    op.drop_table("league_members")
    op.drop_table("teams")
    op.drop_table("leagues")
    op.drop_table("users")

    for enum in reversed(ALL_ENUMS):
        enum.drop(op.get_bind(), checkfirst=True)
