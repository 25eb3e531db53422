from sqlalchemy import Column, Date, ForeignKey, String, Table, UniqueConstraint, func
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import JSON, BigInteger, DateTime, Enum, Float, Text

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("email", String, nullable=False, index=True, unique=True),
    Column("name", String, nullable=False),
    Column("date_of_birth", Date, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
)

leagues = Table(
    "leagues",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True),
    Column(
        "status",
        Enum(
            "DRAFT",
            "LAUNCHED",
            "ACTIVE",
            "COMPLETED",
            name="league_status",
        ),
        nullable=False,
        server_default="DRAFT",
        index=True,
    ),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("created_by", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
)

teams = Table(
    "teams",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("league_id", BigInteger, ForeignKey("leagues.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("name", String, nullable=False),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("league_id", "name"),
)

league_members = Table(
    "league_members",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("league_id", BigInteger, ForeignKey("leagues.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("team_id", BigInteger, ForeignKey("teams.id", ondelete="SET NULL"), index=True, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("league_id", "user_id"),
)

league_role_assignments = Table(
    "league_role_assignments",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("league_id", BigInteger, ForeignKey("leagues.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column(
        "role",
        Enum(
            "HOST",
            "GOVERNOR",
            "CAPTAIN",
            "PLAYER",
            name="league_role",
        ),
        nullable=False,
    ),
    Column("created_by", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("league_id", "user_id", "role"),
)

activities = Table(
    "activities",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True),
    Column(
        "measurement_type",
        Enum(
            "DURATION",
            "DISTANCE",
            "STEPS",
            "HOLE",
            "NONE",
            name="activity_measurement_type",
        ),
        nullable=False,
        server_default="DURATION",
    ),
)

league_activities = Table(
    "league_activities",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("league_id", BigInteger, ForeignKey("leagues.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("activity_id", BigInteger, ForeignKey("activities.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("min_value", Float, nullable=True),
    Column("max_value", Float, nullable=True),
    Column("age_group_overrides", JSON, nullable=False, server_default="{}"),
    Column("modified_by", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("modified", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("league_id", "activity_id"),
)

effort_entries = Table(
    "effort_entries",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column(
        "league_member_id",
        BigInteger,
        ForeignKey("league_members.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column("date", Date, nullable=False, index=True),
    Column("type", Enum("WORKOUT", "REST", name="entry_type"), nullable=False),
    Column("activity_id", BigInteger, ForeignKey("activities.id", ondelete="SET NULL"), nullable=True),
    Column("value", Float, nullable=True),
    Column("rr_value", Float, nullable=True),
    Column(
        "status",
        Enum(
            "PENDING",
            "APPROVED",
            "REJECTED",
            name="entry_status",
        ),
        nullable=False,
        server_default="PENDING",
        index=True,
    ),
    Column("rejection_reason", Text, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now(), index=True),
    Column("modified_by", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("modified", DateTimeTZ, nullable=False, server_default=func.now()),
)
