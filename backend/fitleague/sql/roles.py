from heliclockter import datetime_utc

from fitleague.database import database
from fitleague.models.db.league import LeagueRole
from fitleague.utils.id_types import LeagueId, UserId


async def get_role_candidates(league_id: LeagueId, user_id: UserId) -> list[LeagueRole]:
    """
    Collect every role record that applies to the user in this league.

    The league creator counts as host, explicit assignments count as-is,
    and plain membership counts as player.
    """
    rows = await database.fetch_all(
        """
        SELECT 'HOST' AS role
        FROM leagues
        WHERE id = :league_id
          AND created_by = :user_id
        UNION ALL
        SELECT role::TEXT AS role
        FROM league_role_assignments
        WHERE league_id = :league_id
          AND user_id = :user_id
        UNION ALL
        SELECT 'PLAYER' AS role
        FROM league_members
        WHERE league_id = :league_id
          AND user_id = :user_id
        """,
        values={"league_id": league_id, "user_id": user_id},
    )
    roles: list[LeagueRole] = []
    for row in rows:
        raw_role = str(row._mapping["role"]).strip().upper()
        if raw_role in LeagueRole.values():
            roles.append(LeagueRole(raw_role))
    return roles


async def insert_role_assignment(
    league_id: LeagueId, user_id: UserId, role: LeagueRole, assigned_by: UserId
) -> None:
    await database.execute(
        """
        INSERT INTO league_role_assignments (league_id, user_id, role, created_by, created)
        VALUES (:league_id, :user_id, :role, :created_by, :created)
        ON CONFLICT (league_id, user_id, role) DO NOTHING
        """,
        values={
            "league_id": league_id,
            "user_id": user_id,
            "role": role.value,
            "created_by": assigned_by,
            "created": datetime_utc.now(),
        },
    )


async def delete_role_assignment(league_id: LeagueId, user_id: UserId, role: LeagueRole) -> bool:
    deleted = await database.fetch_all(
        """
        DELETE FROM league_role_assignments
        WHERE league_id = :league_id
          AND user_id = :user_id
          AND role = :role
        RETURNING id
        """,
        values={"league_id": league_id, "user_id": user_id, "role": role.value},
    )
    return len(deleted) > 0
