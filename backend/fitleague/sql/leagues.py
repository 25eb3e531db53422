from fitleague.database import database
from fitleague.models.db.league import League, LeagueMember
from fitleague.utils.db import fetch_one_parsed
from fitleague.utils.id_types import LeagueId, UserId


async def get_league_by_id(league_id: LeagueId) -> League | None:
    return await fetch_one_parsed(
        database,
        League,
        """
        SELECT *
        FROM leagues
        WHERE id = :league_id
        """,
        values={"league_id": league_id},
    )


async def get_league_member(league_id: LeagueId, user_id: UserId) -> LeagueMember | None:
    return await fetch_one_parsed(
        database,
        LeagueMember,
        """
        SELECT *
        FROM league_members
        WHERE league_id = :league_id
          AND user_id = :user_id
        """,
        values={"league_id": league_id, "user_id": user_id},
    )
