import json

from heliclockter import datetime_utc

from fitleague.database import database
from fitleague.models.db.activity import AgeGroupOverrides, LeagueActivityWithName
from fitleague.utils.db import fetch_all_parsed
from fitleague.utils.id_types import ActivityId, LeagueId, UserId


async def get_league_activities(league_id: LeagueId) -> list[LeagueActivityWithName]:
    return await fetch_all_parsed(
        database,
        LeagueActivityWithName,
        """
        SELECT
            la.*,
            a.name AS activity_name,
            a.measurement_type
        FROM league_activities la
        JOIN activities a ON a.id = la.activity_id
        WHERE la.league_id = :league_id
        ORDER BY la.created ASC, la.id ASC
        """,
        values={"league_id": league_id},
    )


async def update_league_activity_minimum(
    league_id: LeagueId,
    activity_id: ActivityId,
    min_value: float | None,
    max_value: float | None,
    age_group_overrides: AgeGroupOverrides,
    modified_by: UserId | None,
) -> bool:
    updated = await database.fetch_all(
        """
        UPDATE league_activities
        SET min_value = :min_value,
            max_value = :max_value,
            age_group_overrides = CAST(:age_group_overrides AS JSON),
            modified_by = :modified_by,
            modified = :modified
        WHERE league_id = :league_id
          AND activity_id = :activity_id
        RETURNING id
        """,
        values={
            "league_id": league_id,
            "activity_id": activity_id,
            "min_value": min_value,
            "max_value": max_value,
            "age_group_overrides": json.dumps(age_group_overrides.model_dump(exclude_none=True)),
            "modified_by": modified_by,
            "modified": datetime_utc.now(),
        },
    )
    return len(updated) > 0


async def reset_league_activity_minimum(
    league_id: LeagueId, activity_id: ActivityId, modified_by: UserId | None
) -> bool:
    return await update_league_activity_minimum(
        league_id, activity_id, None, None, AgeGroupOverrides(), modified_by
    )
