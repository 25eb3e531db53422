#!/usr/bin/env python3
import argparse
import asyncio
from datetime import date

from heliclockter import datetime_utc, timedelta

from fitleague.database import database
from fitleague.logic.activity_minimums import DEFAULT_MINIMUMS
from fitleague.models.db.activity import MeasurementType
from fitleague.models.db.entry import EntryStatus, EntryType
from fitleague.models.db.league import LeagueRole, LeagueStatus
from fitleague.schema import (
    activities,
    effort_entries,
    league_activities,
    league_members,
    league_role_assignments,
    leagues,
    teams,
    users,
)
from fitleague.utils.id_types import LeagueId, TeamId, UserId

SAMPLE_ACTIVITIES = {
    "Running": MeasurementType.DISTANCE,
    "Cycling": MeasurementType.DISTANCE,
    "Gym": MeasurementType.DURATION,
    "Walking": MeasurementType.STEPS,
    "Golf": MeasurementType.HOLE,
    "Stretching": MeasurementType.NONE,
}

# Cover every age tier.
SAMPLE_BIRTH_YEARS = [1998, 1990, 1980, 1975, 1962, 1955]


async def ensure_user(email: str, name: str, date_of_birth: date | None) -> UserId:
    row = await database.fetch_one(
        "SELECT id FROM users WHERE lower(email) = lower(:email)", values={"email": email}
    )
    if row is not None:
        return UserId(int(row._mapping["id"]))

    user_id = await database.execute(
        query=users.insert(),
        values={
            "email": email,
            "name": name,
            "date_of_birth": date_of_birth,
            "created": datetime_utc.now(),
        },
    )
    return UserId(int(user_id))


async def ensure_activity(name: str, measurement_type: MeasurementType) -> int:
    row = await database.fetch_one(
        "SELECT id FROM activities WHERE name = :name", values={"name": name}
    )
    if row is not None:
        return int(row._mapping["id"])

    return int(
        await database.execute(
            query=activities.insert(),
            values={"name": name, "measurement_type": measurement_type.value},
        )
    )


async def create_league(name: str, host_id: UserId) -> LeagueId:
    today = datetime_utc.now().date()
    league_id = await database.execute(
        query=leagues.insert(),
        values={
            "name": name,
            "status": LeagueStatus.ACTIVE.value,
            "start_date": today - timedelta(days=7),
            "end_date": today + timedelta(days=56),
            "created_by": host_id,
            "created": datetime_utc.now(),
        },
    )
    return LeagueId(int(league_id))


async def configure_activities(league_id: LeagueId) -> dict[str, int]:
    activity_ids: dict[str, int] = {}
    for name, measurement_type in SAMPLE_ACTIVITIES.items():
        activity_id = await ensure_activity(name, measurement_type)
        activity_ids[name] = activity_id

        threshold = DEFAULT_MINIMUMS.get(measurement_type)
        overrides: dict[str, dict[str, float]] = {}
        if threshold is not None:
            overrides = {
                "below40": {
                    "min_value": threshold.min_value * 1.2,
                    "max_value": threshold.max_value * 1.2,
                },
                "above60": {
                    "min_value": threshold.min_value * 0.75,
                    "max_value": threshold.max_value * 0.75,
                },
            }

        await database.execute(
            query=league_activities.insert(),
            values={
                "league_id": league_id,
                "activity_id": activity_id,
                "min_value": threshold.min_value if threshold else None,
                "max_value": threshold.max_value if threshold else None,
                "age_group_overrides": overrides,
                "created": datetime_utc.now(),
                "modified": datetime_utc.now(),
            },
        )
    return activity_ids


async def seed_league(league_name: str, team_count: int, players_per_team: int) -> None:
    host_id = await ensure_user("host@fitleague.local", "Sample Host", date(1985, 5, 1))
    governor_id = await ensure_user("governor@fitleague.local", "Sample Governor", date(1970, 2, 3))

    league_id = await create_league(league_name, host_id)
    activity_ids = await configure_activities(league_id)
    await database.execute(
        query=league_role_assignments.insert(),
        values={
            "league_id": league_id,
            "user_id": governor_id,
            "role": LeagueRole.GOVERNOR.value,
            "created_by": host_id,
            "created": datetime_utc.now(),
        },
    )

    now = datetime_utc.now()
    player_index = 0
    for team_index in range(1, team_count + 1):
        team_id = TeamId(
            int(
                await database.execute(
                    query=teams.insert(),
                    values={"league_id": league_id, "name": f"Team {team_index}", "created": now},
                )
            )
        )

        for seat in range(players_per_team):
            player_index += 1
            birth_year = SAMPLE_BIRTH_YEARS[player_index % len(SAMPLE_BIRTH_YEARS)]
            user_id = await ensure_user(
                f"player.{player_index:02d}@fitleague.local",
                f"Sample Player {player_index:02d}",
                date(birth_year, 6, 15),
            )
            member_id = await database.execute(
                query=league_members.insert(),
                values={
                    "league_id": league_id,
                    "user_id": user_id,
                    "team_id": team_id,
                    "created": now,
                },
            )
            if seat == 0:
                await database.execute(
                    query=league_role_assignments.insert(),
                    values={
                        "league_id": league_id,
                        "user_id": user_id,
                        "role": LeagueRole.CAPTAIN.value,
                        "created_by": host_id,
                        "created": now,
                    },
                )

            # One fresh entry and one that is already due for auto-approval.
            for hours_ago in (2, 60):
                created = now - timedelta(hours=hours_ago)
                await database.execute(
                    query=effort_entries.insert(),
                    values={
                        "league_member_id": int(member_id),
                        "date": created.date(),
                        "type": EntryType.WORKOUT.value,
                        "activity_id": activity_ids["Running"],
                        "value": 5.0,
                        "rr_value": 1.0,
                        "status": EntryStatus.PENDING.value,
                        "created": created,
                        "modified": created,
                    },
                )

    print(f"Seeded league {league_id} with {player_index} players in {team_count} teams")


async def async_main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed a sample league: host, governor, captains, players and pending entries."
    )
    parser.add_argument("--league-name", type=str, default="Sample Fitness League")
    parser.add_argument("--teams", type=int, default=3)
    parser.add_argument("--players-per-team", type=int, default=4)
    args = parser.parse_args()

    if args.teams < 1 or args.players_per_team < 1:
        raise ValueError("--teams and --players-per-team must be at least 1")

    await database.connect()
    try:
        await seed_league(args.league_name, args.teams, args.players_per_team)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(async_main())
