from datetime import date
from enum import auto

from heliclockter import datetime_utc

from fitleague.models.db.shared import BaseModelORM
from fitleague.utils.id_types import (
    LeagueId,
    LeagueMemberId,
    TeamId,
    UserId,
)
from fitleague.utils.types import EnumAutoStr


class LeagueStatus(EnumAutoStr):
    DRAFT = auto()
    LAUNCHED = auto()
    ACTIVE = auto()
    COMPLETED = auto()


class LeagueRole(EnumAutoStr):
    HOST = auto()
    GOVERNOR = auto()
    CAPTAIN = auto()
    PLAYER = auto()


class LeagueInsertable(BaseModelORM):
    name: str
    status: LeagueStatus = LeagueStatus.DRAFT
    start_date: date
    end_date: date
    created_by: UserId | None = None
    created: datetime_utc


class League(LeagueInsertable):
    id: LeagueId


class LeagueMemberInsertable(BaseModelORM):
    league_id: LeagueId
    user_id: UserId
    team_id: TeamId | None = None
    created: datetime_utc


class LeagueMember(LeagueMemberInsertable):
    id: LeagueMemberId
