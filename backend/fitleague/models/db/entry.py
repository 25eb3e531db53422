from datetime import date
from enum import auto

from heliclockter import datetime_utc

from fitleague.models.db.shared import BaseModelORM
from fitleague.utils.id_types import (
    ActivityId,
    EntryId,
    LeagueId,
    LeagueMemberId,
    TeamId,
    UserId,
)
from fitleague.utils.types import EnumAutoStr


class EntryStatus(EnumAutoStr):
    PENDING = auto()
    APPROVED = auto()
    REJECTED = auto()


class EntryType(EnumAutoStr):
    WORKOUT = auto()
    REST = auto()


class EffortEntry(BaseModelORM):
    id: EntryId
    league_member_id: LeagueMemberId
    date: date
    type: EntryType
    activity_id: ActivityId | None = None
    value: float | None = None
    rr_value: float | None = None
    status: EntryStatus = EntryStatus.PENDING
    rejection_reason: str | None = None
    created: datetime_utc
    modified_by: UserId | None = None
    modified: datetime_utc


class EffortEntryWithMember(EffortEntry):
    league_id: LeagueId
    team_id: TeamId | None = None
    user_id: UserId


class RejectedEntryRow(BaseModelORM):
    league_id: LeagueId
    league_name: str
    date: date
