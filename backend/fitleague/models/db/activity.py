import json
from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel, field_validator

from fitleague.models.db.shared import BaseModelORM
from fitleague.utils.id_types import ActivityId, LeagueActivityId, LeagueId, UserId
from fitleague.utils.types import EnumAutoStr


class MeasurementType(EnumAutoStr):
    DURATION = auto()
    DISTANCE = auto()
    STEPS = auto()
    HOLE = auto()
    NONE = auto()


class MinimumThreshold(BaseModel):
    min_value: float
    max_value: float


class AgeGroupOverrides(BaseModel):
    below40: MinimumThreshold | None = None
    above60: MinimumThreshold | None = None


class LeagueActivity(BaseModelORM):
    id: LeagueActivityId
    league_id: LeagueId
    activity_id: ActivityId
    # Base thresholds apply to ages 40 up to 60; NULL means no enforced bound.
    min_value: float | None = None
    max_value: float | None = None
    age_group_overrides: AgeGroupOverrides = AgeGroupOverrides()
    modified_by: UserId | None = None
    created: datetime_utc
    modified: datetime_utc

    @field_validator("age_group_overrides", mode="before")
    @classmethod
    def parse_overrides(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, str):
            return json.loads(value)
        return value


class LeagueActivityWithName(LeagueActivity):
    activity_name: str
    measurement_type: MeasurementType
