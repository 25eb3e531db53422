from enum import auto

from pydantic import BaseModel, Field

from fitleague.models.db.activity import AgeGroupOverrides, MeasurementType
from fitleague.utils.id_types import ActivityId
from fitleague.utils.types import EnumAutoStr


class AgeTier(EnumAutoStr):
    BELOW40 = auto()
    BASE = auto()
    ABOVE60 = auto()


class Bound(EnumAutoStr):
    UNBOUNDED = auto()


Threshold = float | Bound


class ApplicableMinimum(BaseModel):
    min: Threshold
    max: Threshold
    tier: AgeTier


class ActivityMinimumUpsertBody(BaseModel):
    min_value: float
    max_value: float
    age_group_overrides: AgeGroupOverrides = Field(default_factory=AgeGroupOverrides)


class ActivityMinimumView(BaseModel):
    activity_id: ActivityId
    activity_name: str
    measurement_type: MeasurementType
    min_value: float | None = None
    max_value: float | None = None
    age_group_overrides: AgeGroupOverrides = Field(default_factory=AgeGroupOverrides)


class ApplicableMinimumView(ApplicableMinimum):
    activity_id: ActivityId
    age: int | None = None
    min_rr: float
    max_rr: float
