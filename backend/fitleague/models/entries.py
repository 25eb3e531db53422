from datetime import date

from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator

from fitleague.models.db.entry import EntryStatus, EntryType
from fitleague.utils.id_types import ActivityId, EntryId, LeagueId


class EntryReviewBody(BaseModel):
    status: EntryStatus
    rejection_reason: str | None = Field(default=None, max_length=500)
    override: bool = False

    @field_validator("status")
    @classmethod
    def review_outcome_only(cls, value: EntryStatus) -> EntryStatus:
        if value is EntryStatus.PENDING:
            raise ValueError("status must be APPROVED or REJECTED")
        return value


class RrPreviewBody(BaseModel):
    type: EntryType
    activity_id: ActivityId | None = None
    value: float | None = Field(default=None, gt=0)


class RrPreviewView(BaseModel):
    rr_value: float
    can_submit: bool
    min_rr: float
    max_rr: float


class AutoApproveResult(BaseModel):
    approved_count: int
    entry_ids: list[EntryId] = Field(default_factory=list)


class RejectedLeagueSummary(BaseModel):
    league_id: LeagueId
    league_name: str
    rejected_count: int
    latest_date: date | None = None


class RejectedSubmissionsSummary(BaseModel):
    total_rejected: int
    leagues: list[RejectedLeagueSummary] = Field(default_factory=list)
    cached: bool = False
    cache_ttl_seconds: int


class ReuploadWindowView(BaseModel):
    entry_id: EntryId
    rejected_at: datetime_utc
    cutoff: datetime_utc
    is_open: bool
