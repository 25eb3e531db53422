from fastapi import APIRouter, Depends, Query
from heliclockter import datetime_utc

from fitleague.config import config
from fitleague.logic.activity_minimums import (
    MAX_RR,
    MIN_RR,
    can_submit_with_rr,
    get_league_minimum_for_activity,
    preview_rr,
    resolve_for_date_of_birth,
)
from fitleague.logic.entries import get_rejected_submissions_summary, review_entry
from fitleague.logic.permissions import Permission
from fitleague.logic.reupload import get_reupload_cutoff, is_reupload_window_open
from fitleague.logic.roles import require_league_permission
from fitleague.models.activity_minimums import ApplicableMinimum
from fitleague.models.db.activity import MeasurementType
from fitleague.models.db.entry import EntryStatus, EntryType
from fitleague.models.db.user import UserPublic
from fitleague.models.entries import (
    EntryReviewBody,
    ReuploadWindowView,
    RrPreviewBody,
    RrPreviewView,
)
from fitleague.routes.auth import user_authenticated
from fitleague.routes.models import (
    EffortEntryResponse,
    RejectedSubmissionsResponse,
    ReuploadWindowResponse,
    RrPreviewResponse,
)
from fitleague.routes.util import get_cache
from fitleague.sql.entries import get_entry_with_member
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import ForbiddenError, NotFoundError, ValidationError
from fitleague.utils.id_types import EntryId, LeagueId

router = APIRouter(prefix=config.api_prefix)


@router.post("/leagues/{league_id}/entries/preview_rr", response_model=RrPreviewResponse)
async def preview_entry_rr(
    league_id: LeagueId,
    body: RrPreviewBody,
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> RrPreviewResponse:
    await require_league_permission(user_public.id, league_id, Permission.SUBMIT_WORKOUTS)

    measurement_type: MeasurementType | None = None
    applicable: ApplicableMinimum | None = None
    if body.type is EntryType.WORKOUT:
        if body.activity_id is None:
            raise ValidationError.for_field("activity_id", "A workout needs an activity")

        minimum = await get_league_minimum_for_activity(league_id, body.activity_id, cache)
        measurement_type = minimum.measurement_type
        applicable = resolve_for_date_of_birth(
            minimum, user_public.date_of_birth, datetime_utc.now().date()
        )

    rr_value = preview_rr(body.type, measurement_type, body.value, applicable)
    return RrPreviewResponse(
        data=RrPreviewView(
            rr_value=rr_value,
            can_submit=can_submit_with_rr(rr_value),
            min_rr=MIN_RR,
            max_rr=MAX_RR,
        )
    )


@router.post("/entries/{entry_id}/validate", response_model=EffortEntryResponse)
async def validate_entry(
    entry_id: EntryId,
    body: EntryReviewBody,
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> EffortEntryResponse:
    return EffortEntryResponse(data=await review_entry(entry_id, user_public.id, body, cache))


@router.get("/entries/{entry_id}/reupload_window", response_model=ReuploadWindowResponse)
async def get_entry_reupload_window(
    entry_id: EntryId,
    tz_offset_minutes: int = Query(default=0, ge=-14 * 60, le=14 * 60),
    user_public: UserPublic = Depends(user_authenticated),
) -> ReuploadWindowResponse:
    entry = await get_entry_with_member(entry_id)
    if entry is None:
        raise NotFoundError("Submission not found")
    if entry.user_id != user_public.id:
        raise ForbiddenError("You can only reupload your own submissions")
    if entry.status is not EntryStatus.REJECTED:
        raise ValidationError.for_field("status", "Only rejected submissions can be reuploaded")

    cutoff = get_reupload_cutoff(entry.modified, tz_offset_minutes)
    return ReuploadWindowResponse(
        data=ReuploadWindowView(
            entry_id=entry_id,
            rejected_at=entry.modified,
            cutoff=cutoff,
            is_open=is_reupload_window_open(entry.modified, tz_offset_minutes),
        )
    )


@router.get("/users/me/rejected_submissions", response_model=RejectedSubmissionsResponse)
async def get_my_rejected_submissions(
    force: bool = Query(default=False),
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> RejectedSubmissionsResponse:
    return RejectedSubmissionsResponse(
        data=await get_rejected_submissions_summary(user_public.id, cache, force=force)
    )
