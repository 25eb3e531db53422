from fastapi import APIRouter, Depends, Query
from heliclockter import datetime_utc

from fitleague.config import config
from fitleague.logic.activity_minimums import (
    MAX_RR,
    MIN_RR,
    age_on,
    get_league_minimum_for_activity,
    get_league_minimums,
    reset_activity_minimum,
    resolve_activity_minimum,
    resolve_for_date_of_birth,
    save_activity_minimum,
)
from fitleague.logic.permissions import Permission
from fitleague.logic.roles import require_league_permission
from fitleague.models.activity_minimums import (
    ActivityMinimumUpsertBody,
    ActivityMinimumView,
    ApplicableMinimumView,
)
from fitleague.models.db.user import UserPublic
from fitleague.routes.auth import user_authenticated
from fitleague.routes.models import (
    ActivityMinimumsResponse,
    ApplicableMinimumResponse,
    SuccessResponse,
)
from fitleague.routes.util import get_cache
from fitleague.utils.cache import TTLCache
from fitleague.utils.id_types import ActivityId, LeagueId
from fitleague.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


@router.get("/leagues/{league_id}/activity_minimums", response_model=ActivityMinimumsResponse)
async def list_activity_minimums(
    league_id: LeagueId,
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> ActivityMinimumsResponse:
    await require_league_permission(user_public.id, league_id, Permission.VIEW_LEADERBOARDS)
    minimums = await get_league_minimums(league_id, cache)
    return ActivityMinimumsResponse(
        data=[ActivityMinimumView.model_validate(minimum.model_dump()) for minimum in minimums]
    )


@router.get(
    "/leagues/{league_id}/activity_minimums/{activity_id}/applicable",
    response_model=ApplicableMinimumResponse,
)
async def get_applicable_minimum(
    league_id: LeagueId,
    activity_id: ActivityId,
    age: float | None = Query(default=None),
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> ApplicableMinimumResponse:
    """
    Thresholds that apply to one participant.

    Without an explicit ``age`` the caller's own date of birth is used; a caller without
    a date of birth gets the base tier.
    """
    await require_league_permission(user_public.id, league_id, Permission.VIEW_LEADERBOARDS)
    minimum = await get_league_minimum_for_activity(league_id, activity_id, cache)

    today = datetime_utc.now().date()
    if age is not None:
        applicable = resolve_activity_minimum(minimum, age)
        reported_age: int | None = int(age)
    else:
        applicable = resolve_for_date_of_birth(minimum, user_public.date_of_birth, today)
        reported_age = (
            age_on(user_public.date_of_birth, today) if user_public.date_of_birth else None
        )

    return ApplicableMinimumResponse(
        data=ApplicableMinimumView(
            activity_id=activity_id,
            age=reported_age,
            min=applicable.min,
            max=applicable.max,
            tier=applicable.tier,
            min_rr=MIN_RR,
            max_rr=MAX_RR,
        )
    )


@router.put(
    "/leagues/{league_id}/activity_minimums/{activity_id}", response_model=SuccessResponse
)
async def update_activity_minimum(
    league_id: LeagueId,
    activity_id: ActivityId,
    body: ActivityMinimumUpsertBody,
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> SuccessResponse:
    await require_league_permission(user_public.id, league_id, Permission.CONFIGURE_LEAGUE)
    await save_activity_minimum(
        league_id,
        activity_id,
        body.min_value,
        body.max_value,
        body.age_group_overrides,
        user_public.id,
        cache,
    )
    logger.info(f"User {user_public.id} updated minimum of activity {activity_id} in {league_id}")
    return SuccessResponse()


@router.delete(
    "/leagues/{league_id}/activity_minimums/{activity_id}", response_model=SuccessResponse
)
async def delete_activity_minimum(
    league_id: LeagueId,
    activity_id: ActivityId,
    user_public: UserPublic = Depends(user_authenticated),
    cache: TTLCache = Depends(get_cache),
) -> SuccessResponse:
    await require_league_permission(user_public.id, league_id, Permission.CONFIGURE_LEAGUE)
    await reset_activity_minimum(league_id, activity_id, user_public.id, cache)
    return SuccessResponse()
