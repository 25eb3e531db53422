from fastapi import APIRouter, Depends

from fitleague.config import config
from fitleague.logic.permissions import (
    Permission,
    can_manage_role,
    ensure_authorized,
    permissions_for_role,
    role_display_name,
)
from fitleague.logic.roles import resolve_role, resolve_role_context
from fitleague.models.db.league import LeagueRole
from fitleague.models.db.user import UserPublic
from fitleague.models.roles import ASSIGNABLE_ROLES, EffectiveRoleView, RoleAssignmentBody
from fitleague.routes.auth import user_authenticated
from fitleague.routes.models import EffectiveRoleResponse, SuccessResponse
from fitleague.sql.leagues import get_league_by_id, get_league_member
from fitleague.sql.roles import delete_role_assignment, insert_role_assignment
from fitleague.sql.users import get_user_by_id
from fitleague.utils.errors import ForbiddenError, NotFoundError, ValidationError
from fitleague.utils.id_types import LeagueId, UserId
from fitleague.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)

_PERMISSION_TO_ASSIGN = {
    LeagueRole.GOVERNOR: Permission.ASSIGN_GOVERNORS,
    LeagueRole.CAPTAIN: Permission.MANAGE_TEAM_MEMBERS,
}


async def _ensure_league_exists(league_id: LeagueId) -> None:
    if await get_league_by_id(league_id) is None:
        raise NotFoundError(f"League {league_id} not found")


@router.get("/leagues/{league_id}/roles/me", response_model=EffectiveRoleResponse)
async def get_my_league_role(
    league_id: LeagueId, user_public: UserPublic = Depends(user_authenticated)
) -> EffectiveRoleResponse:
    await _ensure_league_exists(league_id)
    role = await resolve_role(user_public.id, league_id)
    return EffectiveRoleResponse(
        data=EffectiveRoleView(
            league_id=league_id,
            role=role,
            display_name=role_display_name(role) if role is not None else None,
            permissions=sorted(permissions_for_role(role), key=lambda p: p.value),
        )
    )


async def _ensure_can_manage(
    league_id: LeagueId, actor_id: UserId, target_id: UserId, role: LeagueRole
) -> None:
    await _ensure_league_exists(league_id)
    actor = await resolve_role_context(actor_id, league_id)
    ensure_authorized(actor.role, _PERMISSION_TO_ASSIGN[role])
    if not can_manage_role(actor.role, role):
        raise ForbiddenError(f"You cannot manage the {role.value} role")
    if actor_id == target_id and actor.role is not LeagueRole.HOST:
        raise ForbiddenError("You cannot change your own role")


@router.put("/leagues/{league_id}/roles/{user_id}", response_model=SuccessResponse)
async def assign_league_role(
    league_id: LeagueId,
    user_id: UserId,
    body: RoleAssignmentBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    await _ensure_can_manage(league_id, user_public.id, user_id, body.role)

    if await get_user_by_id(user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    if body.role is LeagueRole.CAPTAIN:
        member = await get_league_member(league_id, user_id)
        if member is None or member.team_id is None:
            raise ValidationError.for_field(
                "user_id", "Captains must be league members allocated to a team"
            )

    await insert_role_assignment(league_id, user_id, body.role, user_public.id)
    logger.info(
        f"User {user_public.id} assigned {body.role.value} to user {user_id} in league {league_id}"
    )
    return SuccessResponse()


@router.delete("/leagues/{league_id}/roles/{user_id}/{role}", response_model=SuccessResponse)
async def remove_league_role(
    league_id: LeagueId,
    user_id: UserId,
    role: LeagueRole,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError.for_field("role", "Only GOVERNOR and CAPTAIN can be removed")

    await _ensure_can_manage(league_id, user_public.id, user_id, role)

    if not await delete_role_assignment(league_id, user_id, role):
        raise NotFoundError(f"User {user_id} does not hold {role.value} in league {league_id}")

    logger.info(
        f"User {user_public.id} removed {role.value} from user {user_id} in league {league_id}"
    )
    return SuccessResponse()
