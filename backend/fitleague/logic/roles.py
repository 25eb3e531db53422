from fitleague.logic.permissions import Permission, ensure_authorized, pick_effective_role
from fitleague.models.db.league import LeagueRole
from fitleague.models.roles import RoleContext
from fitleague.sql.leagues import get_league_member
from fitleague.sql.roles import get_role_candidates
from fitleague.utils.id_types import LeagueId, UserId


async def resolve_role(user_id: UserId, league_id: LeagueId) -> LeagueRole | None:
    """
    Resolve the single effective role of a user within one league.

    When several records apply (e.g. host and captain), the highest-privilege role wins:
    host > governor > captain > player. None means the user is not affiliated.
    """
    return pick_effective_role(await get_role_candidates(league_id, user_id))


async def resolve_role_context(user_id: UserId, league_id: LeagueId) -> RoleContext:
    return RoleContext(
        league_id=league_id,
        user_id=user_id,
        role=await resolve_role(user_id, league_id),
        member=await get_league_member(league_id, user_id),
    )


async def require_league_permission(
    user_id: UserId, league_id: LeagueId, permission: Permission
) -> RoleContext:
    context = await resolve_role_context(user_id, league_id)
    ensure_authorized(context.role, permission)
    return context
