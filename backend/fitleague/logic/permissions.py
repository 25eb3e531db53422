"""
League-scoped permission table.

Every permission is relative to one league: hosting league A grants nothing in league B.
The table is fixed at import time and exposed read-only.
"""

from collections.abc import Iterable, Mapping
from enum import auto
from types import MappingProxyType

from fitleague.models.db.league import LeagueRole
from fitleague.utils.errors import ForbiddenError
from fitleague.utils.types import EnumAutoStr


class Permission(EnumAutoStr):
    CREATE_LEAGUE = auto()
    CONFIGURE_LEAGUE = auto()
    DELETE_LEAGUE = auto()
    EDIT_LEAGUE_SETTINGS = auto()
    ASSIGN_GOVERNORS = auto()
    LEAGUE_WIDE_OVERSIGHT = auto()
    VALIDATE_ANY_SUBMISSION = auto()
    VALIDATE_TEAM_SUBMISSIONS = auto()
    OVERRIDE_CAPTAIN_APPROVALS = auto()
    ACCESS_ALL_DATA = auto()
    VALIDATE_OWN_TEAM_ONLY = auto()
    MANAGE_TEAM_MEMBERS = auto()
    REMOVE_PLAYERS = auto()
    SUBMIT_WORKOUTS = auto()
    VIEW_LEADERBOARDS = auto()


# Lowest to highest authority.
ROLE_PRECEDENCE: tuple[LeagueRole, ...] = (
    LeagueRole.PLAYER,
    LeagueRole.CAPTAIN,
    LeagueRole.GOVERNOR,
    LeagueRole.HOST,
)

_EVERYONE = frozenset({Permission.SUBMIT_WORKOUTS, Permission.VIEW_LEADERBOARDS})
_TEAM_LEAD = frozenset(
    {
        Permission.VALIDATE_TEAM_SUBMISSIONS,
        Permission.MANAGE_TEAM_MEMBERS,
        Permission.REMOVE_PLAYERS,
    }
)
_OVERSIGHT = frozenset(
    {
        Permission.LEAGUE_WIDE_OVERSIGHT,
        Permission.VALIDATE_ANY_SUBMISSION,
        Permission.OVERRIDE_CAPTAIN_APPROVALS,
        Permission.ACCESS_ALL_DATA,
    }
)
_OWNERSHIP = frozenset(
    {
        Permission.CREATE_LEAGUE,
        Permission.CONFIGURE_LEAGUE,
        Permission.DELETE_LEAGUE,
        Permission.EDIT_LEAGUE_SETTINGS,
        Permission.ASSIGN_GOVERNORS,
    }
)

PERMISSION_TABLE: Mapping[LeagueRole, frozenset[Permission]] = MappingProxyType(
    {
        LeagueRole.HOST: _EVERYONE | _TEAM_LEAD | _OVERSIGHT | _OWNERSHIP,
        LeagueRole.GOVERNOR: _EVERYONE | _TEAM_LEAD | _OVERSIGHT,
        LeagueRole.CAPTAIN: _EVERYONE | _TEAM_LEAD | {Permission.VALIDATE_OWN_TEAM_ONLY},
        LeagueRole.PLAYER: _EVERYONE,
    }
)

_ROLE_DISPLAY_NAMES: Mapping[LeagueRole, str] = MappingProxyType(
    {
        LeagueRole.HOST: "Host",
        LeagueRole.GOVERNOR: "Governor",
        LeagueRole.CAPTAIN: "Player (C)",
        LeagueRole.PLAYER: "Player",
    }
)


def permissions_for_role(role: LeagueRole | None) -> frozenset[Permission]:
    if role is None:
        return frozenset()
    return PERMISSION_TABLE.get(role, frozenset())


def authorize(role: LeagueRole | None, permission: Permission) -> bool:
    return permission in permissions_for_role(role)


def ensure_authorized(role: LeagueRole | None, permission: Permission) -> None:
    if not authorize(role, permission):
        raise ForbiddenError(f"Missing permission {permission.value} in this league")


def role_level(role: LeagueRole | None) -> int:
    """Position in ROLE_PRECEDENCE, or -1 for no (or an unknown) role."""
    if role is None or role not in ROLE_PRECEDENCE:
        return -1
    return ROLE_PRECEDENCE.index(role)


def has_role_level(role: LeagueRole | None, minimum: LeagueRole) -> bool:
    return role_level(role) >= role_level(minimum)


def can_manage_role(actor: LeagueRole | None, target: LeagueRole) -> bool:
    return role_level(actor) > role_level(target)


def pick_effective_role(roles: Iterable[LeagueRole]) -> LeagueRole | None:
    known = [role for role in roles if role in ROLE_PRECEDENCE]
    if len(known) < 1:
        return None
    return max(known, key=role_level)


def role_display_name(role: LeagueRole) -> str:
    return _ROLE_DISPLAY_NAMES[role]
