import pytest

from fitleague.logic.permissions import (
    PERMISSION_TABLE,
    Permission,
    authorize,
    can_manage_role,
    ensure_authorized,
    has_role_level,
    permissions_for_role,
    pick_effective_role,
    role_display_name,
    role_level,
)
from fitleague.models.db.league import LeagueRole
from fitleague.utils.errors import ForbiddenError


def test_every_role_can_submit_and_view_leaderboards() -> None:
    for role in LeagueRole:
        assert authorize(role, Permission.SUBMIT_WORKOUTS)
        assert authorize(role, Permission.VIEW_LEADERBOARDS)


def test_only_host_owns_league_configuration() -> None:
    owner_permissions = [
        Permission.CREATE_LEAGUE,
        Permission.CONFIGURE_LEAGUE,
        Permission.DELETE_LEAGUE,
        Permission.EDIT_LEAGUE_SETTINGS,
        Permission.ASSIGN_GOVERNORS,
    ]
    for permission in owner_permissions:
        assert authorize(LeagueRole.HOST, permission)
        assert not authorize(LeagueRole.GOVERNOR, permission)
        assert not authorize(LeagueRole.CAPTAIN, permission)
        assert not authorize(LeagueRole.PLAYER, permission)


def test_oversight_is_shared_by_host_and_governor() -> None:
    for permission in (
        Permission.LEAGUE_WIDE_OVERSIGHT,
        Permission.VALIDATE_ANY_SUBMISSION,
        Permission.OVERRIDE_CAPTAIN_APPROVALS,
        Permission.ACCESS_ALL_DATA,
    ):
        assert authorize(LeagueRole.HOST, permission)
        assert authorize(LeagueRole.GOVERNOR, permission)
        assert not authorize(LeagueRole.CAPTAIN, permission)
        assert not authorize(LeagueRole.PLAYER, permission)


def test_captain_is_scoped_to_own_team() -> None:
    assert authorize(LeagueRole.CAPTAIN, Permission.VALIDATE_TEAM_SUBMISSIONS)
    assert authorize(LeagueRole.CAPTAIN, Permission.VALIDATE_OWN_TEAM_ONLY)
    assert authorize(LeagueRole.CAPTAIN, Permission.MANAGE_TEAM_MEMBERS)
    assert not authorize(LeagueRole.CAPTAIN, Permission.VALIDATE_ANY_SUBMISSION)

    assert not authorize(LeagueRole.HOST, Permission.VALIDATE_OWN_TEAM_ONLY)
    assert not authorize(LeagueRole.GOVERNOR, Permission.VALIDATE_OWN_TEAM_ONLY)


def test_missing_role_is_denied_everything() -> None:
    assert permissions_for_role(None) == frozenset()
    for permission in Permission:
        assert not authorize(None, permission)


@pytest.mark.parametrize("role", ["ADMIN", "SUPERUSER", "host", ""])
def test_roles_outside_the_table_are_denied_everything(role: str) -> None:
    assert permissions_for_role(role) == frozenset()  # type: ignore[arg-type]
    for permission in Permission:
        assert not authorize(role, permission)  # type: ignore[arg-type]


def test_permission_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        PERMISSION_TABLE[LeagueRole.PLAYER] = frozenset(Permission)  # type: ignore[index]

    assert not authorize(LeagueRole.PLAYER, Permission.DELETE_LEAGUE)


def test_ensure_authorized_raises_forbidden() -> None:
    ensure_authorized(LeagueRole.GOVERNOR, Permission.VALIDATE_ANY_SUBMISSION)

    with pytest.raises(ForbiddenError) as exc_info:
        ensure_authorized(LeagueRole.PLAYER, Permission.VALIDATE_ANY_SUBMISSION)

    assert exc_info.value.status_code == 403


def test_pick_effective_role_prefers_highest_authority() -> None:
    assert pick_effective_role([LeagueRole.CAPTAIN, LeagueRole.HOST]) is LeagueRole.HOST
    assert pick_effective_role([LeagueRole.PLAYER, LeagueRole.CAPTAIN]) is LeagueRole.CAPTAIN
    assert pick_effective_role([LeagueRole.CAPTAIN, LeagueRole.GOVERNOR]) is LeagueRole.GOVERNOR
    assert pick_effective_role([LeagueRole.PLAYER]) is LeagueRole.PLAYER
    assert pick_effective_role([]) is None


def test_pick_effective_role_ignores_unknown_roles() -> None:
    mixed = ["ADMIN", LeagueRole.CAPTAIN, "OWNER"]

    assert pick_effective_role(mixed) is LeagueRole.CAPTAIN  # type: ignore[arg-type]
    assert pick_effective_role(["ADMIN", "OWNER"]) is None  # type: ignore[list-item]
    assert role_level("ADMIN") == -1  # type: ignore[arg-type]


def test_role_levels() -> None:
    assert role_level(None) == -1
    assert role_level(LeagueRole.PLAYER) < role_level(LeagueRole.CAPTAIN)
    assert role_level(LeagueRole.GOVERNOR) < role_level(LeagueRole.HOST)

    assert has_role_level(LeagueRole.HOST, LeagueRole.GOVERNOR)
    assert has_role_level(LeagueRole.CAPTAIN, LeagueRole.CAPTAIN)
    assert not has_role_level(None, LeagueRole.PLAYER)

    assert can_manage_role(LeagueRole.HOST, LeagueRole.GOVERNOR)
    assert can_manage_role(LeagueRole.GOVERNOR, LeagueRole.CAPTAIN)
    assert not can_manage_role(LeagueRole.CAPTAIN, LeagueRole.CAPTAIN)


def test_role_display_name() -> None:
    assert role_display_name(LeagueRole.CAPTAIN) == "Player (C)"
    assert role_display_name(LeagueRole.HOST) == "Host"
