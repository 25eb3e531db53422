from datetime import date
from typing import Any

import pytest
from heliclockter import datetime_utc

from fitleague.logic.permissions import Permission
from fitleague.models.activity_minimums import AgeTier, Bound
from fitleague.models.db.activity import LeagueActivityWithName, MeasurementType
from fitleague.models.db.entry import EntryType
from fitleague.models.db.league import LeagueRole
from fitleague.models.db.user import UserPublic
from fitleague.models.entries import RrPreviewBody
from fitleague.models.roles import RoleContext
from fitleague.routes import activity_minimums as minimums_routes
from fitleague.routes import entries as entries_routes
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import ForbiddenError, InvalidAgeError, ValidationError
from fitleague.utils.id_types import ActivityId, LeagueActivityId, LeagueId, UserId


def _build_user(date_of_birth: date | None = None) -> UserPublic:
    return UserPublic(
        id=UserId(5),
        email="runner@example.com",
        name="Runner",
        date_of_birth=date_of_birth,
        created=datetime_utc.now(),
    )


def _build_minimum(
    min_value: float | None = 30,
    max_value: float | None = 60,
    measurement_type: MeasurementType = MeasurementType.DURATION,
) -> LeagueActivityWithName:
    return LeagueActivityWithName(
        id=LeagueActivityId(1),
        league_id=LeagueId(1),
        activity_id=ActivityId(3),
        min_value=min_value,
        max_value=max_value,
        age_group_overrides={"below40": {"min_value": 40, "max_value": 80}},
        created=datetime_utc.now(),
        modified=datetime_utc.now(),
        activity_name="Gym",
        measurement_type=measurement_type,
    )


def _patch_role(monkeypatch: pytest.MonkeyPatch, module: Any, role: LeagueRole | None) -> None:
    async def fake_require_league_permission(
        user_id: UserId, league_id: LeagueId, permission: Permission
    ) -> RoleContext:
        if role is None or permission is Permission.CONFIGURE_LEAGUE and role is not LeagueRole.HOST:
            raise ForbiddenError(f"Missing permission {permission.value} in this league")
        return RoleContext(league_id=league_id, user_id=user_id, role=role)

    monkeypatch.setattr(module, "require_league_permission", fake_require_league_permission)


def _patch_minimum(
    monkeypatch: pytest.MonkeyPatch, module: Any, minimum: LeagueActivityWithName
) -> None:
    async def fake_get_league_minimum_for_activity(
        _: LeagueId, __: ActivityId, ___: TTLCache
    ) -> LeagueActivityWithName:
        return minimum

    monkeypatch.setattr(
        module, "get_league_minimum_for_activity", fake_get_league_minimum_for_activity
    )


@pytest.mark.asyncio
async def test_applicable_minimum_for_explicit_age(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, minimums_routes, LeagueRole.PLAYER)
    _patch_minimum(monkeypatch, minimums_routes, _build_minimum())

    response = await minimums_routes.get_applicable_minimum(
        LeagueId(1), ActivityId(3), 35, _build_user(), TTLCache()
    )

    assert response.data.tier is AgeTier.BELOW40
    assert response.data.min == 40
    assert response.data.age == 35
    assert (response.data.min_rr, response.data.max_rr) == (1.0, 2.0)


@pytest.mark.asyncio
async def test_applicable_minimum_without_birth_date(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, minimums_routes, LeagueRole.PLAYER)
    _patch_minimum(monkeypatch, minimums_routes, _build_minimum(min_value=None))

    response = await minimums_routes.get_applicable_minimum(
        LeagueId(1), ActivityId(3), None, _build_user(), TTLCache()
    )

    assert response.data.tier is AgeTier.BASE
    assert response.data.age is None
    assert response.data.min is Bound.UNBOUNDED


@pytest.mark.asyncio
async def test_applicable_minimum_rejects_negative_age(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, minimums_routes, LeagueRole.PLAYER)
    _patch_minimum(monkeypatch, minimums_routes, _build_minimum())

    with pytest.raises(InvalidAgeError):
        await minimums_routes.get_applicable_minimum(
            LeagueId(1), ActivityId(3), -3, _build_user(), TTLCache()
        )


@pytest.mark.asyncio
async def test_only_host_configures_minimums(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"reset": 0}

    async def fake_reset_activity_minimum(*_: Any) -> None:
        calls["reset"] += 1

    monkeypatch.setattr(minimums_routes, "reset_activity_minimum", fake_reset_activity_minimum)

    _patch_role(monkeypatch, minimums_routes, LeagueRole.GOVERNOR)
    with pytest.raises(ForbiddenError):
        await minimums_routes.delete_activity_minimum(
            LeagueId(1), ActivityId(3), _build_user(), TTLCache()
        )

    _patch_role(monkeypatch, minimums_routes, LeagueRole.HOST)
    response = await minimums_routes.delete_activity_minimum(
        LeagueId(1), ActivityId(3), _build_user(), TTLCache()
    )

    assert response.success is True
    assert calls["reset"] == 1


@pytest.mark.asyncio
async def test_preview_rr_uses_participant_tier(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, entries_routes, LeagueRole.PLAYER)
    _patch_minimum(monkeypatch, entries_routes, _build_minimum())
    body = RrPreviewBody(type=EntryType.WORKOUT, activity_id=ActivityId(3), value=45)

    base_tier = await entries_routes.preview_entry_rr(LeagueId(1), body, _build_user(), TTLCache())
    young = await entries_routes.preview_entry_rr(
        LeagueId(1), body, _build_user(date(2000, 1, 1)), TTLCache()
    )

    assert base_tier.data.rr_value == 1.5
    assert base_tier.data.can_submit is True
    assert young.data.rr_value == 1.125
    assert young.data.can_submit is True


@pytest.mark.asyncio
async def test_preview_rr_below_minimum_cannot_submit(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, entries_routes, LeagueRole.PLAYER)
    _patch_minimum(monkeypatch, entries_routes, _build_minimum())
    body = RrPreviewBody(type=EntryType.WORKOUT, activity_id=ActivityId(3), value=10)

    response = await entries_routes.preview_entry_rr(LeagueId(1), body, _build_user(), TTLCache())

    assert response.data.rr_value == 0.0
    assert response.data.can_submit is False


@pytest.mark.asyncio
async def test_preview_rr_for_rest_day_and_missing_activity(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_role(monkeypatch, entries_routes, LeagueRole.PLAYER)

    rest = await entries_routes.preview_entry_rr(
        LeagueId(1), RrPreviewBody(type=EntryType.REST), _build_user(), TTLCache()
    )
    assert rest.data.rr_value == 1.0

    with pytest.raises(ValidationError) as exc_info:
        await entries_routes.preview_entry_rr(
            LeagueId(1), RrPreviewBody(type=EntryType.WORKOUT, value=5), _build_user(), TTLCache()
        )
    assert exc_info.value.errors[0].field == "activity_id"
