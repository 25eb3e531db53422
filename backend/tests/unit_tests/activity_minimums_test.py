import math
from datetime import date
from typing import Any

import pytest
from heliclockter import datetime_utc
from pydantic import ValidationError as PydanticValidationError

from fitleague.logic import activity_minimums as minimums_logic
from fitleague.logic.activity_minimums import (
    age_on,
    calculate_rr,
    can_submit_with_rr,
    get_tier_for_age,
    preview_rr,
    resolve_activity_minimum,
    resolve_for_date_of_birth,
    validate_minimum_config,
)
from fitleague.models.activity_minimums import AgeTier, ApplicableMinimum, Bound
from fitleague.models.db.activity import (
    AgeGroupOverrides,
    LeagueActivity,
    LeagueActivityWithName,
    MeasurementType,
    MinimumThreshold,
)
from fitleague.models.db.entry import EntryType
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import InvalidAgeError, NotFoundError, ValidationError
from fitleague.utils.id_types import ActivityId, LeagueActivityId, LeagueId, UserId


def _build_activity(
    min_value: float | None = 30,
    max_value: float | None = 60,
    age_group_overrides: Any = None,
    league_id: int = 1,
    activity_id: int = 3,
) -> LeagueActivityWithName:
    return LeagueActivityWithName(
        id=LeagueActivityId(activity_id * 10),
        league_id=LeagueId(league_id),
        activity_id=ActivityId(activity_id),
        min_value=min_value,
        max_value=max_value,
        age_group_overrides=age_group_overrides,
        created=datetime_utc.now(),
        modified=datetime_utc.now(),
        activity_name="Running",
        measurement_type=MeasurementType.DURATION,
    )


def test_below40_participant_gets_override() -> None:
    activity = _build_activity(
        age_group_overrides={"below40": {"min_value": 40, "max_value": 80}}
    )

    applicable = resolve_activity_minimum(activity, 35)

    assert applicable == ApplicableMinimum(min=40, max=80, tier=AgeTier.BELOW40)


def test_above60_without_override_falls_back_to_base() -> None:
    activity = _build_activity(
        age_group_overrides={"below40": {"min_value": 40, "max_value": 80}}
    )

    applicable = resolve_activity_minimum(activity, 65)

    assert applicable.min == 30
    assert applicable.max == 60
    assert applicable.tier is AgeTier.BASE


def test_tier_boundaries() -> None:
    activity = _build_activity(
        age_group_overrides={
            "below40": {"min_value": 40, "max_value": 80},
            "above60": {"min_value": 20, "max_value": 45},
        }
    )

    assert resolve_activity_minimum(activity, 39.9).tier is AgeTier.BELOW40
    assert resolve_activity_minimum(activity, 40).tier is AgeTier.BASE
    assert resolve_activity_minimum(activity, 59).tier is AgeTier.BASE
    assert resolve_activity_minimum(activity, 60) == ApplicableMinimum(
        min=20, max=45, tier=AgeTier.ABOVE60
    )
    assert get_tier_for_age(0) is AgeTier.BELOW40


@pytest.mark.parametrize("age", [-1, math.nan, math.inf, 10**400, None, True, "40"])
def test_invalid_age_is_rejected(age: Any) -> None:
    activity = _build_activity()

    with pytest.raises(InvalidAgeError) as exc_info:
        resolve_activity_minimum(activity, age)

    assert exc_info.value.errors[0].field == "age"
    assert isinstance(exc_info.value, ValidationError)


def test_missing_base_thresholds_are_unbounded() -> None:
    applicable = resolve_activity_minimum(_build_activity(min_value=None, max_value=None), 45)

    assert applicable.min is Bound.UNBOUNDED
    assert applicable.max is Bound.UNBOUNDED
    assert applicable.tier is AgeTier.BASE


def test_overrides_are_parsed_from_json_text() -> None:
    activity = _build_activity(age_group_overrides='{"above60": {"min_value": 10, "max_value": 20}}')

    assert activity.age_group_overrides.above60 == MinimumThreshold(min_value=10, max_value=20)
    assert _build_activity(age_group_overrides=None).age_group_overrides == AgeGroupOverrides()


def test_malformed_overrides_are_not_silently_dropped() -> None:
    with pytest.raises(PydanticValidationError):
        _build_activity(age_group_overrides='{"below40": {"min_value": 40')


def test_unknown_birth_date_uses_base_tier() -> None:
    activity = _build_activity(
        age_group_overrides={"below40": {"min_value": 40, "max_value": 80}}
    )
    today = date(2026, 3, 10)

    assert resolve_for_date_of_birth(activity, None, today).tier is AgeTier.BASE
    assert resolve_for_date_of_birth(activity, date(2000, 1, 1), today).tier is AgeTier.BELOW40


def test_age_on_respects_birthday() -> None:
    assert age_on(date(1986, 3, 11), date(2026, 3, 10)) == 39
    assert age_on(date(1986, 3, 10), date(2026, 3, 10)) == 40


def test_calculate_rr_scales_between_thresholds() -> None:
    applicable = ApplicableMinimum(min=30, max=60, tier=AgeTier.BASE)

    assert calculate_rr(29, applicable) == 0.0
    assert calculate_rr(30, applicable) == 1.0
    assert calculate_rr(45, applicable) == 1.5
    assert calculate_rr(60, applicable) == 2.0
    assert calculate_rr(500, applicable) == 2.0
    assert calculate_rr(None, applicable) == 0.0


def test_calculate_rr_with_unbounded_thresholds() -> None:
    no_minimum = ApplicableMinimum(min=Bound.UNBOUNDED, max=Bound.UNBOUNDED, tier=AgeTier.BASE)
    no_maximum = ApplicableMinimum(min=30, max=Bound.UNBOUNDED, tier=AgeTier.BASE)

    assert calculate_rr(1, no_minimum) == 1.0
    assert calculate_rr(100, no_maximum) == 1.0
    assert calculate_rr(10, no_maximum) == 0.0


def test_preview_rr_for_rest_days_and_unmeasured_activities() -> None:
    assert preview_rr(EntryType.REST, None, None, None) == 1.0
    assert preview_rr(EntryType.WORKOUT, MeasurementType.NONE, None, None) == 1.0
    assert preview_rr(EntryType.WORKOUT, MeasurementType.DISTANCE, 5, None) == 0.0
    assert can_submit_with_rr(1.0)
    assert not can_submit_with_rr(0.99)


def test_validate_minimum_config_reports_each_field() -> None:
    errors = validate_minimum_config(
        0,
        0,
        AgeGroupOverrides(
            below40=MinimumThreshold(min_value=50, max_value=40),
            above60=MinimumThreshold(min_value=10, max_value=20),
        ),
    )

    assert [error.field for error in errors] == ["min_value", "max_value", "below40.max_value"]
    assert validate_minimum_config(30, 60, AgeGroupOverrides()) == []


@pytest.mark.asyncio
async def test_league_minimums_are_cached_until_saved(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"fetch": 0, "update": 0}

    async def fake_get_league_activities(league_id: LeagueId) -> list[LeagueActivityWithName]:
        calls["fetch"] += 1
        return [_build_activity(league_id=league_id)]

    async def fake_update(*_: Any) -> bool:
        calls["update"] += 1
        return True

    monkeypatch.setattr(minimums_logic, "get_league_activities", fake_get_league_activities)
    monkeypatch.setattr(minimums_logic, "update_league_activity_minimum", fake_update)
    cache = TTLCache()

    await minimums_logic.get_league_minimums(LeagueId(1), cache)
    await minimums_logic.get_league_minimums(LeagueId(1), cache)
    await minimums_logic.get_league_minimums(LeagueId(10), cache)
    assert calls["fetch"] == 2

    await minimums_logic.save_activity_minimum(
        LeagueId(1), ActivityId(3), 20, 40, AgeGroupOverrides(), UserId(1), cache
    )
    await minimums_logic.get_league_minimums(LeagueId(1), cache)
    await minimums_logic.get_league_minimums(LeagueId(10), cache)

    assert calls["update"] == 1
    assert calls["fetch"] == 3


@pytest.mark.asyncio
async def test_save_rejects_invalid_config_without_writing(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"update": 0}

    async def fake_update(*_: Any) -> bool:
        calls["update"] += 1
        return True

    monkeypatch.setattr(minimums_logic, "update_league_activity_minimum", fake_update)

    with pytest.raises(ValidationError) as exc_info:
        await minimums_logic.save_activity_minimum(
            LeagueId(1), ActivityId(3), 40, 20, AgeGroupOverrides(), UserId(1), TTLCache()
        )

    assert exc_info.value.errors[0].field == "max_value"
    assert calls["update"] == 0


@pytest.mark.asyncio
async def test_unconfigured_activity_is_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_league_activities(league_id: LeagueId) -> list[LeagueActivityWithName]:
        return [_build_activity(league_id=league_id, activity_id=3)]

    async def fake_reset(*_: Any) -> bool:
        return False

    monkeypatch.setattr(minimums_logic, "get_league_activities", fake_get_league_activities)
    monkeypatch.setattr(minimums_logic, "reset_league_activity_minimum", fake_reset)

    with pytest.raises(NotFoundError):
        await minimums_logic.get_league_minimum_for_activity(LeagueId(1), ActivityId(99), TTLCache())
    with pytest.raises(NotFoundError):
        await minimums_logic.reset_activity_minimum(
            LeagueId(1), ActivityId(99), UserId(1), TTLCache()
        )


def test_resolver_accepts_plain_league_activity() -> None:
    activity = LeagueActivity(
        id=LeagueActivityId(1),
        league_id=LeagueId(1),
        activity_id=ActivityId(1),
        created=datetime_utc.now(),
        modified=datetime_utc.now(),
    )

    assert resolve_activity_minimum(activity, 25).min is Bound.UNBOUNDED
