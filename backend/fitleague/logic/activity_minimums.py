"""
Age-aware activity thresholds.

A league activity stores one base threshold row (ages 40 up to 60) and optional overrides
for participants below 40 and from 60 upwards. The RR score that a qualifying value
earns is always mapped onto the fixed interval RR_RANGE, regardless of the raw
thresholds.
"""

import math
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Final

from fitleague.config import config
from fitleague.models.activity_minimums import AgeTier, ApplicableMinimum, Bound, Threshold
from fitleague.models.db.activity import (
    AgeGroupOverrides,
    LeagueActivity,
    LeagueActivityWithName,
    MeasurementType,
    MinimumThreshold,
)
from fitleague.models.db.entry import EntryType
from fitleague.sql.activities import (
    get_league_activities,
    reset_league_activity_minimum,
    update_league_activity_minimum,
)
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import FieldError, InvalidAgeError, NotFoundError, ValidationError
from fitleague.utils.id_types import ActivityId, LeagueId, UserId
from fitleague.utils.logging import logger

MIN_RR: Final = 1.0
MAX_RR: Final = 2.0
RR_RANGE: Final = (MIN_RR, MAX_RR)

BELOW40_UPPER_AGE: Final = 40
ABOVE60_LOWER_AGE: Final = 60

DEFAULT_MINIMUMS: Mapping[MeasurementType, MinimumThreshold] = MappingProxyType(
    {
        MeasurementType.DURATION: MinimumThreshold(min_value=45, max_value=90),
        MeasurementType.DISTANCE: MinimumThreshold(min_value=4, max_value=20),
        MeasurementType.STEPS: MinimumThreshold(min_value=10_000, max_value=20_000),
        MeasurementType.HOLE: MinimumThreshold(min_value=9, max_value=18),
    }
)


def _validated_age(age: object) -> float:
    if isinstance(age, bool) or not isinstance(age, int | float):
        raise InvalidAgeError(age)
    try:
        years = float(age)
    except OverflowError as exc:
        raise InvalidAgeError(age) from exc
    if not math.isfinite(years) or years < 0:
        raise InvalidAgeError(age)
    return years


def get_tier_for_age(age: int | float) -> AgeTier:
    years = _validated_age(age)
    if years < BELOW40_UPPER_AGE:
        return AgeTier.BELOW40
    if years >= ABOVE60_LOWER_AGE:
        return AgeTier.ABOVE60
    return AgeTier.BASE


def age_on(date_of_birth: date, today: date) -> int:
    had_birthday = (today.month, today.day) >= (date_of_birth.month, date_of_birth.day)
    return today.year - date_of_birth.year - (0 if had_birthday else 1)


def _as_threshold(value: float | None) -> Threshold:
    return Bound.UNBOUNDED if value is None else float(value)


def base_activity_minimum(activity: LeagueActivity) -> ApplicableMinimum:
    """Base-tier thresholds, for callers that explicitly have no participant age."""
    return ApplicableMinimum(
        min=_as_threshold(activity.min_value),
        max=_as_threshold(activity.max_value),
        tier=AgeTier.BASE,
    )


def resolve_activity_minimum(
    activity: LeagueActivity, age_years: int | float
) -> ApplicableMinimum:
    tier = get_tier_for_age(age_years)
    overrides = activity.age_group_overrides
    override = {
        AgeTier.BELOW40: overrides.below40,
        AgeTier.ABOVE60: overrides.above60,
    }.get(tier)

    if override is not None:
        return ApplicableMinimum(min=override.min_value, max=override.max_value, tier=tier)

    return base_activity_minimum(activity)


def resolve_for_date_of_birth(
    activity: LeagueActivity, date_of_birth: date | None, today: date
) -> ApplicableMinimum:
    """Thresholds for a participant; an unknown birth date gets the base tier."""
    if date_of_birth is None:
        return base_activity_minimum(activity)
    return resolve_activity_minimum(activity, age_on(date_of_birth, today))


def _threshold_errors(prefix: str, threshold: MinimumThreshold) -> list[FieldError]:
    errors: list[FieldError] = []
    if threshold.min_value <= 0:
        errors.append(
            FieldError(field=f"{prefix}min_value", message="Minimum value must be greater than 0")
        )
    if threshold.max_value <= threshold.min_value:
        errors.append(
            FieldError(
                field=f"{prefix}max_value",
                message="Maximum value must be greater than minimum value",
            )
        )
    return errors


def validate_minimum_config(
    min_value: float, max_value: float, overrides: AgeGroupOverrides
) -> list[FieldError]:
    errors = _threshold_errors("", MinimumThreshold(min_value=min_value, max_value=max_value))
    if overrides.below40 is not None:
        errors.extend(_threshold_errors("below40.", overrides.below40))
    if overrides.above60 is not None:
        errors.extend(_threshold_errors("above60.", overrides.above60))
    return errors


def calculate_rr(value: float | None, applicable: ApplicableMinimum) -> float:
    """
    Map a measured value onto RR_RANGE.

    Values under the minimum do not qualify and score 0. Values between min and max
    scale linearly from MIN_RR to MAX_RR; anything above max is capped.
    """
    if value is None or not math.isfinite(value) or value <= 0:
        return 0.0

    minimum, maximum = applicable.min, applicable.max
    if isinstance(minimum, Bound):
        return MIN_RR
    if value < minimum:
        return 0.0
    if isinstance(maximum, Bound) or maximum <= minimum:
        return MIN_RR

    capped = min(value, maximum)
    return min(MIN_RR + (capped - minimum) / (maximum - minimum), MAX_RR)


def preview_rr(
    entry_type: EntryType,
    measurement_type: MeasurementType | None,
    value: float | None,
    applicable: ApplicableMinimum | None,
) -> float:
    if entry_type is EntryType.REST or measurement_type is MeasurementType.NONE:
        return MIN_RR
    if applicable is None:
        return 0.0
    return calculate_rr(value, applicable)


def can_submit_with_rr(rr_value: float) -> bool:
    return rr_value >= MIN_RR


def _league_minimums_cache_prefix(league_id: LeagueId) -> str:
    # Trailing separator so league 1 never matches league 10.
    return f"league_minimums:{league_id}:"


async def get_league_minimums(league_id: LeagueId, cache: TTLCache) -> list[LeagueActivityWithName]:
    cache_key = f"{_league_minimums_cache_prefix(league_id)}activities"
    cached = cache.get(cache_key)
    if cached is not None:
        return list(cached)

    minimums = await get_league_activities(league_id)
    cache.set(cache_key, tuple(minimums), config.league_minimums_cache_ttl_seconds)
    logger.debug(f"Cached {len(minimums)} activity minimums for league {league_id}")
    return minimums


async def get_league_minimum_for_activity(
    league_id: LeagueId, activity_id: ActivityId, cache: TTLCache
) -> LeagueActivityWithName:
    for minimum in await get_league_minimums(league_id, cache):
        if minimum.activity_id == activity_id:
            return minimum
    raise NotFoundError(f"Activity {activity_id} is not configured for league {league_id}")


async def save_activity_minimum(
    league_id: LeagueId,
    activity_id: ActivityId,
    min_value: float,
    max_value: float,
    overrides: AgeGroupOverrides,
    modified_by: UserId,
    cache: TTLCache,
) -> None:
    errors = validate_minimum_config(min_value, max_value, overrides)
    if len(errors) > 0:
        raise ValidationError("Invalid activity minimum configuration", errors)

    updated = await update_league_activity_minimum(
        league_id, activity_id, min_value, max_value, overrides, modified_by
    )
    if not updated:
        raise NotFoundError(f"Activity {activity_id} is not configured for league {league_id}")
    cache.invalidate(_league_minimums_cache_prefix(league_id))


async def reset_activity_minimum(
    league_id: LeagueId, activity_id: ActivityId, modified_by: UserId, cache: TTLCache
) -> None:
    if not await reset_league_activity_minimum(league_id, activity_id, modified_by):
        raise NotFoundError(f"Activity {activity_id} is not configured for league {league_id}")
    cache.invalidate(_league_minimums_cache_prefix(league_id))
