from datetime import datetime, time, timezone

from heliclockter import datetime_utc, timedelta

_END_OF_DAY = time(23, 59, 59, 999_000, tzinfo=timezone.utc)


def get_reupload_cutoff(rejected_at: datetime_utc, tz_offset_minutes: int = 0) -> datetime_utc:
    """
    A rejected entry may be re-submitted until the end of the day after the rejection,
    in the submitter's local time.

    ``tz_offset_minutes`` follows the browser convention: minutes to add to local time to
    get UTC, so UTC+2 is -120.
    """
    offset = timedelta(minutes=tz_offset_minutes)
    # Local wall-clock time, carried in a UTC-tagged datetime.
    rejected_local = datetime.fromtimestamp(rejected_at.timestamp(), tz=timezone.utc) - offset
    cutoff_local = datetime.combine(rejected_local.date() + timedelta(days=1), _END_OF_DAY)
    return datetime_utc.from_datetime(cutoff_local + offset)


def is_reupload_window_open(
    rejected_at: datetime_utc | None, tz_offset_minutes: int = 0, now: datetime_utc | None = None
) -> bool:
    if rejected_at is None:
        return False
    current = now if now is not None else datetime_utc.now()
    return current <= get_reupload_cutoff(rejected_at, tz_offset_minutes)
