import math
from collections.abc import Callable, Iterable, Sequence
from typing import Final

from heliclockter import datetime_utc, timedelta

from fitleague.config import config
from fitleague.logic.permissions import Permission, authorize
from fitleague.logic.roles import resolve_role_context
from fitleague.models.db.entry import (
    EffortEntry,
    EffortEntryWithMember,
    EntryStatus,
    RejectedEntryRow,
)
from fitleague.models.db.league import LeagueRole
from fitleague.models.entries import (
    AutoApproveResult,
    EntryReviewBody,
    RejectedLeagueSummary,
    RejectedSubmissionsSummary,
)
from fitleague.models.roles import RoleContext
from fitleague.sql.entries import (
    approve_pending_entries,
    get_entry_with_member,
    get_pending_entries_created_before,
    get_rejected_entries_for_user,
    update_entry_status,
)
from fitleague.utils.cache import TTLCache
from fitleague.utils.errors import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from fitleague.utils.id_types import EntryId, LeagueId, UserId
from fitleague.utils.logging import logger

AUTO_APPROVE_HOURS: Final = 48

type Clock = Callable[[], datetime_utc]


def rejected_summary_cache_prefix(user_id: UserId) -> str:
    return f"rejected_summary:{user_id}:"


def check_can_review_entry(
    reviewer: RoleContext,
    entry: EffortEntryWithMember,
    *,
    target_status: EntryStatus,
    override: bool = False,
) -> EntryStatus:
    """
    Check that ``reviewer`` may move ``entry`` to ``target_status``.

    Returns the status the entry is expected to have at write time.
    """
    if reviewer.role is None:
        raise ForbiddenError("You are not a member of this league")

    league_wide = authorize(reviewer.role, Permission.VALIDATE_ANY_SUBMISSION)
    team_scoped = (
        authorize(reviewer.role, Permission.VALIDATE_TEAM_SUBMISSIONS)
        and reviewer.member is not None
        and reviewer.member.team_id is not None
        and reviewer.member.team_id == entry.team_id
    )
    if not league_wide and not team_scoped:
        raise ForbiddenError("You do not have permission to validate this submission")

    if entry.user_id == reviewer.user_id and reviewer.role is not LeagueRole.HOST:
        raise ForbiddenError("You cannot validate your own submission")

    if entry.status is EntryStatus.PENDING:
        return EntryStatus.PENDING

    if not override:
        raise ValidationError.for_field("status", "Submission has already been reviewed")
    if not authorize(reviewer.role, Permission.OVERRIDE_CAPTAIN_APPROVALS):
        raise ForbiddenError("Only governors and hosts can override a review")
    if entry.status is target_status:
        raise ValidationError.for_field(
            "status", f"Submission is already {target_status.value.lower()}"
        )
    return entry.status


async def review_entry(
    entry_id: EntryId,
    reviewer_id: UserId,
    body: EntryReviewBody,
    cache: TTLCache,
    clock: Clock = datetime_utc.now,
) -> EffortEntry:
    entry = await get_entry_with_member(entry_id)
    if entry is None:
        raise NotFoundError("Submission not found")

    reviewer = await resolve_role_context(reviewer_id, entry.league_id)
    expected_status = check_can_review_entry(
        reviewer, entry, target_status=body.status, override=body.override
    )

    updated = await update_entry_status(
        entry_id,
        expected_status=expected_status,
        new_status=body.status,
        modified_by=reviewer_id,
        rejection_reason=body.rejection_reason if body.status is EntryStatus.REJECTED else None,
        modified=clock(),
    )
    if updated is None:
        raise ValidationError.for_field(
            "status", "Submission was changed by someone else, reload and try again"
        )

    cache.invalidate(rejected_summary_cache_prefix(entry.user_id))
    logger.info(
        f"Entry {entry_id} moved from {expected_status.value} to {body.status.value} "
        f"by user {reviewer_id} ({reviewer.role.value if reviewer.role else 'none'})"
    )
    return updated


def _auto_approve_cutoff(now: datetime_utc, cutoff_hours: float) -> datetime_utc:
    try:
        if isinstance(cutoff_hours, bool) or not math.isfinite(cutoff_hours) or cutoff_hours <= 0:
            raise ValidationError.for_field(
                "cutoff_hours", "Cutoff must be a positive number of hours"
            )
        return now - timedelta(hours=cutoff_hours)
    except OverflowError as exc:
        raise ValidationError.for_field("cutoff_hours", "Cutoff is out of range") from exc


def select_entries_for_auto_approval(
    entries: Iterable[EffortEntry], now: datetime_utc, cutoff_hours: float = AUTO_APPROVE_HOURS
) -> list[EntryId]:
    """Pending entries created strictly before ``now - cutoff_hours``, oldest first."""
    cutoff = _auto_approve_cutoff(now, cutoff_hours)
    eligible = [
        entry
        for entry in entries
        if entry.status is EntryStatus.PENDING and entry.created < cutoff
    ]
    eligible.sort(key=lambda entry: (entry.created, entry.id))
    return [entry.id for entry in eligible]


async def sweep_auto_approve(
    cutoff_hours: float = AUTO_APPROVE_HOURS, clock: Clock = datetime_utc.now
) -> AutoApproveResult:
    """
    Approve every submission left pending for longer than ``cutoff_hours``.

    Meant to be triggered by an external scheduler. Rerunning it is safe: the update only
    touches the ids fetched in this pass and only while they are still pending.
    """
    now = clock()
    cutoff = _auto_approve_cutoff(now, cutoff_hours)

    try:
        candidates = await get_pending_entries_created_before(cutoff)
        entry_ids = select_entries_for_auto_approval(candidates, now, cutoff_hours)
        if len(entry_ids) < 1:
            logger.info("No entries to auto-approve")
            return AutoApproveResult(approved_count=0, entry_ids=[])

        approved_ids = await approve_pending_entries(entry_ids, now)
    except ValidationError:
        raise
    except Exception as exc:
        logger.error(f"Auto-approve sweep failed, will retry on the next run: {exc}")
        raise InternalError("Failed to auto-approve pending entries") from exc

    skipped = len(entry_ids) - len(approved_ids)
    if skipped > 0:
        logger.info(f"{skipped} entries were reviewed while the sweep was running")
    logger.info(f"Auto-approved {len(approved_ids)} entries")
    return AutoApproveResult(approved_count=len(approved_ids), entry_ids=approved_ids)


def summarize_rejected_entries(rows: Sequence[RejectedEntryRow]) -> list[RejectedLeagueSummary]:
    by_league: dict[LeagueId, RejectedLeagueSummary] = {}
    for row in rows:
        summary = by_league.get(row.league_id)
        if summary is None:
            by_league[row.league_id] = RejectedLeagueSummary(
                league_id=row.league_id,
                league_name=row.league_name,
                rejected_count=1,
                latest_date=row.date,
            )
            continue

        summary.rejected_count += 1
        if summary.latest_date is None or row.date > summary.latest_date:
            summary.latest_date = row.date

    # Most recent rejection first, then the league with most rejections.
    return sorted(
        by_league.values(),
        key=lambda summary: (
            summary.latest_date is not None,
            summary.latest_date.toordinal() if summary.latest_date is not None else 0,
            summary.rejected_count,
        ),
        reverse=True,
    )


async def get_rejected_submissions_summary(
    user_id: UserId, cache: TTLCache, *, force: bool = False
) -> RejectedSubmissionsSummary:
    cache_key = f"{rejected_summary_cache_prefix(user_id)}leagues"
    ttl_seconds = config.rejected_summary_cache_ttl_seconds

    if not force:
        cached = cache.get(cache_key)
        if cached is not None:
            return cached.model_copy(update={"cached": True})

    leagues = summarize_rejected_entries(await get_rejected_entries_for_user(user_id))
    summary = RejectedSubmissionsSummary(
        total_rejected=sum(league.rejected_count for league in leagues),
        leagues=leagues,
        cached=False,
        cache_ttl_seconds=ttl_seconds,
    )
    cache.set(cache_key, summary, ttl_seconds)
    return summary
