from collections.abc import Sequence

from heliclockter import datetime_utc

from fitleague.database import database
from fitleague.models.db.entry import (
    EffortEntry,
    EffortEntryWithMember,
    EntryStatus,
    RejectedEntryRow,
)
from fitleague.utils.db import fetch_all_parsed, fetch_one_parsed
from fitleague.utils.id_types import EntryId, UserId


async def get_entry_with_member(entry_id: EntryId) -> EffortEntryWithMember | None:
    return await fetch_one_parsed(
        database,
        EffortEntryWithMember,
        """
        SELECT
            e.*,
            lm.league_id,
            lm.team_id,
            lm.user_id
        FROM effort_entries e
        JOIN league_members lm ON lm.id = e.league_member_id
        WHERE e.id = :entry_id
        """,
        values={"entry_id": entry_id},
    )


async def update_entry_status(
    entry_id: EntryId,
    *,
    expected_status: EntryStatus,
    new_status: EntryStatus,
    modified_by: UserId | None,
    rejection_reason: str | None,
    modified: datetime_utc,
) -> EffortEntry | None:
    """
    Move one entry to ``new_status`` only if it still has ``expected_status``.

    Returns None when another writer changed the entry first.
    """
    return await fetch_one_parsed(
        database,
        EffortEntry,
        """
        UPDATE effort_entries
        SET status = :new_status,
            rejection_reason = :rejection_reason,
            modified_by = :modified_by,
            modified = :modified
        WHERE id = :entry_id
          AND status = :expected_status
        RETURNING *
        """,
        values={
            "entry_id": entry_id,
            "expected_status": expected_status.value,
            "new_status": new_status.value,
            "rejection_reason": rejection_reason,
            "modified_by": modified_by,
            "modified": modified,
        },
    )


async def get_pending_entries_created_before(cutoff: datetime_utc) -> list[EffortEntry]:
    return await fetch_all_parsed(
        database,
        EffortEntry,
        """
        SELECT *
        FROM effort_entries
        WHERE status = 'PENDING'
          AND created < :cutoff
        ORDER BY created ASC, id ASC
        """,
        values={"cutoff": cutoff},
    )


async def approve_pending_entries(
    entry_ids: Sequence[EntryId], modified: datetime_utc
) -> list[EntryId]:
    """
    Approve the given entries as the system (no reviewing user).

    The status condition is evaluated by the database at write time, so an entry
    that a reviewer rejected after it was fetched stays rejected.
    """
    if len(entry_ids) < 1:
        return []

    rows = await database.fetch_all(
        """
        UPDATE effort_entries
        SET status = 'APPROVED',
            modified_by = NULL,
            modified = :modified
        WHERE id = ANY(:entry_ids)
          AND status = 'PENDING'
        RETURNING id
        """,
        values={"entry_ids": [int(entry_id) for entry_id in entry_ids], "modified": modified},
    )
    return sorted(EntryId(int(row._mapping["id"])) for row in rows)


async def get_rejected_entries_for_user(user_id: UserId) -> list[RejectedEntryRow]:
    return await fetch_all_parsed(
        database,
        RejectedEntryRow,
        """
        SELECT
            lm.league_id,
            COALESCE(l.name, 'Unknown league') AS league_name,
            e.date
        FROM effort_entries e
        JOIN league_members lm ON lm.id = e.league_member_id
        LEFT JOIN leagues l ON l.id = lm.league_id
        WHERE lm.user_id = :user_id
          AND e.status = 'REJECTED'
        """,
        values={"user_id": user_id},
    )
