#!/usr/bin/env python3
import argparse
import asyncio

from fitleague.config import config
from fitleague.database import database
from fitleague.logic.entries import sweep_auto_approve


async def async_main() -> None:
    parser = argparse.ArgumentParser(
        description="Approve effort entries that have been pending for longer than the cutoff."
    )
    parser.add_argument(
        "--cutoff-hours",
        type=float,
        default=float(config.auto_approve_cutoff_hours),
        help="Age in hours after which a pending entry is approved automatically.",
    )
    args = parser.parse_args()

    if args.cutoff_hours <= 0:
        raise ValueError("--cutoff-hours must be positive")

    await database.connect()
    try:
        result = await sweep_auto_approve(args.cutoff_hours)
    finally:
        await database.disconnect()

    print(f"Approved {result.approved_count} entries: {result.entry_ids}")


if __name__ == "__main__":
    asyncio.run(async_main())
