"""Scheduler process for the periodic balance sweeps.

Wakes once per ``worker_interval_seconds``. On the 1st of a month it runs
that month's accrual for every company with policies; on Jan 1 it first
carries the previous year forward. Sweeps are idempotent, so a restart on
the same day does no harm.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from leavemarker.config import get_settings
from leavemarker.db import dispose_engine, get_session_factory
from leavemarker.services.accrual import AccrualRunResult, run_scheduled_sweeps

logger = logging.getLogger(__name__)


async def run_once(target_date: date | None = None) -> list[AccrualRunResult]:
    """Run the sweeps due on ``target_date`` in a fresh session."""
    if target_date is None:
        target_date = date.today()

    session_factory = get_session_factory()
    async with session_factory() as session:
        results = await run_scheduled_sweeps(session, target_date)

    for result in results:
        logger.info(
            "%s company=%s year=%s month=%s updated=%d skipped=%d already_processed=%s",
            result.kind.value,
            result.company_id,
            result.year,
            result.month,
            result.balances_updated,
            result.skipped,
            result.already_processed,
        )
    return results


async def run_sweep_loop() -> None:
    interval = get_settings().worker_interval_seconds
    logger.info("Leave sweep worker started (interval=%ss)", interval)

    try:
        while True:
            today = date.today()
            try:
                await run_once(today)
            except Exception:
                logger.exception("Sweep run failed for %s", today)
            await asyncio.sleep(interval)
    finally:
        await dispose_engine()


def main() -> None:
    """Entry point for the worker process."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    asyncio.run(run_sweep_loop())


if __name__ == "__main__":
    main()
