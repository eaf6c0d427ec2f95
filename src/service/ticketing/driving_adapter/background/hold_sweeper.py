"""
Hold sweeper: returns reservations older than TICKET_HOLD_SECONDS to the pool.

Runs for the life of the app inside the lifespan task group. A failed sweep is logged
and retried on the next tick.
"""

import anyio

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.release_expired_holds_use_case import (
    ReleaseExpiredHoldsUseCase,
)


async def run_hold_sweeper(*, interval_seconds: float = settings.HOLD_SWEEP_INTERVAL_SECONDS):
    Logger.base.info(f'🧹 [HOLD_SWEEPER] Started, every {interval_seconds}s')
    while True:
        await sweep_once()
        await anyio.sleep(interval_seconds)


async def sweep_once() -> int:
    use_case = ReleaseExpiredHoldsUseCase(uow=container.unit_of_work())
    try:
        return await use_case.execute()
    except Exception as e:
        Logger.base.error(f'❌ [HOLD_SWEEPER] Sweep failed: {e}')
        return 0
