from datetime import datetime, timedelta, timezone

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics


class ReleaseExpiredHoldsUseCase:
    """reserved -> available for every hold older than TICKET_HOLD_SECONDS"""

    def __init__(
        self, *, uow: AbstractUnitOfWork, hold_seconds: int = settings.TICKET_HOLD_SECONDS
    ) -> None:
        self.uow = uow
        self.hold_seconds = hold_seconds

    async def execute(self) -> int:
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=self.hold_seconds)

        async with self.uow:
            released = await self.uow.ticket_command_repo.release_expired_holds(cutoff=cutoff)
            await self.uow.commit()

        if released:
            metrics.record_expired_holds(count=released)
            Logger.base.info(f'⌛ [HOLD_SWEEPER] Released {released} expired holds')
        return released
