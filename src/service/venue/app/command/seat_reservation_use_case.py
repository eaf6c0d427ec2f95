"""
Seat/Section Reservation Coordinator

Holds on arena seats are all-or-nothing: every named seat flips Available -> Selected in
one conditional update, or the transaction is rolled back and nothing changes.
Release is unconditional and idempotent.
"""

from datetime import datetime, timezone
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.identity.domain.entity.user_entity import UserEntity


class SeatReservationUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @staticmethod
    def _distinct(seat_ids: List[int]) -> List[int]:
        if not seat_ids:
            raise ValidationError('seat_ids cannot be empty')
        return sorted(set(seat_ids))

    @Logger.io
    async def reserve_seats(self, *, seat_ids: List[int], attendee: UserEntity) -> List[int]:
        ids = self._distinct(seat_ids)
        assert attendee.id is not None

        async with self.uow:
            existing = await self.uow.seat_query_repo.find_existing_ids(seat_ids=ids)
            if missing := [seat_id for seat_id in ids if seat_id not in existing]:
                raise NotFoundError(f'Seats not found: {missing}')

            reserved = await self.uow.seat_command_repo.reserve(
                seat_ids=ids, attendee_id=attendee.id, held_at=datetime.now(timezone.utc)
            )
            if len(reserved) != len(ids):
                unavailable = sorted(set(ids) - set(reserved))
                metrics.record_seat_reservation(result='conflict', count=len(ids))
                # leaving the block without commit rolls back the partial update
                raise ConflictError(f'Seats no longer available: {unavailable}')

            await self.uow.commit()

        metrics.record_seat_reservation(result='success', count=len(ids))
        Logger.base.info(f'💺 [RESERVE_SEATS] Attendee {attendee.id} holds seats {ids}')
        return ids

    @Logger.io
    async def release_seats(self, *, seat_ids: List[int]) -> int:
        ids = self._distinct(seat_ids)

        async with self.uow:
            released = await self.uow.seat_command_repo.release(seat_ids=ids)
            await self.uow.commit()

        Logger.base.info(f'🔓 [RELEASE_SEATS] Released {released} seats')
        return released
