from datetime import datetime
from typing import Optional

import attrs

from src.service.venue.domain.enum.seat_status import SeatStatus


@attrs.define
class SeatEntity:
    section_id: int
    number: int
    status: SeatStatus = SeatStatus.AVAILABLE
    held_by: Optional[int] = None
    held_at: Optional[datetime] = None
    id: Optional[int] = None
    section_name: Optional[str] = None

    @property
    def label(self) -> str:
        return f'{self.section_name}-{self.number}' if self.section_name else str(self.number)
