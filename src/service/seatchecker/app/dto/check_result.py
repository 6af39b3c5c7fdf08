from datetime import datetime
from typing import Optional

import attrs

from src.service.seatchecker.app.dto.check_request import CheckRequest
from src.service.seatchecker.domain.enum.check_status import CheckStatus
from src.service.seatchecker.domain.value_object import SeatState


@attrs.define(frozen=True)
class CheckResult:
    """
    Outcome of one check, persisted by the caller and fed back as the next input.

    A failed check echoes the request's state so the caller never loses it.
    """

    status: CheckStatus
    message: str
    seat_state: Optional[SeatState] = None
    departure: Optional[datetime] = None
    notified: bool = False

    @property
    def is_success(self) -> bool:
        return self.status == CheckStatus.SUCCESS

    @classmethod
    def success(
        cls,
        *,
        seat_state: SeatState,
        departure: Optional[datetime],
        notified: bool,
        message: str = '',
    ) -> 'CheckResult':
        return cls(
            status=CheckStatus.SUCCESS,
            message=message,
            seat_state=seat_state,
            departure=departure,
            notified=notified,
        )

    @classmethod
    def failure(cls, *, request: CheckRequest, message: str) -> 'CheckResult':
        return cls(
            status=CheckStatus.FAILURE,
            message=message,
            seat_state=request.previous_seat_state,
            departure=request.departure,
        )
