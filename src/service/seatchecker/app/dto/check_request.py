from datetime import datetime
from typing import Optional

import attrs

from src.service.seatchecker.domain.value_object import Credentials, SeatState


@attrs.define(frozen=True)
class CheckRequest:
    """
    One invocation's input.

    previous_seat_state and departure come from the caller's last CheckResult;
    both are None on the first run.
    """

    credentials: Credentials
    ntfy_topic: str
    previous_seat_state: Optional[SeatState] = None
    departure: Optional[datetime] = None
