from typing import Tuple

import attrs


@attrs.define(frozen=True)
class SeatSnapshot:
    unavailable_seats: Tuple[str, ...] = attrs.field(converter=tuple)  # e.g. '12A'
    equipment_model: str
