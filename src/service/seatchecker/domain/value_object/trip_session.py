from typing import Tuple

import attrs


@attrs.define(frozen=True)
class TripSession:
    """Trip-scoped credentials needed to open a basket."""

    trip_id: str
    session_token: str = attrs.field(repr=False)
    journeys: Tuple[str, ...] = attrs.field(factory=tuple, converter=tuple)  # departUTC values
