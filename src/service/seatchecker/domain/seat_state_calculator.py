"""
Seat State Calculator - pure functions, no I/O

Seat code layout: '<row:2 digits><column letter>', e.g. '01A', '12F'.
The column letter (index 2) maps to a category on a 3-3 cabin:

    A B C | D E F
    W M A | A M W
"""

from collections.abc import Iterable, Sequence

from src.service.seatchecker.domain.enum.row_count_strategy import RowCountStrategy
from src.service.seatchecker.domain.value_object.seat_state import SeatState


SEATS_PER_CATEGORY_PER_ROW = 2
COLUMN_INDEX = 2

WINDOW_COLUMNS = frozenset('AF')
MIDDLE_COLUMNS = frozenset('BE')
AISLE_COLUMNS = frozenset('CD')


def calculate_seat_state(row_count: int, unavailable_seats: Iterable[str]) -> SeatState:
    """
    Count empty seats per category.

    Every category starts at 2 x row_count and each unavailable seat removes one
    seat from its category. Codes with an unknown column (or too short to have one)
    are ignored. Counters never go below zero.
    """
    if row_count < 0:
        raise ValueError(f'row_count must be >= 0, got {row_count}')

    window = middle = aisle = row_count * SEATS_PER_CATEGORY_PER_ROW
    for code in unavailable_seats:
        if len(code) <= COLUMN_INDEX:
            continue
        column = code[COLUMN_INDEX]
        if column in WINDOW_COLUMNS:
            window -= 1
        elif column in MIDDLE_COLUMNS:
            middle -= 1
        elif column in AISLE_COLUMNS:
            aisle -= 1

    return SeatState(window=max(window, 0), middle=max(middle, 0), aisle=max(aisle, 0))


# =============================================================================
# Row count - seat map gives rows as lists of seats: [[{row: 1}, ...], ...]
# =============================================================================


def count_rows_by_list_length(seat_rows: Sequence[Sequence[int]]) -> int:
    """Number of rows listed in the seat map (a missing row 13 is not counted)."""
    return len(seat_rows)


def count_rows_by_max_row_number(seat_rows: Sequence[Sequence[int]]) -> int:
    """Highest row number found (a missing row 13 is still counted)."""
    return max((row for seats in seat_rows for row in seats), default=0)


def count_rows(seat_rows: Sequence[Sequence[int]], *, strategy: RowCountStrategy) -> int:
    if strategy == RowCountStrategy.MAX_ROW_NUMBER:
        return count_rows_by_max_row_number(seat_rows)
    return count_rows_by_list_length(seat_rows)
