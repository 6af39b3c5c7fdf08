"""Wire models for the Ryanair web API (camelCase on the wire, snake_case here)."""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


DataT = TypeVar('DataT')


class RyanairModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


# =============================================================================
# GraphQL envelope
# =============================================================================


class GraphqlErrorSchema(RyanairModel):
    message: str = ''
    path: Optional[List[Any]] = None


class GraphqlResponse(RyanairModel, Generic[DataT]):
    data: Optional[DataT] = None
    errors: Optional[List[GraphqlErrorSchema]] = None

    def error_summary(self) -> str:
        if not self.errors:
            return ''
        return '; '.join(error.message for error in self.errors)


# =============================================================================
# usrprof/v2/accountLogin
# =============================================================================


class AccountLoginRequest(RyanairModel):
    email: str
    password: str


class AccountLoginResponse(RyanairModel):
    customer_id: str = Field(alias='customerId', min_length=1)
    token: str = Field(min_length=1)


# =============================================================================
# orders/v2/orders/{customerId}
# =============================================================================


class OrderFlightSchema(RyanairModel):
    booking_id: str = Field(alias='bookingId')


class OrderItemSchema(RyanairModel):
    flights: List[OrderFlightSchema] = []


class OrdersResponse(RyanairModel):
    items: List[OrderItemSchema] = []


# =============================================================================
# bookingfa graphql - getBookingByBookingId
# =============================================================================


class JourneySchema(RyanairModel):
    depart_utc: str = Field(alias='departUTC')


class TripInfoSchema(RyanairModel):
    trip_id: str = Field(alias='tripId')
    session_token: str = Field(alias='sessionToken')
    journeys: Optional[List[JourneySchema]] = None


class BookingByIdData(RyanairModel):
    booking: Optional[TripInfoSchema] = Field(default=None, alias='getBookingByBookingId')


# =============================================================================
# basketapi graphql - createBasketForActiveTrip
# =============================================================================


class BasketSchema(RyanairModel):
    id: Optional[str] = None


class CreateBasketData(RyanairModel):
    basket: Optional[BasketSchema] = Field(default=None, alias='createBasketForActiveTrip')


# =============================================================================
# catalogapi graphql - seats
# =============================================================================


class SeatAvailabilitySchema(RyanairModel):
    unavailable_seats: List[str] = Field(default=[], alias='unavailableSeats')
    equipment_model: str = Field(alias='equipmentModel')


class SeatsData(RyanairModel):
    seats: Optional[List[SeatAvailabilitySchema]] = None


# =============================================================================
# booking/v5/.../seatmap?aircraftModel=
# =============================================================================


class SeatMapSeatSchema(RyanairModel):
    row: int


class SeatMapSchema(RyanairModel):
    seat_rows: List[List[SeatMapSeatSchema]] = Field(default=[], alias='seatRows')

    def row_numbers(self) -> List[List[int]]:
        return [[seat.row for seat in seats] for seats in self.seat_rows]
