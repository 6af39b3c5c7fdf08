"""GraphQL documents sent to the Ryanair booking, basket and catalog APIs."""

from typing import Any


GET_BOOKING_BY_BOOKING_ID = """
query GetBookingByBookingId($bookingInfo: GetBookingByBookingIdInputType, $authToken: String!) {
    getBookingByBookingId(bookingInfo: $bookingInfo, authToken: $authToken) {
        sessionToken
        tripId
        journeys {
            ...JourneysFrag
        }
    }
}
fragment JourneysFrag on BookingJourneyResponseModelType {
    departUTC
}
"""

CREATE_BASKET_FOR_ACTIVE_TRIP = """
mutation CreateBasketForActiveTrip($tripId: String!, $sessionToken: String) {
    createBasketForActiveTrip(tripId: $tripId, sessionToken: $sessionToken) {
        ...BasketCommon
    }
}
fragment BasketCommon on BasketType {
    id
}
"""

GET_SEATS_QUERY = """
query GetSeatsQuery($basketId: String!) {
    seats(basketId: $basketId) {
        ...SeatsResponse
    }
}
fragment SeatsResponse on SeatAvailability {
    unavailableSeats
    equipmentModel
}
"""


def build_graphql_body(*, query: str, variables: dict[str, Any]) -> dict[str, Any]:
    return {'query': query, 'variables': variables}
