from datetime import datetime, timezone
from typing import Callable, Optional

import anyio
from opentelemetry import trace

from src.platform.exception.exceptions import SeatcheckerError
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.dto.check_request import CheckRequest
from src.service.seatchecker.app.dto.check_result import CheckResult
from src.service.seatchecker.app.interface.i_auth_client import IAuthClient
from src.service.seatchecker.app.interface.i_basket_service import IBasketService
from src.service.seatchecker.app.interface.i_booking_resolver import IBookingResolver
from src.service.seatchecker.app.interface.i_notifier import INotifier
from src.service.seatchecker.app.interface.i_seat_map_query import ISeatMapQuery
from src.service.seatchecker.domain.departure_domain import has_departed, select_next_departure
from src.service.seatchecker.domain.seat_state_calculator import calculate_seat_state
from src.service.seatchecker.domain.value_object import SeatState


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CheckSeatsUseCase:
    """
    Check seats use case - one full pass over the Ryanair API chain

    Flow:
    1. Login (email/password -> customer id + token)
    2. Resolve nearest active booking -> trip id + session token + journeys
    3. Open a basket for the trip
    4. Fetch unavailable seats, then the row count for the aircraft
    5. Calculate empty window/middle/aisle seats
    6. Departure bookkeeping (which flight the stored state belongs to)
    7. Notify only when the seat state changed

    Never raises: every failure becomes a CheckResult with status 500 that echoes
    the caller's previous state.
    """

    def __init__(
        self,
        *,
        auth_client: IAuthClient,
        booking_resolver: IBookingResolver,
        basket_service: IBasketService,
        seat_map_query: ISeatMapQuery,
        notifier: INotifier,
        deadline_seconds: Optional[float] = None,
        clock: Callable[[], datetime] = utc_now,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.auth_client = auth_client
        self.booking_resolver = booking_resolver
        self.basket_service = basket_service
        self.seat_map_query = seat_map_query
        self.notifier = notifier
        self.deadline_seconds = deadline_seconds
        self.clock = clock
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def check_seats(self, *, request: CheckRequest) -> CheckResult:
        with self.tracer.start_as_current_span('use_case.check_seats') as span:
            try:
                if self.deadline_seconds is None:
                    result = await self._run(request=request)
                else:
                    with anyio.fail_after(self.deadline_seconds):
                        result = await self._run(request=request)
            except SeatcheckerError as e:
                span.record_exception(e)
                span.set_status(trace.StatusCode.ERROR, e.message)
                return CheckResult.failure(request=request, message=e.message)
            except TimeoutError:
                message = f'seat check exceeded deadline of {self.deadline_seconds}s'
                Logger.base.error(f'⏱️ [Seatchecker] {message}')
                span.set_status(trace.StatusCode.ERROR, message)
                return CheckResult.failure(request=request, message=message)
            except Exception as e:
                Logger.base.exception(f'💥 [Seatchecker] Unexpected failure: {e}')
                span.record_exception(e)
                span.set_status(trace.StatusCode.ERROR, str(e))
                return CheckResult.failure(request=request, message=str(e) or type(e).__name__)

            span.set_attribute('seatchecker.notified', result.notified)
            return result

    async def _run(self, *, request: CheckRequest) -> CheckResult:
        token = await self.auth_client.login(credentials=request.credentials)
        booking_id = await self.booking_resolver.resolve_booking_id(token=token)
        trip_session = await self.booking_resolver.resolve_trip_session(
            token=token, booking_id=booking_id
        )
        basket_id = await self.basket_service.create_basket(trip_session=trip_session)

        snapshot = await self.seat_map_query.seats(basket_id=basket_id)
        row_count = await self.seat_map_query.row_count(equipment_model=snapshot.equipment_model)
        seat_state = calculate_seat_state(row_count, snapshot.unavailable_seats)
        Logger.base.info(
            f'💺 [Seatchecker] {snapshot.equipment_model}: {row_count} rows, '
            f'{len(snapshot.unavailable_seats)} unavailable -> {seat_state.describe()}'
        )

        now = self.clock()
        departure = request.departure
        forced_zero = False
        if departure is None:
            departure = select_next_departure(trip_session.journeys, now=now)
        elif has_departed(departure, now=now):
            # The tracked flight is gone; reset so the next flight starts from a clean diff
            Logger.base.info(f'🛬 [Seatchecker] Departure {departure.isoformat()} has passed')
            forced_zero = True
            seat_state = SeatState.zero()
            # No flight left: keep the departed one so later polls stay at zero
            departure = select_next_departure(trip_session.journeys, now=now) or departure

        notified = False
        if not forced_zero and seat_state != request.previous_seat_state:
            Logger.base.info(
                f'🔔 [Seatchecker] Seat state changed: '
                f'{request.previous_seat_state.describe() if request.previous_seat_state else None} '
                f'-> {seat_state.describe()}'
            )
            await self.notifier.notify(topic=request.ntfy_topic, message=seat_state.describe())
            notified = True

        return CheckResult.success(
            seat_state=seat_state,
            departure=departure,
            notified=notified,
            message=seat_state.describe(),
        )
