"""
Invocation event in/out of the seatchecker handler.

The output has the input's shape plus `status` and `message`, so the caller can
feed it straight back as the next invocation's input.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer, field_validator

from src.service.seatchecker.app.dto.check_request import CheckRequest
from src.service.seatchecker.app.dto.check_result import CheckResult
from src.service.seatchecker.domain.departure_domain import parse_departure
from src.service.seatchecker.domain.value_object import Credentials, SeatState


class SeatStateSchema(BaseModel):
    window: int = Field(ge=0)
    middle: int = Field(ge=0)
    aisle: int = Field(ge=0)

    @classmethod
    def from_seat_state(cls, seat_state: SeatState) -> 'SeatStateSchema':
        return cls(window=seat_state.window, middle=seat_state.middle, aisle=seat_state.aisle)

    def to_seat_state(self) -> SeatState:
        return SeatState(window=self.window, middle=self.middle, aisle=self.aisle)


class SeatcheckerEventSchema(BaseModel):
    model_config = ConfigDict(
        extra='ignore',
        json_schema_extra={
            'example': {
                'ryanair_email': 'traveller@example.com',
                'ryanair_password': '********',
                'ntfy_topic': 'my-seatchecker-topic',
                'seat_state': {'window': 4, 'middle': 0, 'aisle': 2},
                'departure': '2024-06-01T05:25:00Z',
            }
        },
    )

    ryanair_email: str = Field(min_length=1)
    ryanair_password: SecretStr
    ntfy_topic: str = Field(min_length=1)
    seat_state: Optional[SeatStateSchema] = None
    departure: Optional[datetime] = None

    @field_validator('departure', mode='before')
    @classmethod
    def parse_departure_value(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, str):
            return parse_departure(v)
        return v

    def to_check_request(self) -> CheckRequest:
        return CheckRequest(
            credentials=Credentials(
                email=self.ryanair_email,
                password=self.ryanair_password.get_secret_value(),
            ),
            ntfy_topic=self.ntfy_topic,
            previous_seat_state=self.seat_state.to_seat_state() if self.seat_state else None,
            departure=self.departure,
        )


class SeatcheckerResultSchema(SeatcheckerEventSchema):
    status: int
    message: str = ''

    @field_serializer('ryanair_password', when_used='json')
    def dump_password(self, v: SecretStr) -> str:
        # Echoed back in clear so the output can be resupplied as the next input
        return v.get_secret_value()

    @field_serializer('departure', when_used='json')
    def dump_departure(self, v: Optional[datetime]) -> Optional[str]:
        return v.isoformat() if v else None

    @classmethod
    def from_result(
        cls, *, event: SeatcheckerEventSchema, result: CheckResult
    ) -> 'SeatcheckerResultSchema':
        return cls(
            ryanair_email=event.ryanair_email,
            ryanair_password=event.ryanair_password,
            ntfy_topic=event.ntfy_topic,
            seat_state=(
                SeatStateSchema.from_seat_state(result.seat_state) if result.seat_state else None
            ),
            departure=result.departure,
            status=int(result.status),
            message=result.message,
        )
