import attrs


@attrs.define(frozen=True)
class SeatState:
    """Empty seats per category; two of each per row on a 3-3 single-aisle cabin."""

    window: int = attrs.field(validator=attrs.validators.ge(0))
    middle: int = attrs.field(validator=attrs.validators.ge(0))
    aisle: int = attrs.field(validator=attrs.validators.ge(0))

    @classmethod
    def zero(cls) -> 'SeatState':
        return cls(window=0, middle=0, aisle=0)

    def describe(self) -> str:
        return f'Window: {self.window}, Middle: {self.middle}, Aisle: {self.aisle}'
