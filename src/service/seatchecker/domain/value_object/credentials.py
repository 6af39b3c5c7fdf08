import attrs


@attrs.define(frozen=True)
class Credentials:
    email: str
    password: str = attrs.field(repr=False)


@attrs.define(frozen=True)
class SessionToken:
    customer_id: str
    token: str = attrs.field(repr=False)
