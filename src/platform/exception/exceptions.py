from typing import Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


# =============================================================================
# Transport errors
# =============================================================================


class UpstreamError(CustomBaseError):
    """Any failure talking to an upstream HTTP API."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class TransportError(UpstreamError):
    """Request could not be built, sent or completed (network, timeout)."""


class HttpStatusError(UpstreamError):
    def __init__(self, message: str, *, response_status_code: int) -> None:
        self.response_status_code = response_status_code
        super().__init__(message)


class ResponseDecodeError(UpstreamError):
    """Response arrived with a success status but is not the expected JSON shape."""


# =============================================================================
# Seatchecker pipeline errors
# =============================================================================


class SeatcheckerError(CustomBaseError):
    def __init__(
        self, message: str, *, cause: Optional[Exception] = None, status_code: int = 500
    ) -> None:
        self.cause = cause
        if cause is not None:
            message = f'{message}: {cause}'
        super().__init__(message, status_code)


class AuthError(SeatcheckerError):
    pass


class ResolutionError(SeatcheckerError):
    pass


class BasketError(SeatcheckerError):
    pass


class SeatQueryError(SeatcheckerError):
    pass


class RowCountError(SeatcheckerError):
    pass


class NotificationError(SeatcheckerError):
    pass
