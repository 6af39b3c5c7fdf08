from pathlib import Path
from typing import Literal, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    DEBUG: bool = True  # Set to False in production
    SERVICE_NAME: str = 'seatchecker'

    # Ryanair API (paths change between API versions, keep them out of the adapters)
    RYANAIR_BASE_URL: str = 'https://www.ryanair.com'
    RYANAIR_LOGIN_PATH: str = 'api/usrprof/v2/accountLogin'
    RYANAIR_ORDERS_PATH: str = 'api/orders/v2/orders'
    RYANAIR_BOOKING_GRAPHQL_PATH: str = 'api/bookingfa/en-gb/graphql'
    RYANAIR_BASKET_GRAPHQL_PATH: str = 'api/basketapi/en-gb/graphql'
    RYANAIR_CATALOG_GRAPHQL_PATH: str = 'api/catalogapi/en-gb/graphql'
    RYANAIR_SEATMAP_PATH: str = 'api/booking/v5/en-ie/res/seatmap'

    # Notification sink
    NTFY_BASE_URL: str = 'https://ntfy.sh'

    # HTTP client
    HTTP_TIMEOUT_SECONDS: float = 10.0  # Per request (connect + read)
    HTTP_MAX_RETRIES: int = 2  # GET requests only
    HTTP_RETRY_BACKOFF_SECONDS: float = 0.5  # Doubled on every attempt

    # Seat check
    CHECK_DEADLINE_SECONDS: Optional[float] = 60.0  # Whole pipeline, None disables
    ROW_COUNT_STRATEGY: Literal['row_list_length', 'max_row_number'] = 'row_list_length'

    # OpenTelemetry
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False

    # Local runner input (the Lambda entrypoint receives these in the event instead)
    SEATCHECKER_RYANAIR_EMAIL: str = ''
    SEATCHECKER_RYANAIR_PASSWORD: SecretStr = SecretStr('')
    SEATCHECKER_NTFY_TOPIC: str = ''
    SEATCHECKER_POLL_INTERVAL_SECONDS: float = 0  # 0 runs a single check

    @field_validator('HTTP_MAX_RETRIES')
    @classmethod
    def non_negative_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError('HTTP_MAX_RETRIES must be >= 0')
        return v

    @field_validator('CHECK_DEADLINE_SECONDS', mode='before')
    @classmethod
    def disable_deadline(cls, v: Optional[float | str]) -> Optional[float | str]:
        if isinstance(v, str) and v.strip().lower() in ('', 'none', '0'):
            return None
        if v == 0:
            return None
        return v


settings = Settings()  # type: ignore
