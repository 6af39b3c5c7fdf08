"""
Local Seatchecker runner - runs the check outside Lambda

Reads credentials and topic from settings (SEATCHECKER_* env vars or .env).
With SEATCHECKER_POLL_INTERVAL_SECONDS > 0 it keeps polling, feeding every
output back as the next input, the way the scheduler does in production.

Usage:
    PYTHONPATH=$PWD python src/service/seatchecker/driving_adapter/start_seatchecker.py
"""

from typing import Any

import anyio

from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.driving_adapter.lambda_handler import handle_event


def build_initial_event() -> dict[str, Any]:
    return {
        'ryanair_email': settings.SEATCHECKER_RYANAIR_EMAIL,
        'ryanair_password': settings.SEATCHECKER_RYANAIR_PASSWORD.get_secret_value(),
        'ntfy_topic': settings.SEATCHECKER_NTFY_TOPIC,
        'seat_state': None,
        'departure': None,
    }


async def run(*, poll_interval_seconds: float) -> dict[str, Any]:
    event = build_initial_event()
    while True:
        output = await handle_event(event)
        Logger.base.info(
            f'📤 [Seatchecker Runner] status={output.get("status")} '
            f'seat_state={output.get("seat_state")} departure={output.get("departure")}'
        )
        if poll_interval_seconds <= 0:
            return output
        # Keep the last good state; a failed check already echoes it
        event = {
            **event,
            'seat_state': output.get('seat_state'),
            'departure': output.get('departure'),
        }
        await anyio.sleep(poll_interval_seconds)


def main() -> None:
    Logger.base.info('🚀 [Seatchecker Runner] Starting...')
    try:
        anyio.run(lambda: run(poll_interval_seconds=settings.SEATCHECKER_POLL_INTERVAL_SECONDS))
    except KeyboardInterrupt:
        Logger.base.info('🛑 [Seatchecker Runner] Interrupted')
    finally:
        cleanup()
        Logger.base.info('📊 [Seatchecker Runner] Tracing shutdown complete')


if __name__ == '__main__':
    main()
