"""
Seatchecker Lambda entrypoint

Each invocation runs one check on its own HTTP client; the tracer provider lives
for the whole process (cold start) and is flushed before returning, since Lambda
freezes the process between invocations.

Usage (AWS Lambda handler setting):
    src.service.seatchecker.driving_adapter.lambda_handler.handler
"""

from typing import Any

import anyio
from pydantic import ValidationError

from src.platform.config.di import container, reset_http_transport, setup
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.dto.check_result import CheckResult
from src.service.seatchecker.domain.enum.check_status import CheckStatus
from src.service.seatchecker.driving_adapter.schema.invocation_schema import (
    SeatcheckerEventSchema,
    SeatcheckerResultSchema,
)


async def handle_event(event: Any) -> dict[str, Any]:
    try:
        invocation = SeatcheckerEventSchema.model_validate(event)
    except ValidationError as e:
        message = f'invalid invocation event: {e.error_count()} validation error(s)'
        Logger.base.error(f'❌ [Seatchecker Handler] {message}: {e.errors(include_input=False)}')
        echoed = (
            {k: v for k, v in event.items() if k != 'ryanair_password'}
            if isinstance(event, dict)
            else {}
        )
        return {**echoed, 'status': int(CheckStatus.FAILURE), 'message': message}

    try:
        result = await run_check(invocation=invocation)
    except Exception as e:
        # Bootstrap or client teardown failed; the caller still gets its state back
        Logger.base.exception(f'💥 [Seatchecker Handler] Invocation failed: {e}')
        result = CheckResult.failure(
            request=invocation.to_check_request(), message=str(e) or type(e).__name__
        )

    if result.is_success:
        Logger.base.info(f'✅ [Seatchecker Handler] Check finished: {result.message}')
    else:
        Logger.base.error(f'❌ [Seatchecker Handler] Check failed: {result.message}')
    return SeatcheckerResultSchema.from_result(event=invocation, result=result).model_dump(
        mode='json'
    )


async def run_check(*, invocation: SeatcheckerEventSchema) -> CheckResult:
    tracing = setup()
    try:
        with container.tracer().start_as_current_span('handler'):
            Logger.base.info(
                f'📥 [Seatchecker Handler] Received event for topic {invocation.ntfy_topic}'
            )
            transport = container.http_transport()
            try:
                use_case = container.check_seats_use_case()
                return await use_case.check_seats(request=invocation.to_check_request())
            finally:
                await transport.aclose()
                reset_http_transport()
    finally:
        tracing.force_flush()


def handler(event: Any, context: Any = None) -> dict[str, Any]:
    return anyio.run(handle_event, event)
