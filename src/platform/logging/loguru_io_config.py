"""
Loguru sinks for the seatchecker.

Every record carries the service context and the id of the active OpenTelemetry
trace, so a CloudWatch line can be matched to its trace in the tracing backend.
stdlib logging (httpx, opentelemetry exporters) is routed into the same sinks.
"""

from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger
from opentelemetry import trace


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger, Record

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

SENSITIVE_KEYWORDS = frozenset(
    {
        'password',
        'ryanair_password',
        'token',
        'session_token',
        'auth_token',
        'authToken',
        'sessionToken',
        'credentials',
    }
)

NO_TRACE = '-' * 8


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    TRACE_ID = 'trace_id'
    CALL_TARGET = 'call_target'


def current_trace_id() -> str:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return NO_TRACE
    return trace.format_trace_id(span_context.trace_id)


def _patch_record(record: 'Record') -> None:
    extra = record['extra']
    extra.setdefault(ExtraField.SERVICE_CONTEXT, get_service_context())
    extra.setdefault(ExtraField.CALL_TARGET, '')
    extra[ExtraField.TRACE_ID] = current_trace_id()


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru, keeping the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        # httpcore emits one DEBUG line per socket event
        if record.name.startswith('httpcore') and record.levelno <= logging.DEBUG:
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(
            level, f'[{record.name}] {record.getMessage()}'
        )


log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        f'<m>{{extra[{ExtraField.TRACE_ID}]:.8}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
    )
)


def _configure(logger: 'LoguruLogger') -> 'LoguruLogger':
    logger.remove()
    patched = logger.patch(_patch_record)
    min_level = 'DEBUG' if settings.DEBUG else 'INFO'

    # Lambda ships stdout to CloudWatch
    patched.add(sys.stdout, format=log_format, level=min_level, enqueue=True)

    if settings.DEBUG:
        hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
        prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
        patched.add(
            f'{LOG_DIR}/{prefix}{hour}.log',
            format=log_format,
            level=min_level,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
        )
    return patched


custom_logger = _configure(loguru_logger)

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
