"""
`Logger.io` - call logging for adapters and use cases.

    @Logger.io
    async def login(self, *, credentials: Credentials) -> SessionToken: ...

logs at DEBUG the (masked) kwargs on entry and the return value with the call
duration on exit. Exceptions are logged once, at the frame that raised them:
CustomBaseError subclasses at ERROR without a stack trace (they are expected
upstream failures), anything else with one.
"""

from functools import wraps
from inspect import iscoroutinefunction, signature
from time import perf_counter
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    mask_mapping,
    mask_sensitive,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')

# Frames between the decorated function's caller and the loguru call
_WRAPPER_DEPTH = 2


class LoguruIO:
    def __init__(
        self, logger: 'LoguruLogger', *, reraise: bool = True, truncate: bool = True
    ) -> None:
        self._logger = logger
        self.reraise = reraise
        self.truncate = truncate
        self.call_target = ''
        self.skip_self = False

    def _bound(self) -> 'LoguruLogger':
        return self._logger.bind(**{ExtraField.CALL_TARGET: self.call_target}).opt(
            depth=_WRAPPER_DEPTH
        )

    def _render(self, data: Any) -> Any:
        return truncate_content(data) if self.truncate else data

    def log_call(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not settings.DEBUG:  # masking is not free
            return
        # `self` repr only repeats the call target
        shown_args = args[1:] if self.skip_self else args
        self._bound().debug(
            f'→ args: {self._render(mask_sensitive(shown_args))}, '
            f'kwargs: {self._render(mask_mapping(kwargs))}'
        )

    def log_return(self, return_value: Any, started: float) -> None:
        if not settings.DEBUG:
            return
        elapsed_ms = (perf_counter() - started) * 1000
        self._bound().debug(
            f'← return ({elapsed_ms:.1f}ms): {self._render(mask_sensitive(return_value))}'
        )

    def log_exception(self, e: Exception, started: float) -> None:
        # Already logged by an inner decorated call
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        elapsed_ms = (perf_counter() - started) * 1000
        message = f'✗ ({elapsed_ms:.1f}ms) {type(e).__name__}: {e}'
        if isinstance(e, CustomBaseError):
            self._bound().error(message)
        else:
            self._bound().exception(message)

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.call_target = build_call_target_func_path(func)
        self.skip_self = next(iter(signature(func).parameters), None) in ('self', 'cls')

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                started = perf_counter()
                self.log_call(args, kwargs)
                try:
                    return_value = await func(*args, **kwargs)
                except Exception as e:
                    self.log_exception(e, started)
                    if self.reraise:
                        raise
                    return None
                self.log_return(return_value, started)
                return return_value

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            started = perf_counter()
            self.log_call(args, kwargs)
            try:
                return_value = func(*args, **kwargs)
            except Exception as e:
                self.log_exception(e, started)
                if self.reraise:
                    raise
                return None
            self.log_return(return_value, started)
            return return_value

        return cast(_F, self._hide_from_traceback(sync_wrapper))


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, reraise=reraise, truncate=truncate)
        if func:
            return decorator(func)
        return decorator
