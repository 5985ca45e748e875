from __future__ import annotations

import asyncio
import functools
import inspect
import traceback
from collections.abc import Callable, Mapping
from typing import NoReturn, ParamSpec, TypeVar

from loguru import logger

from errchain.config import get_settings
from errchain.errors import ErrorType, StructuredError, add_error_context
from errchain.models import describe

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int | None = None) -> str:
    if limit is None:
        limit = get_settings().log_traceback_tail
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def log_error(
    err: BaseException,
    message: str = "Error occurred",
    *,
    level: str = "ERROR",
    log=logger,  # loguru logger-like
) -> None:
    """Log *err* with its type and context bound as extras."""
    info = describe(err)
    log.bind(
        error_type=info.error_type.name,
        error_context=info.context,
        fail_fast=info.fail_fast,
    ).opt(exception=err).log(level, "{}: {}", message, info.message)


def log_and_wrap(
    exc: BaseException,
    error_type: ErrorType,
    message: str,
    log=logger,  # loguru logger-like
    context: Mapping[str, str] | None = None,
) -> NoReturn:
    formatted_tb = _format_tail(exc)
    log.opt(exception=exc).error("{}: {}\n{}", message, exc, formatted_tb)
    wrapped = error_type.wrap(exc, message)
    for key, value in (context or {}).items():
        wrapped = add_error_context(wrapped, key, value)
    raise wrapped from exc


def _passes_through(exc: BaseException, error_type: ErrorType) -> bool:
    return isinstance(exc, StructuredError) and exc.error_type is error_type


def wrap_exceptions(
    error_type: ErrorType, message: str | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to log short traceback and wrap errors as *error_type*."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        text = message or f"{func.__qualname__} failed"

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    if _passes_through(exc, error_type):
                        raise
                    log_and_wrap(exc, error_type, text)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                if _passes_through(exc, error_type):
                    raise
                log_and_wrap(exc, error_type, text)

        return sync_wrapper  # type: ignore[return-value]

    return decorator
