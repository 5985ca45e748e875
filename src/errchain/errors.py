"""Structured errors with a type, string context and a composed message chain.

Every structured error keeps two links to what it wraps. ``original`` is the
value it was built from and drives identity matching; ``formatted`` is a
:class:`~errchain.traced.TracedError` chain that composes the display message
and carries stack traces. Both are kept so that an error matches every value
it was built from, whichever of the two paths that value survives on.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType

from errchain import chain, traced

DETAIL_KEY = "detail"
KEY_KEY = "key"
POINTER_KEY = "pointer"
FAIL_FAST_KEY = "failfast"


def _format(message: str, args: tuple[object, ...]) -> str:
    return message % args if args else message


class ErrorType(IntEnum):
    NO_TYPE = 0
    NOT_FOUND = 1
    INVALID_PARAMETER = 2
    MISSING_PARAMETER = 3
    VALIDATION = 4
    FORBIDDEN = 5
    PUBLIC = 6
    BAD_REQUEST = 7
    UNAUTHORIZED = 8

    def new(self, message: str) -> StructuredError:
        base = traced.new(message)
        return StructuredError(self, base, base)

    def newf(self, message: str, *args: object) -> StructuredError:
        base = traced.new(_format(message, args))
        return StructuredError(self, base, base)

    def new_with_detail(self, message: str) -> StructuredError:
        return with_detail(self.new(message), message)

    def new_with_key_and_detail(self, key: str, message: str) -> StructuredError:
        return with_key_and_detail(self.new(message), key, message)

    def new_with_detailf(self, message: str, *args: object) -> StructuredError:
        text = _format(message, args)
        return with_detail(self.new(text), text)

    def wrap(self, err: BaseException | None, message: str) -> StructuredError:
        return self.wrapf(err, message)

    def wrapf(
        self, err: BaseException | None, message: str, *args: object
    ) -> StructuredError:
        """Wrap *err* with a formatted message and force this type on the result."""
        text = _format(message, args)
        if isinstance(err, StructuredError):
            return StructuredError(
                self, err, traced.wrap(err.formatted, text), err.context
            )
        return StructuredError(self, err, traced.wrap(err, text))


class StructuredError(Exception):
    """An immutable link in an error chain.

    Instances are built by the module-level constructors and by the
    :class:`ErrorType` builders rather than directly.
    """

    def __init__(
        self,
        error_type: ErrorType,
        original: BaseException | None,
        formatted: BaseException,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self._error_type = error_type
        self._original = original
        self._formatted = formatted
        self._context = MappingProxyType(dict(context)) if context else None
        if original is not None:
            self.__cause__ = original

    @property
    def error_type(self) -> ErrorType:
        return self._error_type

    @property
    def original(self) -> BaseException | None:
        return self._original

    @property
    def formatted(self) -> BaseException:
        return self._formatted

    @property
    def context(self) -> Mapping[str, str] | None:
        return self._context

    def unwrap(self) -> BaseException | None:
        return self._original

    def matches(self, target: BaseException) -> bool:
        if chain.matches(self._formatted, target):
            return True
        for current in chain.walk(self._original):
            if current is target or current == target:
                return True
        return False

    def format_trace(self) -> str:
        return traced.format_trace(self._formatted)

    def __reduce__(self):
        context = dict(self._context) if self._context else None
        return (
            type(self),
            (self._error_type, self._original, self._formatted, context),
        )

    def __str__(self) -> str:
        base = str(self._formatted)
        # key and detail are skipped when the wrapped text already shows them
        parts = [part for part in (key(self), detail(self)) if part not in base]
        parts.append(base)
        return ": ".join(part for part in parts if part)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._error_type.name}, {str(self)!r})"


def new(message: str) -> StructuredError:
    return ErrorType.NO_TYPE.new(message)


def newf(message: str, *args: object) -> StructuredError:
    return ErrorType.NO_TYPE.newf(message, *args)


def wrap(err: BaseException | None, message: str) -> StructuredError:
    return wrapf(err, message)


def wrapf(err: BaseException | None, message: str, *args: object) -> StructuredError:
    """Wrap *err*, keeping its type and context when it is a structured error.

    Wrapping ``None`` gives a fresh leaf error carrying only *message*.
    """
    if isinstance(err, StructuredError):
        return err.error_type.wrapf(err, message, *args)
    return ErrorType.NO_TYPE.wrapf(err, message, *args)


def with_cause(
    err: BaseException | None, cause_err: BaseException | None
) -> BaseException | None:
    """Put *cause_err* underneath *err*, typically a sentinel.

    The result matches both errors and their chains. Contexts are merged with
    *err*'s entries winning; *err*'s type wins unless it is ``NO_TYPE``.
    With no *err* there is nothing to attach to and *cause_err* is returned.
    """
    if err is None:
        return cause_err

    merged: dict[str, str] = {}
    error_type = ErrorType.NO_TYPE

    if isinstance(cause_err, StructuredError):
        merged.update(cause_err.context or {})
        error_type = cause_err.error_type

    if isinstance(err, StructuredError):
        merged.update(err.context or {})
        if err.error_type is not ErrorType.NO_TYPE:
            error_type = err.error_type

    return StructuredError(error_type, err, traced.wrap(cause_err, str(err)), merged)


def cause(err: BaseException | None) -> BaseException | None:
    """Return the bottom-most error that is not a structured error."""
    if isinstance(err, StructuredError):
        return cause(traced.cause(err.formatted))
    return traced.cause(err)


def format_trace(err: BaseException | None) -> str:
    return traced.format_trace(err)


def add_error_context(
    err: BaseException | None, key: str, value: str
) -> StructuredError:
    if isinstance(err, StructuredError):
        context = dict(err.context or {})
        context[key] = value
        return StructuredError(err.error_type, err.original, err.formatted, context)

    if err is None:
        return StructuredError(ErrorType.NO_TYPE, None, traced.new(""), {key: value})

    return StructuredError(ErrorType.NO_TYPE, err, err, {key: value})


def get_error_context(err: BaseException | None) -> dict[str, str] | None:
    if isinstance(err, StructuredError) and err.context is not None:
        return dict(err.context)
    return None


def get_error_context_value(err: BaseException | None, key: str) -> str:
    if isinstance(err, StructuredError) and err.context is not None:
        return err.context.get(key, "")
    return ""


add_context = add_error_context
get_context = get_error_context
get_context_value = get_error_context_value


def get_type(err: BaseException | None) -> ErrorType:
    if isinstance(err, StructuredError):
        return err.error_type
    return ErrorType.NO_TYPE


def with_pointer(err: BaseException | None, pointer: str) -> StructuredError:
    return add_error_context(err, POINTER_KEY, pointer)


def with_detail(err: BaseException | None, detail: str) -> StructuredError:
    return add_error_context(err, DETAIL_KEY, detail)


def with_key(err: BaseException | None, key: str) -> StructuredError:
    return add_error_context(err, KEY_KEY, key)


def with_key_and_detail(
    err: BaseException | None, key: str, detail: str
) -> StructuredError:
    return with_detail(with_key(err, key), detail)


def pointer(err: BaseException | None) -> str:
    return get_error_context_value(err, POINTER_KEY)


def detail(err: BaseException | None) -> str:
    return get_error_context_value(err, DETAIL_KEY)


def key(err: BaseException | None) -> str:
    return get_error_context_value(err, KEY_KEY)


def with_fail_fast(err: BaseException | None) -> StructuredError:
    """Mark *err* as not resolvable by retries."""
    return add_error_context(err, FAIL_FAST_KEY, "true")


def is_fail_fast(err: BaseException | None) -> bool:
    return get_error_context_value(err, FAIL_FAST_KEY) == "true"
