"""Message-composing exception links with captured stacks.

These links form the display chain of a structured error: each one prepends
its message to the text of its cause and remembers where it was created.
"""

from __future__ import annotations

import traceback

from errchain.config import get_settings


def _capture_stack() -> traceback.StackSummary:
    settings = get_settings()
    if not settings.capture_stack:
        return traceback.StackSummary()
    frames = traceback.extract_stack()
    while frames and frames[-1].filename == __file__:
        frames.pop()
    return traceback.StackSummary.from_list(frames[-settings.stack_limit :])


def _portable_stack(stack: traceback.StackSummary) -> traceback.StackSummary:
    return traceback.StackSummary.from_list(
        [(frame.filename, frame.lineno, frame.name, frame.line) for frame in stack]
    )


class TracedError(Exception):
    """A message, an optional cause and the stack it was created on."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        stack: traceback.StackSummary | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._cause = cause
        self._stack = stack if stack is not None else traceback.StackSummary()
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def stack(self) -> traceback.StackSummary:
        return self._stack

    def unwrap(self) -> BaseException | None:
        return self._cause

    def format_trace(self) -> str:
        parts: list[str] = []
        if self._cause is not None:
            parts.append(format_trace(self._cause))
        parts.append(self._message)
        parts.append("".join(self._stack.format()).rstrip("\n"))
        return "\n".join(part for part in parts if part)

    def __reduce__(self):
        return (
            type(self),
            (self._message, self._cause, _portable_stack(self._stack)),
        )

    def __str__(self) -> str:
        if self._cause is None:
            return self._message
        cause_text = str(self._cause)
        if not self._message:
            return cause_text
        if not cause_text:
            return self._message
        return f"{self._message}: {cause_text}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


def new(message: str) -> TracedError:
    return TracedError(message, stack=_capture_stack())


def wrap(err: BaseException | None, message: str) -> TracedError:
    """Prepend *message* to *err*; wrapping ``None`` yields a fresh leaf."""
    return TracedError(message, cause=err, stack=_capture_stack())


def cause(err: BaseException | None) -> BaseException | None:
    """Follow ``TracedError`` causes down to the last link."""
    while isinstance(err, TracedError) and err.cause is not None:
        err = err.cause
    return err


def format_trace(err: BaseException | None) -> str:
    if err is None:
        return ""
    formatter = getattr(err, "format_trace", None)
    if callable(formatter):
        return formatter()
    return "".join(traceback.format_exception_only(err)).rstrip("\n")
