"""Chain-inspection primitives that work on any exception.

A link is unwrapped through its ``unwrap()`` method when it has one, and
through ``__cause__`` otherwise. A link may also customise matching with a
``matches(target)`` method.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, TypeVar, runtime_checkable

E = TypeVar("E", bound=BaseException)


@runtime_checkable
class ChainLink(Protocol):
    def unwrap(self) -> BaseException | None: ...

    def matches(self, target: BaseException) -> bool: ...


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the immediate cause of *err*, or ``None``."""
    if err is None:
        return None
    step = getattr(err, "unwrap", None)
    if callable(step):
        return step()
    return err.__cause__


def walk(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def _same(err: BaseException, target: BaseException) -> bool:
    return err is target or err == target


def matches(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any error in *err*'s chain matches *target*."""
    if err is None or target is None:
        return err is target
    for link in walk(err):
        if _same(link, target):
            return True
        check = getattr(link, "matches", None)
        if callable(check) and check(target):
            return True
    return False


def find(err: BaseException | None, kind: type[E]) -> E | None:
    """Return the first error in the chain that is an instance of *kind*."""
    for link in walk(err):
        if isinstance(link, kind):
            return link
    return None
