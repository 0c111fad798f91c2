"""Depth-first traversal of an exception's cause chain."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

from resperr.core.capabilities import implements

T = TypeVar("T")


@dataclass(frozen=True)
class Single:
    """A node wrapping exactly one cause."""

    error: BaseException


@dataclass(frozen=True)
class Multiple:
    """A node aggregating several independent causes, in order."""

    errors: tuple[BaseException, ...]


Cause = Single | Multiple | None


def unwrap(err: BaseException) -> Cause:
    """Return the cause link of a single node.

    Exception groups fan out to their members. Otherwise an ``unwrap()``
    method wins over ``__cause__``, which wins over an unsuppressed
    ``__context__``, the same order Python uses when printing a traceback.
    """
    if isinstance(err, BaseExceptionGroup):
        return Multiple(tuple(err.exceptions))

    method = getattr(err, "unwrap", None)
    if callable(method):
        return _as_cause(method())

    if err.__cause__ is not None:
        return Single(err.__cause__)
    if err.__context__ is not None and not err.__suppress_context__:
        return Single(err.__context__)
    return None


def _as_cause(value: object) -> Cause:
    if value is None:
        return None
    if isinstance(value, BaseException):
        return Single(value)
    if not isinstance(value, (tuple, list)):
        return None
    errors = tuple(item for item in value if isinstance(item, BaseException))
    if not errors:
        return None
    return Multiple(errors)


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield err and every node below it, depth-first and pre-order.

    Nodes reachable through more than one path are yielded once per path.
    Cycles are not detected: a self-referencing chain never terminates.
    """
    if err is None:
        return
    stack: list[BaseException] = [err]
    while stack:
        node = stack.pop()
        yield node
        cause = unwrap(node)
        if isinstance(cause, Single):
            stack.append(cause.error)
        elif isinstance(cause, Multiple):
            stack.extend(reversed(cause.errors))


def all_as(err: BaseException | None, capability: type[T]) -> Iterator[T]:
    """Yield every part of err's cause tree that provides capability.

    A node is yielded when it implements the capability itself, and the
    object returned by its ``as_capability(capability)`` method, if any, is
    yielded right after it. The iterator is lazy: a consumer that stops
    after the first match leaves the rest of the chain unvisited.
    """
    for node in walk(err):
        if implements(node, capability):
            yield node  # type: ignore[misc]
        convert = getattr(node, "as_capability", None)
        if callable(convert):
            target = convert(capability)
            if target is not None:
                yield target


def first_as(err: BaseException | None, capability: type[T]) -> T | None:
    """Return the nearest part of err's cause tree providing capability."""
    return next(all_as(err, capability), None)
