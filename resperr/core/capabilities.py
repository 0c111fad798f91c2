"""Optional behaviors an exception in a cause chain may implement."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class StatusCoder(Protocol):
    """An error with an associated HTTP status code.

    ``0`` means the error has no opinion and resolution keeps searching.
    """

    def status_code(self) -> int: ...


@runtime_checkable
class UserMessenger(Protocol):
    """An error with an associated user-facing message.

    ``""`` means the error has no opinion and resolution keeps searching.
    """

    def user_message(self) -> str: ...


@runtime_checkable
class ValidationError(Protocol):
    """An error carrying validation messages for request fields."""

    def validation_errors(self) -> Mapping[str, list[str]]: ...


@runtime_checkable
class Timeout(Protocol):
    def timeout(self) -> bool: ...


@runtime_checkable
class Temporary(Protocol):
    def temporary(self) -> bool: ...


_CAPABILITY_METHODS: dict[type, str] = {
    StatusCoder: "status_code",
    UserMessenger: "user_message",
    ValidationError: "validation_errors",
    Timeout: "timeout",
    Temporary: "temporary",
}


def implements(obj: object, capability: type) -> bool:
    """Report whether obj provides capability.

    Known capabilities require their method to be callable: plenty of
    exceptions (starlette's ``HTTPException`` among them) carry a plain
    ``status_code`` attribute that is not a ``StatusCoder``.
    """
    method_name = _CAPABILITY_METHODS.get(capability)
    if method_name is None:
        return isinstance(obj, capability)
    return callable(getattr(obj, method_name, None))


def timeout_hint(err: object) -> bool | None:
    """Return the timeout signal of a single node, or ``None`` if it has none.

    The builtin ``TimeoutError`` (and so ``asyncio.TimeoutError``) counts as a
    node reporting ``timeout() == True``.
    """
    if isinstance(err, TimeoutError):
        return True
    if implements(err, Timeout):
        return bool(err.timeout())  # type: ignore[attr-defined]
    return None


def temporary_hint(err: object) -> bool | None:
    """Return the temporary-failure signal of a single node, or ``None``."""
    if implements(err, Temporary):
        return bool(err.temporary())  # type: ignore[attr-defined]
    return None
