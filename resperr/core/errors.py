"""Exceptions annotated with an HTTP status code and a user-facing message."""

from __future__ import annotations

import json
from typing import Any

from resperr.core.resolve import explicit_message
from resperr.core.resolve import explicit_status
from resperr.core.resolve import status_code
from resperr.core.resolve import status_text


def _format(template: str, args: tuple[Any, ...]) -> str:
    if not args:
        return template
    return template % args


class APIError(Exception):
    """An exception carrying an optional status, user message and cause.

    ``status=0`` and ``message=""`` both mean "unset": lookups then defer to
    the cause. Instances are not meant to be modified after construction.
    """

    def __init__(
        self,
        *,
        status: int = 0,
        message: str = "",
        cause: BaseException | None = None,
    ) -> None:
        if isinstance(status, bool) or not isinstance(status, int):
            raise TypeError(f"status must be an int, got {type(status).__name__}")
        if not isinstance(message, str):
            raise TypeError(f"message must be a str, got {type(message).__name__}")
        super().__init__(message)
        self._status = status
        self._message = message
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def status(self) -> int:
        return self._status

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def unwrap(self) -> BaseException | tuple[BaseException, ...] | None:
        # ``raise APIError(...) from exc`` replaces __cause__; keep both links.
        raised_from = self.__cause__
        if raised_from is None or raised_from is self._cause:
            return self._cause
        if self._cause is None:
            return raised_from
        return (self._cause, raised_from)

    def _links(self) -> tuple[BaseException, ...]:
        links = self.unwrap()
        if links is None:
            return ()
        if isinstance(links, BaseException):
            return (links,)
        return links

    def local_status_code(self) -> int:
        """Return the status set on this node only."""
        return self._status

    def local_user_message(self) -> str:
        """Return the message set on this node only."""
        return self._message

    def status_code(self) -> int:
        """Return the own status, else the first explicit status of the cause, else 0."""
        if self._status:
            return self._status
        for cause in self._links():
            code = explicit_status(cause)
            if code:
                return code
        return 0

    def user_message(self) -> str:
        """Return the own message, else the first message of the cause, else ""."""
        if self._message:
            return self._message
        for cause in self._links():
            message = explicit_message(cause)
            if message:
                return message
        return ""

    def __str__(self) -> str:
        # Collapse re-wraps of APIError into one annotation around the innermost cause.
        err = self._cause
        message = self._message
        while isinstance(err, APIError):
            message = message or err.message
            err = err.cause

        # Full ladder, not just 0/400/500: a wrapped timeout displays as 504.
        code = status_code(self)
        text = str(err) if err is not None else status_text(code)
        if message:
            return f"[{code}] <{message}> {text}"
        return f"[{code}] {text}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self._status!r}, "
            f"message={self._message!r}, cause={self._cause!r})"
        )


class FormattedError(Exception):
    """A %-formatted error that wraps every exception passed as an argument."""

    def __init__(self, template: str, *args: Any) -> None:
        super().__init__(_format(template, args))
        self._wrapped = tuple(arg for arg in args if isinstance(arg, BaseException))
        if len(self._wrapped) == 1:
            self.__cause__ = self._wrapped[0]

    def unwrap(self) -> BaseException | tuple[BaseException, ...] | None:
        if not self._wrapped:
            return None
        if len(self._wrapped) == 1:
            return self._wrapped[0]
        return self._wrapped


def new(status: int, template: str, *args: Any) -> APIError:
    """Build an error with status whose cause is the formatted template.

    Exceptions among args stay reachable through the cause chain, so
    ``new(502, "upstream: %s", exc)`` keeps exc's own annotations.
    """
    return APIError(status=status, cause=FormattedError(template, *args))


def not_found(path: str) -> APIError:
    """Return a 404 error whose user message names the missing request path."""
    return APIError(
        status=404,
        message=f"could not find path {json.dumps(path, ensure_ascii=False)}",
    )


def with_status_code(err: BaseException | None, status: int) -> APIError:
    """Wrap err with an explicit status code. err may be ``None``."""
    return APIError(status=status, cause=err)


def with_user_message(err: BaseException | None, message: str) -> APIError:
    """Wrap err with a user-facing message. err may be ``None``."""
    return APIError(message=message, cause=err)


def with_user_messagef(err: BaseException | None, template: str, *args: Any) -> APIError:
    """Wrap err with a %-formatted user-facing message. err may be ``None``."""
    return APIError(message=_format(template, args), cause=err)
