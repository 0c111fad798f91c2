"""Status code and user message lookup over an exception's cause chain."""

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from resperr.core.capabilities import StatusCoder
from resperr.core.capabilities import UserMessenger
from resperr.core.capabilities import temporary_hint
from resperr.core.capabilities import timeout_hint
from resperr.core.chain import all_as
from resperr.core.chain import walk


def status_text(code: int) -> str:
    """Return the standard reason phrase for code, or "" if it has none."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def _own(node: object, local_name: str, name: str) -> Any:
    # Wrappers exposing a node-local accessor are read without recursing:
    # the walk reaches their causes next, in the same order.
    local = getattr(node, local_name, None)
    if callable(local):
        return local()
    return getattr(node, name)()


def explicit_status(err: BaseException | None) -> int:
    """Return the first non-zero status in err's chain, or 0."""
    for coder in all_as(err, StatusCoder):
        code = _own(coder, "local_status_code", "status_code")
        if code:
            return code
    return 0


def explicit_message(err: BaseException | None) -> str:
    """Return the first non-empty user message in err's chain, or ""."""
    for messenger in all_as(err, UserMessenger):
        message = _own(messenger, "local_user_message", "user_message")
        if message:
            return message
    return ""


def _first_hint(err: BaseException, hint_of: Callable[[object], bool | None]) -> bool:
    for node in walk(err):
        hint = hint_of(node)
        if hint is not None:
            return hint
    return False


def status_code(err: BaseException | None) -> int:
    """Return the HTTP status code associated with err.

    An explicit non-zero status anywhere in the chain wins, nearest first.
    Without one, a timeout maps to 504 and a temporary failure to 503. A
    chain that only carries a user message is taken as a client error (400),
    and anything else is a 500. ``None`` means no error and returns 200.
    """
    if err is None:
        return HTTPStatus.OK.value

    code = explicit_status(err)
    if code:
        return int(code)
    if _first_hint(err, timeout_hint):
        return HTTPStatus.GATEWAY_TIMEOUT.value
    if _first_hint(err, temporary_hint):
        return HTTPStatus.SERVICE_UNAVAILABLE.value
    if explicit_message(err):
        return HTTPStatus.BAD_REQUEST.value
    return HTTPStatus.INTERNAL_SERVER_ERROR.value


def user_message(err: BaseException | None) -> str:
    """Return the user-facing message associated with err.

    Falls back to the reason phrase of ``status_code(err)``, so an
    unannotated exception reads "Internal Server Error". ``None`` returns "".
    """
    if err is None:
        return ""
    message = explicit_message(err)
    if message:
        return message
    return status_text(status_code(err))
