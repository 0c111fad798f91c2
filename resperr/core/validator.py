"""Accumulate per-field validation messages into a single 400 error."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import Any
from urllib.parse import unquote_plus
from urllib.parse import urlencode

from resperr.core.capabilities import ValidationError
from resperr.core.chain import first_as

_EMPTY: Mapping[str, list[str]] = MappingProxyType({})


class Validator:
    """Collect validation messages keyed by field name.

    A fresh ``Validator()`` allocates nothing until the first message is
    recorded, so the valid path stays free. Validators are not thread-safe:
    use one per request. ``err()`` hands out a view over the same dict, so
    recording more messages after calling it changes the returned error;
    don't do that.
    """

    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: dict[str, list[str]] | None = None

    def add(self, field: str, message: str, *args: Any) -> None:
        """Record the %-formatted message for field."""
        if self._fields is None:
            self._fields = {}
        text = message % args if args else message
        self._fields.setdefault(field, []).append(text)

    def add_if(self, field: str, cond: bool, message: str, *args: Any) -> None:
        """Record the message for field if cond is true."""
        if not cond:
            return
        self.add(field, message, *args)

    def add_if_unset(self, field: str, cond: bool, message: str, *args: Any) -> None:
        """Record the message if cond is true and field has no message yet."""
        if self._has(field):
            return
        self.add_if(field, cond, message, *args)

    def ensure(self, field: str, ok: bool, message: str, *args: Any) -> None:
        """Record the message for field unless ok is true."""
        self.add_if(field, not ok, message, *args)

    def ensure_if(self, field: str, ok: bool, message: str, *args: Any) -> None:
        """Record the message unless ok is true or field already has a message."""
        self.add_if_unset(field, not ok, message, *args)

    def valid(self) -> bool:
        """Report whether no validation failure has been recorded."""
        return not self._fields

    def err(self) -> ValidatorError | None:
        """Return the recorded failures as an error, or ``None`` if valid."""
        if not self._fields:
            return None
        return ValidatorError(self._fields)

    def _has(self, field: str) -> bool:
        return self._fields is not None and bool(self._fields.get(field))

    def __repr__(self) -> str:
        return f"Validator({self._fields or dict()!r})"


class ValidatorError(Exception):
    """Field validation failures; always reported as 400 Bad Request."""

    def __init__(self, fields: dict[str, list[str]]) -> None:
        super().__init__()
        self._fields = MappingProxyType(fields)

    def validation_errors(self) -> Mapping[str, list[str]]:
        return self._fields

    def status_code(self) -> int:
        return HTTPStatus.BAD_REQUEST.value

    def __str__(self) -> str:
        pairs = [(field, message) for field in sorted(self._fields) for message in self._fields[field]]
        rendered = unquote_plus(urlencode(pairs))
        return "validation error: " + rendered.replace("&", " ")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._fields)!r})"


def validation_errors(err: BaseException | None) -> Mapping[str, list[str]]:
    """Return the field messages of the nearest validation error in err's chain.

    Returns an empty mapping when there is none.
    """
    found = first_as(err, ValidationError)
    if found is None:
        return _EMPTY
    return found.validation_errors()
