"""Unit tests for annotated errors and their factories."""

from __future__ import annotations

import pytest

from resperr.core.errors import APIError
from resperr.core.errors import FormattedError
from resperr.core.errors import new
from resperr.core.errors import not_found
from resperr.core.errors import with_status_code
from resperr.core.errors import with_user_message
from resperr.core.resolve import status_code
from resperr.core.resolve import user_message


def test_with_status_code_prefixes_the_cause_text() -> None:
    err = ValueError("hello")

    coder = with_status_code(err, 400)

    assert str(coder) == "[400] hello"
    assert coder.cause is err
    assert coder.__cause__ is err


def test_with_status_code_on_none_renders_status_text() -> None:
    coder = with_status_code(None, 400)

    assert "Bad Request" in str(coder)


def test_with_user_message_renders_message_and_cause() -> None:
    msgr = with_user_message(ValueError("hello"), "a")

    assert str(msgr) == "[400] <a> hello"


def test_with_user_message_on_none() -> None:
    assert str(with_user_message(None, "a")) == "[400] <a> Bad Request"


def test_empty_error_defaults_to_internal_server_error() -> None:
    err = APIError()

    assert status_code(err) == 500
    assert user_message(err) == "Internal Server Error"
    assert str(err) == "[500] Internal Server Error"


def test_nested_api_errors_are_flattened_in_display() -> None:
    root = KeyError("row 7")
    err = APIError(status=409, cause=APIError(message="Already taken.", cause=APIError(cause=root)))

    assert str(err) == f"[409] <Already taken.> {root}"


def test_display_uses_nearest_message_among_rewraps() -> None:
    err = APIError(message="outer", cause=APIError(message="inner"))

    assert str(err) == "[400] <outer> Bad Request"


def test_accessors_defer_to_cause() -> None:
    inner = APIError(status=404, message="No such item.")
    outer = APIError(cause=inner)

    assert outer.status_code() == 404
    assert outer.user_message() == "No such item."


def test_accessors_report_unset_without_cause() -> None:
    err = APIError()

    assert err.status_code() == 0
    assert err.user_message() == ""


def test_new_formats_cause_without_user_message() -> None:
    err = new(404, "hello %s", "world")

    assert user_message(err) == "Not Found"
    assert status_code(err) == 404
    assert str(err) == "[404] hello world"


def test_new_leaves_literal_percent_alone_without_args() -> None:
    assert str(new(500, "100% broken")) == "[500] 100% broken"


def test_new_chain_keeps_inner_message_and_outer_codes() -> None:
    inner = with_user_message(None, "msg1")
    w1 = new(5, "w1: %s", inner)
    w2 = new(6, "w2: %s", w1)

    assert status_code(w1) == 5
    assert status_code(w2) == 6
    assert user_message(w2) == "msg1"
    assert str(w2) == "[6] w2: [5] w1: [400] <msg1> Bad Request"


def test_formatted_error_wraps_exception_arguments() -> None:
    first = ValueError("first")
    second = KeyError("second")

    single = FormattedError("failed: %s", first)
    several = FormattedError("failed: %s and %s", first, second)
    plain = FormattedError("failed: %d", 3)

    assert single.unwrap() is first
    assert single.__cause__ is first
    assert several.unwrap() == (first, second)
    assert plain.unwrap() is None
    assert str(plain) == "failed: 3"


def test_raise_from_keeps_both_causes_reachable() -> None:
    try:
        try:
            raise with_user_message(None, "Try again later.")
        except APIError as exc:
            raise new(503, "queue %s unavailable", "jobs") from exc
    except APIError as exc:
        err = exc

    assert status_code(err) == 503
    assert user_message(err) == "Try again later."


def test_not_found_names_the_request_path() -> None:
    path = "/example/url"

    err = not_found(path)

    assert status_code(err) == 404
    assert path in user_message(err)
    assert user_message(err) == 'could not find path "/example/url"'
    assert path in str(err)


def test_status_must_be_an_int() -> None:
    with pytest.raises(TypeError):
        APIError(status="404")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        APIError(status=True)


def test_repr_lists_fields() -> None:
    assert repr(APIError(status=404, message="gone")) == "APIError(status=404, message='gone', cause=None)"


def test_display_of_wrapped_timeout_uses_full_status_ladder() -> None:
    err = with_user_message(TimeoutError("deadline exceeded"), "")

    assert str(err) == "[504] deadline exceeded"
