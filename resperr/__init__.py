"""Associate HTTP status codes and user messages with exceptions.

Annotate errors where they happen, then recover the annotations at response
time by walking the cause chain::

    try:
        item = load_item(n)
    except LookupError as exc:
        raise resperr.new(404, "item %d not found", n) from exc

    code = resperr.status_code(err)
    message = resperr.user_message(err)
    fields = resperr.validation_errors(err)
"""

from resperr.core.capabilities import StatusCoder
from resperr.core.capabilities import Temporary
from resperr.core.capabilities import Timeout
from resperr.core.capabilities import UserMessenger
from resperr.core.capabilities import ValidationError
from resperr.core.chain import all_as
from resperr.core.chain import first_as
from resperr.core.errors import APIError
from resperr.core.errors import FormattedError
from resperr.core.errors import new
from resperr.core.errors import not_found
from resperr.core.errors import with_status_code
from resperr.core.errors import with_user_message
from resperr.core.errors import with_user_messagef
from resperr.core.resolve import status_code
from resperr.core.resolve import status_text
from resperr.core.resolve import user_message
from resperr.core.validator import Validator
from resperr.core.validator import ValidatorError
from resperr.core.validator import validation_errors

__all__ = [
    "APIError",
    "FormattedError",
    "StatusCoder",
    "Temporary",
    "Timeout",
    "UserMessenger",
    "ValidationError",
    "Validator",
    "ValidatorError",
    "all_as",
    "first_as",
    "new",
    "not_found",
    "status_code",
    "status_text",
    "user_message",
    "validation_errors",
    "with_status_code",
    "with_user_message",
    "with_user_messagef",
]
