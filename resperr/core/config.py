"""Settings for rendering errors into HTTP responses."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_INCLUDE_DETAILS = True
DEFAULT_LOG_CLIENT_ERRORS = False

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class ErrorResponseSettings:
    """Runtime settings for the error response integration."""

    include_details: bool = DEFAULT_INCLUDE_DETAILS
    log_client_errors: bool = DEFAULT_LOG_CLIENT_ERRORS

    def safe_for_logging(self) -> dict[str, bool]:
        """Return error response settings safe for logs."""
        return {
            "include_details": self.include_details,
            "log_client_errors": self.log_client_errors,
        }


@lru_cache(maxsize=1)
def get_error_response_settings() -> ErrorResponseSettings:
    """Load error response settings from the environment."""
    return ErrorResponseSettings(
        include_details=_get_bool_env("RESPERR_INCLUDE_DETAILS", DEFAULT_INCLUDE_DETAILS),
        log_client_errors=_get_bool_env("RESPERR_LOG_CLIENT_ERRORS", DEFAULT_LOG_CLIENT_ERRORS),
    )
