"""Shared pytest fixtures for resperr test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    """Reload error response settings from the environment for every test."""
    from resperr.core.config import get_error_response_settings

    get_error_response_settings.cache_clear()
    yield
    get_error_response_settings.cache_clear()
