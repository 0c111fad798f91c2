"""Error envelope schema rendered by the web integrations."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Top-level error response body.

    ``error`` is the user message and ``details`` maps request fields to
    their validation messages.
    """

    status: int
    error: str | None = None
    details: dict[str, list[str]] | None = None
