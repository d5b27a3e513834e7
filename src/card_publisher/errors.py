"""Failure taxonomy for card publishing.

Each error maps to one of three status classes the trigger can tell apart:
bad request (400), invalid content (422), and upstream failure (the upstream
status, or 502 when no response came back).
"""

from __future__ import annotations

from typing import Optional

NETWORK_ERROR_STATUS = 502


class CardPublishError(Exception):
    """Base class for terminal publish failures."""

    status_code: int = 500

    def __init__(self, body: str, status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        if status_code is not None:
            self.status_code = status_code


class MissingParameter(CardPublishError):
    """Invocation parameters are incomplete."""

    status_code = 400


class InvalidParameter(CardPublishError):
    """An invocation parameter is present but has the wrong shape."""

    status_code = 400


class MissingRequiredField(CardPublishError):
    """Fetched content record is structurally invalid (no cardId)."""

    status_code = 422


class UpstreamError(CardPublishError):
    """Non-success response, or no response, from a content API."""

    action = "request"

    def __init__(self, status_code: int, body: str):
        super().__init__(body, status_code=status_code)

    def __str__(self) -> str:
        return f"{self.action} failed: {self.status_code} {self.body}"


class SourceFetchFailed(UpstreamError):
    action = "Source fetch"


class DestinationWriteFailed(UpstreamError):
    action = "Destination write"
