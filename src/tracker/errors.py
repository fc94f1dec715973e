"""Exceptions raised by the tracker client."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker errors."""

    pass


class TokenNotSetError(TrackerError):
    """Raised when no API token is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Please set TOGGL_TRACK_TOKEN environment variable with the API token"
        )


class ApiError(TrackerError):
    """Raised when a call to the time-tracking API fails.

    Attributes:
        call: Method and path of the failed request, e.g. "GET /workspaces".
        status_code: HTTP status of the response, or None for transport errors.
    """

    def __init__(self, call: str, message: str, status_code: int | None = None) -> None:
        self.call = call
        self.status_code = status_code
        if status_code is None:
            super().__init__(f"{call} failed: {message}")
        else:
            super().__init__(f"{call} failed with HTTP {status_code}: {message}")


class MalformedResponseError(ApiError):
    """Raised when the API answers with JSON of an unexpected shape."""

    pass


class NoWorkspaceError(TrackerError):
    """Raised when the account has no workspace to create entries in."""

    def __init__(self) -> None:
        super().__init__("No workspace available for this account")
