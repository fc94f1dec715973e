"""HTTP client for the Toggl Track v9 API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from tracker.config import DEFAULT_BASE_URL, TrackerSettings
from tracker.errors import ApiError, MalformedResponseError, TokenNotSetError
from tracker.models import RUNNING_DURATION, TrackingEntry, Workspace

logger = logging.getLogger(__name__)

_WORKSPACES = TypeAdapter(list[Workspace])
_ENTRIES = TypeAdapter(list[TrackingEntry])


def to_rfc3339(moment: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


class TogglClient:
    """Blocking client for the handful of endpoints the CLI needs.

    Each method performs exactly one request. Failures are raised as
    ApiError (or MalformedResponseError) naming the call that failed.
    """

    def __init__(
        self,
        api_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        created_with: str = "tracker CLI",
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_token:
            raise TokenNotSetError()
        self.created_with = created_with
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            auth=(api_token, "api_token"),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> TogglClient:
        """Build a client from settings.

        Raises:
            TokenNotSetError: If the settings carry no API token.
        """
        return cls(
            settings.api_token or "",
            base_url=settings.base_url,
            created_with=settings.created_with,
            timeout=settings.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TogglClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request, raising ApiError on transport failure or non-2xx status."""
        call = f"{method} {path}"
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise ApiError(call, str(e)) from e

        logger.debug("%s -> %s", call, response.status_code)

        if response.is_error:
            raise ApiError(call, response.text.strip() or response.reason_phrase, response.status_code)
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and return the decoded JSON body.

        An empty or undecodable body raises MalformedResponseError.
        """
        response = self._send(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError both land here
            raise MalformedResponseError(
                f"{method} {path}", f"invalid JSON: {e}", response.status_code
            ) from e

    def list_workspaces(self) -> list[Workspace]:
        """Workspaces of the account, in the order the service returns them."""
        data = self._request("GET", "/workspaces")
        try:
            return _WORKSPACES.validate_python(data)
        except ValidationError as e:
            raise MalformedResponseError("GET /workspaces", str(e)) from e

    def create_entry(
        self,
        workspace_id: int,
        start: datetime,
        *,
        description: str | None = None,
    ) -> None:
        """Create an open-ended entry starting at ``start``.

        The response body is not read; a 2xx status means the entry exists.
        """
        body: dict[str, Any] = {
            "start": to_rfc3339(start),
            "created_with": self.created_with,
            "workspace_id": workspace_id,
            "duration": RUNNING_DURATION,
        }
        if description:
            body["description"] = description

        self._send("POST", f"/workspaces/{workspace_id}/time_entries", json=body)

    def stop_entry(self, entry: TrackingEntry) -> None:
        """Close an open entry, addressed by its workspace and id."""
        self._send("PATCH", f"/workspaces/{entry.workspace_id}/time_entries/{entry.id}/stop")

    def current_entry(self) -> TrackingEntry | None:
        """The running entry, or None when the service answers JSON null."""
        data = self._request("GET", "/me/time_entries/current")
        if data is None:
            return None
        try:
            return TrackingEntry.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError("GET /me/time_entries/current", str(e)) from e

    def list_entries(self, start: datetime, end: datetime) -> list[TrackingEntry]:
        """Entries whose start falls between ``start`` and ``end``."""
        data = self._request(
            "GET",
            "/me/time_entries",
            params={"start_date": to_rfc3339(start), "end_date": to_rfc3339(end)},
        )
        try:
            return _ENTRIES.validate_python(data)
        except ValidationError as e:
            raise MalformedResponseError("GET /me/time_entries", str(e)) from e
