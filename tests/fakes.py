"""In-memory stand-in for the Toggl Track API used by the tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import httpx


API_PREFIX = "/api/v9"


def _parse(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


class FakeToggl:
    """Minimal stateful fake of the endpoints the client calls."""

    def __init__(
        self,
        workspaces: list[dict[str, Any]] | None = None,
        entries: list[dict[str, Any]] | None = None,
    ) -> None:
        self.workspaces = [{"id": 101, "name": "Personal"}] if workspaces is None else workspaces
        self.entries = list(entries or [])
        self.requests: list[httpx.Request] = []
        self.next_id = 5000

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self) -> list[str]:
        """Requests received so far, as 'METHOD /path'."""
        return [f"{r.method} {r.url.path.removeprefix(API_PREFIX)}" for r in self.requests]

    def running(self) -> dict[str, Any] | None:
        for entry in self.entries:
            if entry["duration"] == -1:
                return entry
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        parts = path.strip("/").split("/")

        if request.method == "GET" and path == "/workspaces":
            return httpx.Response(200, json=self.workspaces)

        if request.method == "GET" and path == "/me/time_entries/current":
            return httpx.Response(200, content=json.dumps(self.running()))

        if request.method == "GET" and path == "/me/time_entries":
            start = _parse(request.url.params["start_date"])
            end = _parse(request.url.params["end_date"])
            matching = [e for e in self.entries if start <= _parse(e["start"]) <= end]
            return httpx.Response(200, json=matching)

        if (
            request.method == "POST"
            and len(parts) == 3
            and parts[0] == "workspaces"
            and parts[2] == "time_entries"
        ):
            body = json.loads(request.content)
            entry = {
                "id": self.next_id,
                "workspace_id": body["workspace_id"],
                "start": body["start"],
                "duration": body["duration"],
                "description": body.get("description"),
                "created_with": body["created_with"],
            }
            self.next_id += 1
            self.entries.append(entry)
            return httpx.Response(200, json=entry)

        if request.method == "PATCH" and len(parts) == 5 and parts[4] == "stop":
            entry_id = int(parts[3])
            for entry in self.entries:
                if entry["id"] == entry_id and entry["workspace_id"] == int(parts[1]):
                    elapsed = datetime.now(timezone.utc) - _parse(entry["start"])
                    entry["duration"] = int(elapsed.total_seconds())
                    return httpx.Response(200, json=entry)
            return httpx.Response(404, text="Time entry not found")

        return httpx.Response(404, text="Not found")


def make_entry(
    entry_id: int,
    start: datetime,
    duration: int,
    workspace_id: int = 101,
    **extra: Any,
) -> dict[str, Any]:
    """Build an entry payload the way the API serializes it."""
    return {
        "id": entry_id,
        "workspace_id": workspace_id,
        "start": start.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "duration": duration,
        **extra,
    }


