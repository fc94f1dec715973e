"""Toggl Track payloads used by the tracker client."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, NonNegativeInt, field_validator

# Duration sentinel for an entry with no recorded end
RUNNING_DURATION = -1


class Workspace(BaseModel):
    """Workspace accessible to the authenticated account."""

    id: NonNegativeInt
    name: str | None = None


class TrackingEntry(BaseModel):
    """Time entry as returned by the API.

    Extra fields in the payload are ignored.
    """

    id: NonNegativeInt
    workspace_id: NonNegativeInt
    start: datetime
    duration: int
    description: str | None = None

    @field_validator("start")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def is_running(self) -> bool:
        return self.duration == RUNNING_DURATION

    def elapsed(self, now: datetime) -> timedelta:
        """Elapsed time of the entry.

        Open entries are measured from their start to ``now``; closed entries
        use their stored duration. Never negative.
        """
        if self.is_running:
            delta = now - self.start
        else:
            delta = timedelta(seconds=self.duration)
        return max(delta, timedelta(0))
