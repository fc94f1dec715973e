"""Start, stop, toggle and status operations on top of the API client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from tracker.api import TogglClient
from tracker.durations import start_of_day, start_of_week, total_elapsed
from tracker.errors import NoWorkspaceError
from tracker.models import TrackingEntry

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Result of a state-changing command, worded as printed to the user."""

    STARTED = "started"
    STOPPED = "stopped"
    ALREADY_RUNNING = "already running"
    ALREADY_STOPPED = "already stopped"


@dataclass(frozen=True)
class StatusReport:
    """Snapshot of tracking state, all measured against ``now``."""

    now: datetime
    current: TrackingEntry | None
    today: timedelta
    week: timedelta

    @property
    def current_elapsed(self) -> timedelta | None:
        if self.current is None:
            return None
        # Measured from start regardless of the stored duration
        return max(self.now - self.current.start, timedelta(0))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def status(client: TogglClient) -> TrackingEntry | None:
    """Return the running entry, or None when nothing is running."""
    return client.current_entry()


def default_workspace_id(client: TogglClient) -> int:
    """Id of the first workspace the service lists for the account.

    Raises:
        NoWorkspaceError: If the account has no workspace.
    """
    workspaces = client.list_workspaces()
    if not workspaces:
        raise NoWorkspaceError()
    return workspaces[0].id


def start_entry(
    client: TogglClient,
    *,
    workspace_id: int | None = None,
    description: str | None = None,
    now: datetime | None = None,
) -> None:
    """Open a new entry without checking status first.

    Callers must have resolved status and found nothing running.

    Args:
        client: API client.
        workspace_id: Workspace to create the entry in. Defaults to the
            first workspace returned by the service.
        description: Optional entry description.
        now: Start instant (default: current UTC time).
    """
    if workspace_id is None:
        workspace_id = default_workspace_id(client)
    if now is None:
        now = _utcnow()
    logger.info("Starting entry in workspace %s", workspace_id)
    client.create_entry(workspace_id, now, description=description)


def stop_entry(client: TogglClient, entry: TrackingEntry) -> None:
    """Close a previously resolved open entry."""
    logger.info("Stopping entry %s in workspace %s", entry.id, entry.workspace_id)
    client.stop_entry(entry)


def start(
    client: TogglClient,
    *,
    workspace_id: int | None = None,
    description: str | None = None,
) -> Outcome:
    """Start tracking unless an entry is already running."""
    if status(client) is not None:
        return Outcome.ALREADY_RUNNING
    start_entry(client, workspace_id=workspace_id, description=description)
    return Outcome.STARTED


def stop(client: TogglClient) -> Outcome:
    """Stop the running entry, if any."""
    current = status(client)
    if current is None:
        return Outcome.ALREADY_STOPPED
    stop_entry(client, current)
    return Outcome.STOPPED


def toggle(
    client: TogglClient,
    *,
    workspace_id: int | None = None,
    description: str | None = None,
) -> Outcome:
    """Stop the running entry, or start a new one when nothing runs."""
    current = status(client)
    if current is not None:
        stop_entry(client, current)
        return Outcome.STOPPED
    start_entry(client, workspace_id=workspace_id, description=description)
    return Outcome.STARTED


def duration_between(
    client: TogglClient,
    start: datetime,
    end: datetime,
    *,
    now: datetime | None = None,
) -> timedelta:
    """Total elapsed time of entries starting between ``start`` and ``end``.

    Open entries count up to ``now`` (default: current UTC time).
    """
    if now is None:
        now = _utcnow()
    entries = client.list_entries(start, end)
    logger.debug("Fetched %d entries between %s and %s", len(entries), start, end)
    return total_elapsed(entries, now)


def status_report(client: TogglClient, *, now: datetime | None = None) -> StatusReport:
    """Resolve the running entry plus today's and this week's totals."""
    if now is None:
        now = _utcnow()
    current = status(client)
    today = duration_between(client, start_of_day(now), now, now=now)
    week = duration_between(client, start_of_week(now), now, now=now)
    return StatusReport(now=now, current=current, today=today, week=week)
