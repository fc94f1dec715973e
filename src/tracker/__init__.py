"""Command-line client for Toggl Track time entries."""

__version__ = "0.1.0"
