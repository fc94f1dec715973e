"""Shared fixtures."""

from __future__ import annotations

import pytest

from fakes import FakeToggl
from tracker.api import TogglClient
from tracker.config import TrackerSettings


@pytest.fixture
def fake() -> FakeToggl:
    return FakeToggl()


@pytest.fixture
def client(fake: FakeToggl):
    with TogglClient("test-token", transport=fake.transport) as c:
        yield c


@pytest.fixture
def settings() -> TrackerSettings:
    return TrackerSettings(api_token="test-token", _env_file=None)
