"""
Shared pytest fixtures and configuration for pagecursor tests.

This module provides the record shapes used across the unit tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel

from pagecursor import CursorField, CursorModel, DefaultCursorField


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests without external dependencies")


class Event(CursorModel):
    """Ascending default timestamp field plus explicitly selectable fields."""

    CreatedAt: datetime = DefaultCursorField()
    ID: str = CursorField()
    Seq: int = CursorField(default=0)
    Title: str = ""


class Object(CursorModel):
    """Descending default timestamp field, as in a newest-first feed."""

    ID: str = CursorField()
    CreatedAt: datetime = DefaultCursorField(desc=True)


class Counter(BaseModel):
    """Plain Pydantic model (no CursorModel base) with an integer default field."""

    value: int = DefaultCursorField()
    label: str | None = CursorField(default=None)
    ratio: float = CursorField(default=0.0)


class NoDefault(CursorModel):
    """Shape without a default cursor field."""

    name: str = CursorField()
    note: str = ""


@pytest.fixture
def event_model() -> type[Event]:
    return Event


@pytest.fixture
def object_model() -> type[Object]:
    return Object


@pytest.fixture
def counter_model() -> type[Counter]:
    return Counter


@pytest.fixture
def no_default_model() -> type[NoDefault]:
    return NoDefault


@pytest.fixture
def created_at() -> datetime:
    """Timestamp encoded by the id 'Q3JlYXRlZEF0OjE2NjQxNzcyODE0NDU2NzY='."""
    return datetime(2022, 9, 26, 7, 28, 1, 445676, tzinfo=timezone.utc)


@pytest.fixture
def sample_events(created_at) -> list[Event]:
    """21 events one second apart, i.e. one full default page plus the over-fetched row."""
    return [
        Event(
            CreatedAt=created_at + timedelta(seconds=n),
            ID=f"evt-{n}",
            Seq=n,
        )
        for n in range(21)
    ]
