"""
Shared fixtures for catalog tests.
"""
import threading
from datetime import datetime, timedelta, timezone

import pytest

from listing_catalog.catalog import CatalogStore, VerificationWorkflow
from listing_catalog.config import Config, VerificationConfig


class TickingClock:
    """Clock that moves forward one second on every read."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            now = self.current
            self.current += timedelta(seconds=1)
            return now


def _place(**overrides) -> dict:
    data = {
        "title": "Harbour View Hotel",
        "description": "Rooms over the quay",
        "category": "places",
        "type": "hotel",
        "owner_id": "owner-1",
        "location": {"address": "1 Quay St", "city": "Dublin", "country": "Ireland"},
        "pricing": {"amount": 120, "currency": "EUR", "period": "daily"},
        "tags": ["pool", "wifi"],
        "amenities": ["pool", "wifi"],
        "capacity": 40,
    }
    data.update(overrides)
    return data


def _people(**overrides) -> dict:
    data = {
        "title": "Wedding photographer",
        "category": "people",
        "type": "professional",
        "owner_id": "owner-2",
        "skills": ["photography"],
        "experience": "8 years",
        "availability": {"days": ["sat", "sun"], "hours": "09:00-18:00"},
        "tags": ["photo"],
    }
    data.update(overrides)
    return data


def _experience(**overrides) -> dict:
    data = {
        "title": "Cliff walk",
        "category": "experiences",
        "type": "tour",
        "owner_id": "owner-3",
        "duration": "3 hours",
        "group_size": {"min": 2, "max": 12},
        "includes": ["guide"],
        "tags": ["outdoor"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def place_payload():
    return _place


@pytest.fixture
def people_payload():
    return _people


@pytest.fixture
def experience_payload():
    return _experience


@pytest.fixture
def full_payload():
    """Factory for complete payloads, as the store hands them to build_listing."""
    factories = {"places": _place, "people": _people, "experiences": _experience}

    def make(category: str = "places", **overrides) -> dict:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        data = factories[category]()
        data.update(id="listing_1", created_at=now, updated_at=now, status="pending", verified=False)
        data.update(overrides)
        return data

    return make


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(clock):
    """Store with a short verification delay."""
    catalog = CatalogStore(workflow=VerificationWorkflow(delay=0.05), clock=clock, config=Config())
    yield catalog
    catalog.close()


@pytest.fixture
def quiet_store(clock):
    """Store that never schedules verification on create."""
    config = Config(verification=VerificationConfig(enabled=False))
    catalog = CatalogStore(clock=clock, config=config)
    yield catalog
    catalog.close()
