import itertools
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from liftkeeper.api.deps import get_snapshot_repo, get_store
from liftkeeper.core.config import settings
from liftkeeper.main import app
from liftkeeper.models.building import BuildingCreate
from liftkeeper.models.part import PartCreate
from liftkeeper.models.state import initial_state
from liftkeeper.store.commands import AddBuilding, AddPart
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.state_store import StateStore

FIXED_NOW = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def ctx() -> TransitionContext:
    """Context with a frozen clock and predictable ids (id-1, id-2, ...)."""
    counter = itertools.count(1)
    return TransitionContext(
        now=lambda: FIXED_NOW,
        new_id=lambda: f"id-{next(counter)}",
    )


@pytest.fixture
def state():
    return initial_state()


@pytest.fixture
def store(ctx) -> StateStore:
    return StateStore(ctx=ctx)


@pytest.fixture
def building(store):
    """A two-elevator building at 500 per elevator, no debt."""
    store.dispatch_or_raise(AddBuilding(payload=BuildingCreate(
        name="Kule Apartmani",
        maintenance_fee=500,
        elevator_count=2,
        contact_info="0555 000 00 00",
    )))
    return store.state.buildings[-1]


@pytest.fixture
def part(store):
    """Stock part: 5 pieces at 100 each."""
    store.dispatch_or_raise(AddPart(payload=PartCreate(name="Door sensor", quantity=5, price=100)))
    return store.state.parts[-1]


@pytest.fixture
def mock_db():
    """Motor database double; every collection is the same AsyncMock."""
    collection = AsyncMock()
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


@pytest.fixture
def client(monkeypatch, store):
    """Test client wired to the `store` fixture, with persistence off."""
    monkeypatch.setattr(settings, "PERSISTENCE_ENABLED", False)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_snapshot_repo] = lambda: None
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
