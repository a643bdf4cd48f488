"""Tests for the snapshot repository."""
import pytest

from liftkeeper import main
from liftkeeper.core.config import settings
from liftkeeper.core.errors import SnapshotVersionError
from liftkeeper.models.building import BuildingCreate
from liftkeeper.repositories.snapshot_repo import SNAPSHOT_VERSION, SnapshotRepository
from liftkeeper.store.commands import AddBuilding, SetUser


@pytest.mark.asyncio
class TestSnapshotRepository:
    """Test SnapshotRepository save/load against a mocked collection."""

    async def test_save_upserts_single_document(self, mock_db, store):
        store.dispatch_or_raise(SetUser(payload="Admin User"))
        store.dispatch_or_raise(AddBuilding(payload=BuildingCreate(name="Lale")))
        repo = SnapshotRepository(mock_db, key="test-key")

        await repo.save(store.state)

        repo.collection.replace_one.assert_awaited_once()
        args, kwargs = repo.collection.replace_one.call_args
        assert args[0] == {"_id": "test-key"}
        document = args[1]
        assert document["version"] == SNAPSHOT_VERSION
        assert "savedAt" in document
        assert document["state"]["buildings"][0]["name"] == "Lale"
        assert "currentUser" not in document["state"]
        assert kwargs == {"upsert": True}

    async def test_load_returns_none_when_nothing_saved(self, mock_db):
        repo = SnapshotRepository(mock_db)
        repo.collection.find_one.return_value = None

        assert await repo.load() is None

    async def test_load_round_trips_saved_state(self, mock_db, store):
        store.dispatch_or_raise(AddBuilding(payload=BuildingCreate(name="Lale", maintenance_fee=300)))
        repo = SnapshotRepository(mock_db)
        await repo.save(store.state)
        saved = repo.collection.replace_one.call_args.args[1]
        repo.collection.find_one.return_value = {"_id": repo.key, **saved}

        loaded = await repo.load()

        assert loaded.buildings == store.state.buildings
        assert loaded.settings == store.state.settings
        assert loaded.current_user is None

    async def test_load_rejects_other_versions(self, mock_db):
        repo = SnapshotRepository(mock_db)
        repo.collection.find_one.return_value = {"_id": repo.key, "version": 99, "state": {}}

        with pytest.raises(SnapshotVersionError):
            await repo.load()

    async def test_load_rejects_unversioned_documents(self, mock_db):
        repo = SnapshotRepository(mock_db)
        repo.collection.find_one.return_value = {"_id": repo.key, "buildings": []}

        with pytest.raises(SnapshotVersionError):
            await repo.load()

    async def test_load_rejects_state_that_no_longer_validates(self, mock_db):
        repo = SnapshotRepository(mock_db)
        repo.collection.find_one.return_value = {
            "_id": repo.key,
            "version": SNAPSHOT_VERSION,
            "state": {"buildings": [{"id": "b"}]},
        }

        with pytest.raises(SnapshotVersionError, match="does not match the current schema"):
            await repo.load()

    async def test_startup_falls_back_to_default_state_on_corrupt_snapshot(self, mock_db, monkeypatch):
        monkeypatch.setattr(settings, "PERSISTENCE_ENABLED", True)
        monkeypatch.setattr(main, "get_db", lambda: mock_db)
        mock_db[settings.SNAPSHOT_COLLECTION].find_one.return_value = {
            "_id": settings.SNAPSHOT_KEY,
            "version": SNAPSHOT_VERSION,
            "state": {"buildings": [{"id": "b"}]},
        }

        store = await main.load_store()

        assert store.state.buildings == []
        assert [u.name for u in store.state.users] == ["Admin User", "Technician 1", "Technician 2"]
