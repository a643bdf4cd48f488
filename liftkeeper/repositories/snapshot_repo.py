import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from liftkeeper.core.config import settings
from liftkeeper.core.errors import SnapshotVersionError
from liftkeeper.models.state import AppState

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotRepository:
    """Whole-state snapshot, one document per key."""

    def __init__(self, db: AsyncIOMotorDatabase, key: str = settings.SNAPSHOT_KEY):
        self.db = db
        self.collection = db[settings.SNAPSHOT_COLLECTION]
        self.key = key

    async def save(self, state: AppState) -> None:
        """Overwrite the stored snapshot; session-local fields are left out."""
        document = {
            "version": SNAPSHOT_VERSION,
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "state": state.persisted(),
        }
        await self.collection.replace_one({"_id": self.key}, document, upsert=True)

    async def load(self) -> Optional[AppState]:
        """
        Load the stored snapshot.

        Returns None when nothing was saved yet. Raises SnapshotVersionError
        when the document was written by a different schema version or its
        state no longer validates.
        """
        document = await self.collection.find_one({"_id": self.key})
        if document is None:
            return None

        version = document.get("version")
        if version != SNAPSHOT_VERSION:
            raise SnapshotVersionError(
                f"snapshot {self.key} has version {version}, expected {SNAPSHOT_VERSION}"
            )
        try:
            return AppState.model_validate(document.get("state") or {})
        except ValidationError as exc:
            raise SnapshotVersionError(
                f"snapshot {self.key} does not match the current schema: "
                f"{exc.error_count()} validation error(s)"
            ) from exc
