import asyncio
import logging
from typing import Optional

from fastapi import Request

from liftkeeper.core.config import settings
from liftkeeper.db.mongo import get_db
from liftkeeper.repositories.snapshot_repo import SnapshotRepository
from liftkeeper.store.state_store import StateStore

logger = logging.getLogger(__name__)

# Saves run one at a time so the last write holds the newest state
_save_lock = asyncio.Lock()


def get_store(request: Request) -> StateStore:
    """The application's single store, created at startup."""
    return request.app.state.store


def get_snapshot_repo() -> Optional[SnapshotRepository]:
    db = get_db()
    if not settings.PERSISTENCE_ENABLED or db is None:
        return None
    return SnapshotRepository(db)


async def persist_snapshot(repo: SnapshotRepository, store: StateStore) -> None:
    """
    Background save after an applied command.

    The store is read when the save runs, not when it was queued.
    Failures are logged, not retried.
    """
    async with _save_lock:
        try:
            await repo.save(store.state)
        except Exception:
            logger.exception("Failed to persist snapshot %s", repo.key)
