from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from pydantic import ValidationError

from liftkeeper.api.deps import get_snapshot_repo, get_store, persist_snapshot
from liftkeeper.core.errors import CommandRejected
from liftkeeper.repositories.snapshot_repo import SnapshotRepository
from liftkeeper.store.commands import parse_command
from liftkeeper.store.state_store import StateStore

router = APIRouter()


@router.post("")
async def dispatch_command(
    background_tasks: BackgroundTasks,
    raw: Dict[str, Any] = Body(...),
    store: StateStore = Depends(get_store),
    repo: Optional[SnapshotRepository] = Depends(get_snapshot_repo),
):
    """Apply one `{type, payload}` command and return the resulting state"""
    try:
        command = parse_command(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        )
    if command is None:
        raise CommandRejected(str(raw.get("type")), "unknown command type")

    state = store.dispatch_or_raise(command)
    if repo is not None:
        background_tasks.add_task(persist_snapshot, repo, store)

    return {
        "applied": True,
        "reason": None,
        "state": state.model_dump(mode="json", by_alias=True),
    }
