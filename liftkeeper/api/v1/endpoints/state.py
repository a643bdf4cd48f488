from fastapi import APIRouter, Depends

from liftkeeper.api.deps import get_store
from liftkeeper.store.state_store import StateStore

router = APIRouter()


@router.get("")
async def get_state(store: StateStore = Depends(get_store)):
    """Full current state, session fields included"""
    return store.state.model_dump(mode="json", by_alias=True)
