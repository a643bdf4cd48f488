from fastapi import APIRouter

from liftkeeper.api.v1.endpoints import buildings, commands, proposals, reports, state

api_router = APIRouter()

api_router.include_router(commands.router, prefix="/commands", tags=["commands"])
api_router.include_router(state.router, prefix="/state", tags=["state"])
api_router.include_router(buildings.router, prefix="/buildings", tags=["buildings"])
api_router.include_router(proposals.router, prefix="/proposals", tags=["proposals"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
