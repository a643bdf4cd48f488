from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from liftkeeper.api.deps import get_store
from liftkeeper.models.building import Building
from liftkeeper.models.ledger import DebtRecord
from liftkeeper.services.receipt_service import ReceiptService
from liftkeeper.store.state_store import StateStore

router = APIRouter()


def _require_building(store: StateStore, building_id: str) -> Building:
    building = store.state.find_building(building_id)
    if building is None:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.get("", response_model=List[Building])
async def list_buildings(store: StateStore = Depends(get_store)):
    return store.state.buildings


@router.get("/{building_id}", response_model=Building)
async def get_building(building_id: str, store: StateStore = Depends(get_store)):
    return _require_building(store, building_id)


@router.get("/{building_id}/debt-records", response_model=List[DebtRecord])
async def get_debt_records(building_id: str, store: StateStore = Depends(get_store)):
    """Debt movements of a building, oldest first"""
    _require_building(store, building_id)
    return store.debt_history(building_id)


@router.get("/{building_id}/receipts/latest", response_class=HTMLResponse)
async def get_latest_receipt(building_id: str, store: StateStore = Depends(get_store)):
    """Most recent archived maintenance receipt"""
    _require_building(store, building_id)
    html = store.latest_receipt_html(building_id)
    if html is None:
        raise HTTPException(status_code=404, detail="No receipt archived for this building")
    return HTMLResponse(content=html)


@router.get("/{building_id}/fault-report-form", response_class=HTMLResponse)
async def get_fault_report_form(building_id: str, store: StateStore = Depends(get_store)):
    building = _require_building(store, building_id)
    return HTMLResponse(content=ReceiptService.render_fault_report_form(building, store.state.settings))
