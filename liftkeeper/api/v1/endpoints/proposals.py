from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from liftkeeper.api.deps import get_store
from liftkeeper.services.receipt_service import ReceiptService
from liftkeeper.store.state_store import StateStore
from liftkeeper.store.transitions.common import find_by_id

router = APIRouter()


@router.get("/{proposal_id}/preview", response_class=HTMLResponse)
async def preview_proposal(proposal_id: str, store: StateStore = Depends(get_store)):
    """Proposal rendered with its template and company details"""
    state = store.state
    proposal = find_by_id(state.proposals, proposal_id)
    if proposal is None:
        raise HTTPException(status_code=404, detail="Proposal not found")

    template = find_by_id(state.proposal_templates, proposal.template_id)
    building = state.find_building(proposal.building_id) if proposal.building_id else None
    html = ReceiptService.render_proposal(proposal, state.settings, template=template, building=building)
    return HTMLResponse(content=html)
