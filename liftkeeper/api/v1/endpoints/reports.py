from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from liftkeeper.api.deps import get_store
from liftkeeper.services.report_service import MonthlyReport, ReportService
from liftkeeper.store.state_store import StateStore

router = APIRouter()


@router.get("/monthly", response_model=MonthlyReport)
async def get_monthly_report(
    year: Optional[int] = Query(None, ge=2000, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: StateStore = Depends(get_store),
):
    """Income, maintenance and parts for one month; defaults to the current month"""
    today = date.today()
    return ReportService.monthly_report(store.state, year or today.year, month or today.month)
