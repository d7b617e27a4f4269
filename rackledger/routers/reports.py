from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import get_async_session
from ..schemas.inventory import DashboardSummary, LedgerExport
from ..services import report_service

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(db: AsyncSession = Depends(get_async_session)):
    return await report_service.dashboard_summary(db)


@router.get("/export", response_model=LedgerExport)
async def export_ledger(db: AsyncSession = Depends(get_async_session)):
    return await report_service.export_snapshot(db)
