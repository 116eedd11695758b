from datetime import date

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_current_user, get_report_service
from app.models.user import User
from app.schemas.report import ReportPeriod, ReportResponse
from app.services.report_service import ReportService

router = APIRouter(tags=["reports"])


@router.get("/summary", response_model=ReportResponse)
async def get_summary(
    period: ReportPeriod = Query(ReportPeriod.week),
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    """Итоги недели/месяца и сравнение с предыдущим периодом"""
    return await service.summary(current_user.id, period, date.today())
