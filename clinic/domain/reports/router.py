"""Report router - Admin-only reporting endpoints"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from ...auth import Identity, require_role
from ...database import get_db
from .schemas import DailyReportResponse, TopDoctorResponse
from .service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    """Dependency injection for ReportService"""
    return ReportService(db)


@router.get("/daily/{day}", response_model=DailyReportResponse)
async def daily_report(
    day: date,
    _admin: Identity = Depends(require_role("admin")),
    service: ReportService = Depends(get_report_service),
):
    """All appointments of a day grouped by doctor"""
    return DailyReportResponse(rows=service.daily(day))


@router.get("/top-doctor/month/{month}/{year}", response_model=TopDoctorResponse)
async def top_doctor_by_month(
    month: int = Path(..., ge=1, le=12),
    year: int = Path(..., ge=1900, le=9998),
    _admin: Identity = Depends(require_role("admin")),
    service: ReportService = Depends(get_report_service),
):
    """Doctor(s) with the most distinct patients in a month"""
    try:
        rows = service.top_by_month(month, year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return TopDoctorResponse(rows=rows)


@router.get("/top-doctor/year/{year}", response_model=TopDoctorResponse)
async def top_doctor_by_year(
    year: int = Path(..., ge=1900, le=9998),
    _admin: Identity = Depends(require_role("admin")),
    service: ReportService = Depends(get_report_service),
):
    """Doctor(s) with the most distinct patients in a year"""
    return TopDoctorResponse(rows=service.top_by_year(year))
