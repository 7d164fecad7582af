"""
Report & Dashboard Routes — Back-office counters and client reports.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from idv.database import get_db
from idv.dependencies import get_current_user
from idv.models.user import User
from idv.schemas.schemas import ClientReportRow, DashboardStatistics, DashboardStats
from idv.services.reporting_service import ReportingService

router = APIRouter(prefix="/api/reports", tags=["Reports"])
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@dashboard_router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Headline numbers and recent activity for the landing page."""
    return ReportingService.dashboard_stats(db)


@router.get("/clients", response_model=List[ClientReportRow])
def get_client_report(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    province: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReportingService.client_report(db, start_date, end_date, province, status)


@router.get("/dashboard-statistics", response_model=DashboardStatistics)
def get_dashboard_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReportingService.dashboard_statistics(db)
