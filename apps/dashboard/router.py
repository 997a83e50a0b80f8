from fastapi import APIRouter, Depends, Query
from typing import Optional
from datetime import datetime

from apps.dashboard.services import DashboardService, get_dashboard_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.dates import utcnow
from core.reports import FleetOverview

router = APIRouter()

@router.get(
    "/summary",
    response_model=FleetOverview,
    summary="Fleet overview",
    description="Unit counts by status, outstanding liability, reminder alerts, coverage gaps and low stock"
)
def get_summary(
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: DashboardService = Depends(get_dashboard_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_summary(as_of or utcnow())
