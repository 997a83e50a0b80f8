from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import datetime

from apps.reports.services import ReportService, get_report_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.dates import utcnow
from core import reports

router = APIRouter()

# Repeat equipment_ids to select several assets; omit it for the whole fleet.

@router.get("/groups", response_model=List[reports.AssetGroup], summary="Asset groups for selection")
def get_groups(
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.groups()

@router.get(
    "/asset-dossier",
    response_model=List[reports.AssetDossier],
    summary="Individual machine report",
    description="Profile, active contract, service history and combined payment timeline per asset"
)
def asset_dossier(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.asset_dossier(as_of or utcnow(), equipment_ids)

@router.get(
    "/financial-history",
    response_model=reports.FinancialHistoryReport,
    summary="Financial history",
    description="Purchase spend, paid and due per asset with fleet totals"
)
def financial_history(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.financial_history(equipment_ids)

@router.get(
    "/cost-analysis",
    response_model=List[reports.CostAnalysisRow],
    summary="Total cost of ownership",
    description="Purchase plus service spend per asset, most expensive first"
)
def cost_analysis(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.cost_analysis(equipment_ids)

@router.get(
    "/breakdown-frequency",
    response_model=List[reports.BreakdownRow],
    summary="Breakdown frequency",
    description="Corrective versus preventive visits with a reliability label"
)
def breakdown_frequency(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.breakdown_frequency(equipment_ids)

@router.get(
    "/spare-parts-usage",
    response_model=List[reports.PartUsageRow],
    summary="Spare parts usage",
    description="Parts replaced across service logs joined to current stock"
)
def spare_parts_usage(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.spare_parts_usage(equipment_ids)

@router.get(
    "/warranty-audit",
    response_model=List[reports.CoverageAuditRow],
    summary="Warranty and coverage audit",
    description="Coverage of each asset, classified COVERED or EXPOSED"
)
def warranty_audit(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.warranty_audit(as_of or utcnow(), equipment_ids)

@router.get(
    "/monthly-maintenance",
    response_model=List[reports.MaintenanceRow],
    summary="Monthly maintenance summary",
    description="Service logs from the first of the current month up to now"
)
def monthly_maintenance(
    equipment_ids: Optional[List[str]] = Query(None, description="Equipment to include (repeatable)"),
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ReportService = Depends(get_report_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.monthly_maintenance(as_of or utcnow(), equipment_ids)
