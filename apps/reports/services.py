from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from fastapi import Depends
import logging

from apps.equipment.models import Equipment
from apps.service_logs.models import ServiceLog
from apps.contracts.models import MaintenanceContract
from apps.spare_parts.models import SparePart
from core.database import get_db
from core import reports

logger = logging.getLogger(__name__)


class ReportService:
    """Loads the fleet once per request and hands it to the report builders."""

    def __init__(self, db: Session):
        self.db = db

    def _equipment(self):
        return self.db.query(Equipment).order_by(Equipment.name).all()

    def _logs(self):
        return self.db.query(ServiceLog).order_by(ServiceLog.date).all()

    def groups(self) -> List[reports.AssetGroup]:
        return reports.group_assets(self._equipment())

    def asset_dossier(self, now: datetime, equipment_ids: Optional[List[str]] = None) -> List[reports.AssetDossier]:
        contracts = self.db.query(MaintenanceContract).all()
        return reports.asset_dossier(self._equipment(), self._logs(), contracts, now, equipment_ids)

    def financial_history(self, equipment_ids: Optional[List[str]] = None) -> reports.FinancialHistoryReport:
        return reports.financial_history(self._equipment(), equipment_ids)

    def cost_analysis(self, equipment_ids: Optional[List[str]] = None) -> List[reports.CostAnalysisRow]:
        return reports.cost_analysis(self._equipment(), self._logs(), equipment_ids)

    def breakdown_frequency(self, equipment_ids: Optional[List[str]] = None) -> List[reports.BreakdownRow]:
        return reports.breakdown_frequency(self._equipment(), self._logs(), equipment_ids)

    def spare_parts_usage(self, equipment_ids: Optional[List[str]] = None) -> List[reports.PartUsageRow]:
        parts = self.db.query(SparePart).order_by(SparePart.created_at).all()
        return reports.spare_parts_usage(self._logs(), parts, equipment_ids)

    def warranty_audit(self, now: datetime, equipment_ids: Optional[List[str]] = None) -> List[reports.CoverageAuditRow]:
        contracts = self.db.query(MaintenanceContract).all()
        return reports.warranty_audit(self._equipment(), contracts, now, equipment_ids)

    def monthly_maintenance(self, now: datetime, equipment_ids: Optional[List[str]] = None) -> List[reports.MaintenanceRow]:
        return reports.monthly_maintenance(self._logs(), now, equipment_ids)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)
