from sqlalchemy.orm import Session
from datetime import datetime
from fastapi import Depends

from apps.equipment.models import Equipment
from apps.service_logs.models import ServiceLog
from apps.contracts.models import MaintenanceContract
from apps.reminders.models import PaymentReminder
from apps.spare_parts.models import SparePart
from core.database import get_db
from core.reports import FleetOverview, fleet_overview


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def get_summary(self, now: datetime) -> FleetOverview:
        return fleet_overview(
            self.db.query(Equipment).all(),
            self.db.query(ServiceLog).all(),
            self.db.query(MaintenanceContract).all(),
            self.db.query(PaymentReminder).all(),
            self.db.query(SparePart).all(),
            now
        )


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
