from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple
from fastapi import HTTPException, status, Depends
import uuid
import logging

from apps.equipment.models import Equipment
from apps.service_logs.models import ServiceLog, ServiceType
from apps.reminders.services import close_settled_reminders
from apps.service_logs.schemas import ServiceLogCreate, ServiceLogUpdate
from core.database import get_db
from core.dates import utcnow
from core.liability import PaymentMethod, PaymentRecord, compute_remaining

logger = logging.getLogger(__name__)

UNKNOWN_EQUIPMENT = "Unknown"
INITIAL_PAYMENT_NOTE = "Initial payment upon service registration"


class ServiceLogService:
    def __init__(self, db: Session):
        self.db = db

    def _equipment_name(self, equipment_id: str) -> str:
        equipment = self.db.query(Equipment).filter(Equipment.id == equipment_id).first()
        return equipment.name if equipment else UNKNOWN_EQUIPMENT

    def get_log(self, log_id: str) -> Optional[ServiceLog]:
        """Get service log by ID"""
        return self.db.query(ServiceLog).filter(ServiceLog.id == log_id).first()

    def get_log_or_404(self, log_id: str) -> ServiceLog:
        db_log = self.get_log(log_id)
        if not db_log:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service log not found"
            )
        return db_log

    def get_logs(
        self,
        skip: int = 0,
        limit: int = 100,
        equipment_id: Optional[str] = None,
        service_type: Optional[ServiceType] = None,
        search: Optional[str] = None,
        unpaid_only: bool = False
    ) -> Tuple[List[ServiceLog], int]:
        """Get service logs, newest first"""
        query = self.db.query(ServiceLog)

        if equipment_id:
            query = query.filter(ServiceLog.equipment_id == equipment_id)

        if service_type:
            query = query.filter(ServiceLog.type == service_type)

        if search:
            query = query.filter(or_(
                ServiceLog.equipment_name.ilike(f"%{search}%"),
                ServiceLog.company_name.ilike(f"%{search}%"),
                ServiceLog.technician_name.ilike(f"%{search}%")
            ))

        if unpaid_only:
            query = query.filter(ServiceLog.remaining_amount > 0)

        total = query.count()
        logs = query.order_by(ServiceLog.date.desc()).offset(skip).limit(limit).all()
        return logs, total

    def create_log(self, log: ServiceLogCreate) -> ServiceLog:
        """Record a service visit; any amount paid up front opens the payment history"""
        payment_history = []
        if log.paid_amount > 0:
            payment_history.append(PaymentRecord(
                id=str(uuid.uuid4()),
                amount=log.paid_amount,
                date=log.date,
                method=PaymentMethod.CASH,
                note=INITIAL_PAYMENT_NOTE,
                created_at=utcnow()
            ).model_dump(mode="json"))

        db_log = ServiceLog(
            **log.model_dump(),
            equipment_name=self._equipment_name(log.equipment_id),
            remaining_amount=compute_remaining(log.cost, log.paid_amount),
            payment_history=payment_history
        )

        self.db.add(db_log)
        self.db.commit()
        self.db.refresh(db_log)

        logger.info(f"Created {db_log.type.value} service log for {db_log.equipment_name} (ID: {db_log.id})")
        return db_log

    def update_log(self, log_id: str, log_update: ServiceLogUpdate) -> ServiceLog:
        """Update a service log; the last write wins"""
        db_log = self.get_log_or_404(log_id)

        update_data = log_update.model_dump(exclude_unset=True)
        if "equipment_id" in update_data and update_data["equipment_id"] != db_log.equipment_id:
            update_data["equipment_name"] = self._equipment_name(update_data["equipment_id"])

        for field, value in update_data.items():
            setattr(db_log, field, value)
        db_log.remaining_amount = compute_remaining(db_log.cost, db_log.paid_amount)
        if db_log.remaining_amount <= 0:
            close_settled_reminders(self.db, db_log.id)

        self.db.commit()
        self.db.refresh(db_log)

        logger.info(f"Updated service log {db_log.id}")
        return db_log

    def delete_log(self, log_id: str) -> bool:
        db_log = self.get_log_or_404(log_id)
        self.db.delete(db_log)
        self.db.commit()

        logger.info(f"Deleted service log {log_id}")
        return True


# Dependency injection
def get_service_log_service(db: Session = Depends(get_db)) -> ServiceLogService:
    return ServiceLogService(db)
