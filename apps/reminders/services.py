from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from fastapi import HTTPException, status, Depends
import logging

from apps.equipment.models import Equipment
from apps.service_logs.models import ServiceLog
from apps.reminders.models import PaymentReminder, ReminderSource
from apps.reminders.schemas import ReminderCreate, ReminderResponse, ReminderWithUrgency
from core.database import get_db
from core.liability import UNKNOWN_VENDOR
from core.reminders import (
    ReminderStatus, active_alerts, check_transition, resolve_reminder_urgency, settled_reminders
)

logger = logging.getLogger(__name__)


def close_settled_reminders(db: Session, source_id: str) -> List[str]:
    """Mark the Pending reminders of a fully settled item as Paid; the caller commits."""
    pending = db.query(PaymentReminder).filter(PaymentReminder.source_id == source_id).all()
    closed = []
    for reminder in settled_reminders(pending, source_id):
        reminder.status = ReminderStatus.PAID
        closed.append(reminder.id)
    if closed:
        logger.info(f"Closed {len(closed)} reminder(s) for settled item {source_id}")
    return closed


class ReminderService:
    def __init__(self, db: Session):
        self.db = db

    def get_reminder_or_404(self, reminder_id: str) -> PaymentReminder:
        db_reminder = self.db.query(PaymentReminder).filter(PaymentReminder.id == reminder_id).first()
        if not db_reminder:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Reminder not found"
            )
        return db_reminder

    def _describe_source(self, source_type: ReminderSource, source_id: str):
        """Display name and provider of the item a reminder is for"""
        if source_type == ReminderSource.EQUIPMENT:
            equipment = self.db.query(Equipment).filter(Equipment.id == source_id).first()
            if not equipment:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Equipment not found"
                )
            return equipment.name, equipment.supplier_name or UNKNOWN_VENDOR

        log = self.db.query(ServiceLog).filter(ServiceLog.id == source_id).first()
        if not log:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service log not found"
            )
        return log.equipment_name or "Unknown", log.company_name or UNKNOWN_VENDOR

    @staticmethod
    def with_urgency(db_reminder: PaymentReminder, now: datetime) -> ReminderWithUrgency:
        response = ReminderResponse.model_validate(db_reminder)
        return ReminderWithUrgency(
            **response.model_dump(),
            urgency=resolve_reminder_urgency(db_reminder, now)
        )

    def get_reminders(
        self,
        now: datetime,
        status_filter: Optional[ReminderStatus] = None,
        source_id: Optional[str] = None
    ) -> List[ReminderWithUrgency]:
        """Reminders by scheduled date, each with its urgency as of now"""
        query = self.db.query(PaymentReminder)
        if status_filter:
            query = query.filter(PaymentReminder.status == status_filter)
        if source_id:
            query = query.filter(PaymentReminder.source_id == source_id)
        reminders = query.order_by(PaymentReminder.scheduled_date).all()
        return [self.with_urgency(r, now) for r in reminders]

    def get_active_alerts(self, now: datetime) -> List[ReminderWithUrgency]:
        reminders = self.db.query(PaymentReminder).order_by(PaymentReminder.scheduled_date).all()
        return [self.with_urgency(r, now) for r in active_alerts(reminders, now)]

    def create_reminder(self, reminder: ReminderCreate) -> PaymentReminder:
        name, provider = self._describe_source(reminder.source_type, reminder.source_id)
        db_reminder = PaymentReminder(
            **reminder.model_dump(),
            name=name,
            provider=provider,
            status=ReminderStatus.PENDING
        )
        self.db.add(db_reminder)
        self.db.commit()
        self.db.refresh(db_reminder)

        logger.info(
            f"Scheduled reminder for {db_reminder.name}: {db_reminder.amount_to_pay} "
            f"on {db_reminder.scheduled_date} (ID: {db_reminder.id})"
        )
        return db_reminder

    def update_status(self, reminder_id: str, new_status: ReminderStatus) -> PaymentReminder:
        db_reminder = self.get_reminder_or_404(reminder_id)
        db_reminder.status = check_transition(db_reminder.status, new_status)
        self.db.commit()
        self.db.refresh(db_reminder)

        logger.info(f"Reminder {reminder_id} marked {new_status.value}")
        return db_reminder

    def delete_reminder(self, reminder_id: str) -> bool:
        db_reminder = self.get_reminder_or_404(reminder_id)
        self.db.delete(db_reminder)
        self.db.commit()

        logger.info(f"Deleted reminder {reminder_id}")
        return True


def get_reminder_service(db: Session = Depends(get_db)) -> ReminderService:
    return ReminderService(db)
