from sqlalchemy.orm import Session
from fastapi import HTTPException, status, Depends
import logging

from apps.equipment.models import Equipment
from apps.service_logs.models import ServiceLog
from apps.reminders.services import close_settled_reminders
from apps.payments.schemas import PaymentCreate, PaymentResponse
from core.config import Settings, get_settings
from core.database import get_db
from core.liability import LiabilitySource, LiabilitySummary, aggregate_liability, apply_payment

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, db: Session, settings: Settings = None):
        self.db = db
        self.settings = settings or get_settings()

    def get_outstanding(self) -> LiabilitySummary:
        """Outstanding purchase and service balances across the fleet"""
        equipment = self.db.query(Equipment).all()
        logs = self.db.query(ServiceLog).all()
        return aggregate_liability(equipment, logs)

    def record_payment(self, item, source: LiabilitySource, total_cost: float, payment: PaymentCreate) -> PaymentResponse:
        """Apply a payment to an equipment purchase or service log and store it"""
        result = apply_payment(
            item,
            payment.amount,
            payment.date,
            payment.method,
            payment.note,
            total_cost=total_cost,
            allow_overpayment=self.settings.ALLOW_OVERPAYMENT
        )

        item.paid_amount = result.paid_amount
        item.remaining_amount = result.remaining_amount
        item.payment_history = result.payment_history

        closed = close_settled_reminders(self.db, item.id) if result.remaining_amount <= 0 else []

        self.db.commit()
        self.db.refresh(item)

        if result.overpayment > 0:
            logger.warning(
                f"Payment on {source.value} {item.id} exceeded the balance by {result.overpayment}; "
                f"the excess is not carried as credit"
            )
        logger.info(
            f"Recorded payment of {payment.amount} on {source.value} {item.id} "
            f"(remaining: {result.remaining_amount}, reminders closed: {len(closed)})"
        )

        return PaymentResponse(
            id=item.id,
            source=source.value,
            paid_amount=result.paid_amount,
            remaining_amount=result.remaining_amount,
            overpayment=result.overpayment,
            payment=result.record,
            settled_reminder_ids=closed
        )

    def pay_equipment(self, equipment_id: str, payment: PaymentCreate) -> PaymentResponse:
        db_equipment = self.db.query(Equipment).filter(Equipment.id == equipment_id).first()
        if not db_equipment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Equipment not found"
            )
        return self.record_payment(
            db_equipment, LiabilitySource.EQUIPMENT, db_equipment.purchase_price or 0, payment
        )

    def pay_service_log(self, log_id: str, payment: PaymentCreate) -> PaymentResponse:
        db_log = self.db.query(ServiceLog).filter(ServiceLog.id == log_id).first()
        if not db_log:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service log not found"
            )
        return self.record_payment(db_log, LiabilitySource.SERVICE, db_log.cost or 0, payment)


# Dependency injection
def get_payment_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> PaymentService:
    return PaymentService(db, settings)
