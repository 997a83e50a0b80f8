"""
Outstanding balances and payment settlement.

Both equipment purchases and service logs carry the same settlement triple
(total cost, paid amount, remaining amount) plus an append-only payment
history. An item is in debt while its remaining amount is above zero.
"""

import uuid
from datetime import date as date_type, datetime
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from core.dates import DateLike, to_date, utcnow
from core.errors import ValidationFailure

UNKNOWN_VENDOR = "Unknown Vendor"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CHECK = "Check"
    BANK_TRANSFER = "Bank Transfer"
    MOBILE_BANKING = "Mobile Banking"
    OTHER = "Other"


class LiabilitySource(str, Enum):
    EQUIPMENT = "equipment"
    SERVICE = "service"


class PaymentRecord(BaseModel):
    id: str
    amount: float
    date: date_type
    method: PaymentMethod = PaymentMethod.CASH
    note: str = ""
    created_at: Optional[datetime] = None


class LiabilityItem(BaseModel):
    id: str
    source: LiabilitySource
    name: str
    provider: str
    total_cost: float
    paid: float
    remaining: float


class LiabilitySummary(BaseModel):
    purchase_outstanding: float = 0.0
    purchase_count: int = 0
    service_outstanding: float = 0.0
    service_count: int = 0
    total_outstanding: float = 0.0
    total_count: int = 0
    items: List[LiabilityItem] = Field(default_factory=list)


class PaymentResult(BaseModel):
    paid_amount: float
    remaining_amount: float
    overpayment: float
    record: PaymentRecord
    payment_history: List[dict]


def compute_remaining(total_cost, paid_amount) -> float:
    # Not clamped: a record entered with paid > cost keeps its negative balance.
    return float(total_cost or 0) - float(paid_amount or 0)


def equipment_item(equipment) -> LiabilityItem:
    return LiabilityItem(
        id=equipment.id,
        source=LiabilitySource.EQUIPMENT,
        name=equipment.name,
        provider=equipment.supplier_name or UNKNOWN_VENDOR,
        total_cost=float(equipment.purchase_price or 0),
        paid=float(equipment.paid_amount or 0),
        remaining=float(equipment.remaining_amount or 0),
    )


def service_item(log) -> LiabilityItem:
    return LiabilityItem(
        id=log.id,
        source=LiabilitySource.SERVICE,
        name=log.equipment_name or "Unknown",
        provider=log.company_name or UNKNOWN_VENDOR,
        total_cost=float(log.cost or 0),
        paid=float(log.paid_amount or 0),
        remaining=float(log.remaining_amount or 0),
    )


def aggregate_liability(equipment: Iterable, service_logs: Iterable) -> LiabilitySummary:
    purchase = [equipment_item(e) for e in equipment if (e.remaining_amount or 0) > 0]
    service = [service_item(l) for l in service_logs if (l.remaining_amount or 0) > 0]

    purchase_out = sum(item.remaining for item in purchase)
    service_out = sum(item.remaining for item in service)

    items = sorted(service + purchase, key=lambda item: item.remaining, reverse=True)
    return LiabilitySummary(
        purchase_outstanding=purchase_out,
        purchase_count=len(purchase),
        service_outstanding=service_out,
        service_count=len(service),
        total_outstanding=purchase_out + service_out,
        total_count=len(purchase) + len(service),
        items=items,
    )


def apply_payment(
    item,
    amount: float,
    paid_on: Optional[DateLike] = None,
    method: PaymentMethod = PaymentMethod.CASH,
    note: str = "",
    *,
    total_cost: float,
    allow_overpayment: bool = True,
) -> PaymentResult:
    """
    Settle part of an item's balance.

    The new remaining amount is clamped at zero. Whatever was paid beyond the
    balance still owed is returned as ``overpayment`` rather than tracked as
    credit; with ``allow_overpayment=False`` such payments are rejected.
    The item itself is not modified.
    """
    if amount is None or amount <= 0:
        raise ValidationFailure("Payment amount must be greater than zero", field="amount")

    old_paid = float(item.paid_amount or 0)
    owed = max(0.0, float(total_cost or 0) - old_paid)
    overpayment = max(0.0, amount - owed)
    if overpayment > 0 and not allow_overpayment:
        raise ValidationFailure(
            f"Payment of {amount} exceeds the outstanding balance of {owed}", field="amount"
        )

    new_paid = old_paid + amount
    record = PaymentRecord(
        id=str(uuid.uuid4()),
        amount=amount,
        date=to_date(paid_on) or utcnow().date(),
        method=PaymentMethod(method),
        note=note or "",
        created_at=utcnow(),
    )
    history = list(item.payment_history or [])
    history.append(record.model_dump(mode="json"))

    return PaymentResult(
        paid_amount=new_paid,
        remaining_amount=max(0.0, float(total_cost or 0) - new_paid),
        overpayment=overpayment,
        record=record,
        payment_history=history,
    )
