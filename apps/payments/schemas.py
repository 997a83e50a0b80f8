from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date as date_type

from core.liability import PaymentMethod, PaymentRecord


class PaymentCreate(BaseModel):
    amount: float = Field(..., gt=0, description="Amount paid, must be greater than 0")
    date: Optional[date_type] = Field(None, description="Payment date, defaults to today")
    method: PaymentMethod = PaymentMethod.CASH
    note: str = Field("", max_length=1000)


class PaymentResponse(BaseModel):
    id: str
    source: str
    paid_amount: float
    remaining_amount: float
    overpayment: float = Field(0.0, description="Amount paid beyond the balance owed, not carried as credit")
    payment: PaymentRecord
    settled_reminder_ids: List[str] = Field(default_factory=list)
