from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from apps.reminders.models import ReminderSource
from core.reminders import ReminderStatus, ReminderUrgency


class ReminderCreate(BaseModel):
    source_id: str = Field(..., min_length=1)
    source_type: ReminderSource
    amount_to_pay: float = Field(..., gt=0)
    scheduled_date: date
    lead_days: int = Field(3, ge=1, le=30, description="Alert this many days before the scheduled date")
    notes: Optional[str] = None


class ReminderStatusUpdate(BaseModel):
    status: ReminderStatus


class ReminderResponse(BaseModel):
    id: str
    source_id: str
    source_type: ReminderSource
    name: Optional[str]
    provider: Optional[str]
    amount_to_pay: float
    scheduled_date: date
    lead_days: int
    status: ReminderStatus
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class ReminderWithUrgency(ReminderResponse):
    urgency: ReminderUrgency
