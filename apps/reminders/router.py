from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional
from datetime import datetime

from apps.reminders.schemas import (
    ReminderCreate,
    ReminderResponse,
    ReminderStatusUpdate,
    ReminderWithUrgency
)
from apps.reminders.services import ReminderService, get_reminder_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.dates import utcnow
from core.reminders import ReminderStatus

router = APIRouter()

@router.get(
    "/alerts/active",
    response_model=List[ReminderWithUrgency],
    summary="Active payment alerts",
    description="Pending reminders whose alert window has opened, overdue ones included"
)
def get_active_alerts(
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ReminderService = Depends(get_reminder_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_active_alerts(as_of or utcnow())

@router.get(
    "/",
    response_model=List[ReminderWithUrgency],
    summary="Get reminders",
    description="Payment reminders ordered by scheduled date, with urgency"
)
def get_reminders(
    status_filter: Optional[ReminderStatus] = Query(None, alias="status", description="Filter by status"),
    source_id: Optional[str] = Query(None, description="Filter by equipment or service log"),
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ReminderService = Depends(get_reminder_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_reminders(as_of or utcnow(), status_filter=status_filter, source_id=source_id)

@router.post(
    "/",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule payment reminder",
    description="Schedule a future payment against an equipment purchase or a service bill"
)
def create_reminder(
    reminder: ReminderCreate,
    service: ReminderService = Depends(get_reminder_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_reminder(reminder)

@router.patch(
    "/{reminder_id}/status",
    response_model=ReminderResponse,
    summary="Mark reminder paid or cancelled",
    description="Pending reminders can be marked Paid or Cancelled; both are final"
)
def update_status(
    reminder_id: str,
    status_update: ReminderStatusUpdate,
    service: ReminderService = Depends(get_reminder_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_status(reminder_id, status_update.status)

@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete reminder"
)
def delete_reminder(
    reminder_id: str,
    service: ReminderService = Depends(get_reminder_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_reminder(reminder_id)
    return {"message": "Reminder deleted successfully"}
