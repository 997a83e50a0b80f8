from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel

from core.dates import DateLike, days_between
from core.errors import ValidationFailure


class ReminderStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class ReminderUrgency(BaseModel):
    days_until: int
    is_overdue: bool
    is_due_today: bool
    is_alert_active: bool


# Paid and Cancelled are terminal.
ALLOWED_TRANSITIONS = {
    ReminderStatus.PENDING: {ReminderStatus.PAID, ReminderStatus.CANCELLED},
    ReminderStatus.PAID: set(),
    ReminderStatus.CANCELLED: set(),
}


def resolve_reminder_urgency(reminder, now: DateLike) -> ReminderUrgency:
    """Day count between now and the scheduled date, both taken at midnight."""
    days_until = days_between(reminder.scheduled_date, now)
    return ReminderUrgency(
        days_until=days_until,
        is_overdue=days_until < 0,
        is_due_today=days_until == 0,
        is_alert_active=days_until <= (reminder.lead_days or 0),
    )


def is_pending(reminder) -> bool:
    return ReminderStatus(reminder.status or ReminderStatus.PENDING) == ReminderStatus.PENDING


def active_alerts(reminders: Iterable, now: DateLike) -> List:
    return [
        r for r in reminders
        if is_pending(r) and resolve_reminder_urgency(r, now).is_alert_active
    ]


def check_transition(current, target) -> ReminderStatus:
    current = ReminderStatus(current or ReminderStatus.PENDING)
    target = ReminderStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise ValidationFailure(
            f"Cannot change reminder status from {current.value} to {target.value}", field="status"
        )
    return target


def settled_reminders(reminders: Iterable, source_id: str) -> List:
    """Pending reminders that a fully settled item no longer needs."""
    return [r for r in reminders if r.source_id == source_id and is_pending(r)]
