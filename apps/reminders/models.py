from core.database import Base, generate_id
from core.reminders import ReminderStatus
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text, Enum as SQLEnum
from datetime import datetime
import enum


class ReminderSource(str, enum.Enum):
    EQUIPMENT = "equipment"
    SERVICE = "service"


class PaymentReminder(Base):
    __tablename__ = "payment_reminders"

    id = Column(String(36), primary_key=True, default=generate_id)
    source_id = Column(String(36), index=True, nullable=False)
    source_type = Column(SQLEnum(ReminderSource), nullable=False)
    name = Column(String(255), nullable=True)
    provider = Column(String(255), nullable=True)

    amount_to_pay = Column(Float, nullable=False)
    scheduled_date = Column(Date, index=True, nullable=False)
    lead_days = Column(Integer, default=3)  # Alert this many days ahead
    status = Column(SQLEnum(ReminderStatus), default=ReminderStatus.PENDING)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
