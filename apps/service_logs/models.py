from core.database import Base, generate_id
from sqlalchemy import Column, String, Float, Date, DateTime, Text, JSON, Enum as SQLEnum
from datetime import datetime
import enum


class ServiceType(str, enum.Enum):
    PREVENTIVE = "Preventive"
    CORRECTIVE = "Corrective"
    CALIBRATION = "Calibration"


class ServiceLog(Base):
    __tablename__ = "service_logs"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Plain reference; deleting the equipment leaves the log in place
    equipment_id = Column(String(36), index=True, nullable=False)
    equipment_name = Column(String(255), nullable=True)  # Display snapshot

    date = Column(Date, nullable=False)
    type = Column(SQLEnum(ServiceType), default=ServiceType.PREVENTIVE)
    description = Column(Text, nullable=True)
    parts_replaced = Column(JSON, default=list)  # Free-text part names

    # Financial information
    cost = Column(Float, default=0.0)
    paid_amount = Column(Float, default=0.0)
    remaining_amount = Column(Float, default=0.0)
    payment_history = Column(JSON, default=list)

    company_name = Column(String(255), nullable=True)
    technician_name = Column(String(255), nullable=True)
    remarks = Column(Text, nullable=True)
    document_url = Column(String(1024), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
