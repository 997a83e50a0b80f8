from core.database import Base, generate_id
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text, Boolean, JSON, Enum as SQLEnum
from datetime import datetime
import enum


class EquipmentStatus(str, enum.Enum):
    OPERATIONAL = "Operational"
    UNDER_MAINTENANCE = "Under Maintenance"
    DOWN = "Down"
    SCRAPPED = "Scrapped"


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), index=True, nullable=False)
    group_name = Column(String(255), index=True, nullable=True)  # Shared label for standalone units

    # Identification
    brand = Column(String(255), nullable=True)
    type = Column(String(100), nullable=True)
    model = Column(String(255), nullable=True)
    serial_number = Column(String(255), index=True, nullable=True)
    manufacturer = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    quantity = Column(Integer, default=1)

    # Acquisition and settlement
    purchase_price = Column(Float, default=0.0)
    paid_amount = Column(Float, default=0.0)
    remaining_amount = Column(Float, default=0.0)
    purchase_date = Column(Date, nullable=True)
    installation_date = Column(Date, nullable=True)
    expected_lifecycle = Column(Integer, nullable=True)  # Years
    payment_history = Column(JSON, default=list)

    # Warranty
    has_warranty = Column(Boolean, default=False)
    warranty_duration_days = Column(Integer, nullable=True)
    warranty_expiry_date = Column(Date, nullable=True)

    # Supplier and contractors (engineer ids)
    supplier_id = Column(String(36), nullable=True)
    supplier_name = Column(String(255), nullable=True)
    contractor_ids = Column(JSON, default=list)

    status = Column(SQLEnum(EquipmentStatus), default=EquipmentStatus.OPERATIONAL)
    notes = Column(Text, nullable=True)

    # Regulatory license
    license_required = Column(Boolean, default=False)
    license_info = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
