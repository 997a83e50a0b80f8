from core.database import Base, generate_id
from sqlalchemy import Column, String, Float, Date, DateTime, Text, JSON, Enum as SQLEnum
from datetime import datetime
import enum


class ContractType(str, enum.Enum):
    AMC = "AMC"
    CMC = "CMC"


class ContractStatus(str, enum.Enum):
    ACTIVE = "Active"
    EXPIRED = "Expired"


class MaintenanceContract(Base):
    __tablename__ = "maintenance_contracts"

    id = Column(String(36), primary_key=True, default=generate_id)
    equipment_id = Column(String(36), index=True, nullable=False)
    equipment_name = Column(String(255), nullable=True)

    company_id = Column(String(36), nullable=True)
    company_name = Column(String(255), nullable=True)
    engineer_ids = Column(JSON, default=list)

    type = Column(SQLEnum(ContractType), default=ContractType.AMC)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=False)
    amount = Column(Float, default=0.0)
    description = Column(Text, nullable=True)

    # Computed when the contract is written, not kept live
    status = Column(SQLEnum(ContractStatus), default=ContractStatus.ACTIVE)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
