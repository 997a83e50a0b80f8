from core.database import Base, generate_id
from sqlalchemy import Column, String, Float, DateTime, Text, JSON
from datetime import datetime


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(String(36), primary_key=True, default=generate_id)
    company_name = Column(String(255), index=True, nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    machines = Column(JSON, default=list)  # Machines the vendor can supply or service
    rating = Column(Float, default=0.0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
