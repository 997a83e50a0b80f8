from core.database import Base, generate_id
from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime


class Engineer(Base):
    __tablename__ = "engineers"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), index=True, nullable=False)
    company_id = Column(String(36), nullable=True)
    company_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    specialties = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
