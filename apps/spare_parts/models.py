from core.database import Base, generate_id
from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from datetime import datetime

class SparePart(Base):
    __tablename__ = "spare_parts"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), index=True, nullable=False)
    quantity = Column(Integer, default=0)
    min_quantity = Column(Integer, default=5)  # Reorder when stock falls to this level
    price = Column(Float, default=0.0)
    supplier = Column(String(255), nullable=True)
    compatibility = Column(JSON, default=list)  # Equipment names, matched as free text
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
