from core.database import Base, generate_id
from sqlalchemy import Column, String, Date, DateTime, Enum as SQLEnum
from datetime import datetime
import enum


class DocumentCategory(str, enum.Enum):
    MANUAL = "Manual"
    CERTIFICATE = "Certificate"
    BILL = "Bill"
    QUOTATION = "Quotation"
    OTHER = "Other"


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), index=True, nullable=False)
    category = Column(SQLEnum(DocumentCategory), default=DocumentCategory.OTHER)
    equipment_id = Column(String(36), index=True, nullable=True)
    url = Column(String(1024), nullable=False)  # Location returned by the file store
    upload_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
