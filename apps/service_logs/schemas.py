from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date as date_type, datetime

from apps.service_logs.models import ServiceType
from core.liability import PaymentRecord


class ServiceLogBase(BaseModel):
    equipment_id: str = Field(..., min_length=1)
    date: date_type
    type: ServiceType = ServiceType.PREVENTIVE
    description: Optional[str] = None
    parts_replaced: List[str] = Field(default_factory=list, description="Names of replaced parts")
    cost: float = Field(0.0, ge=0)
    paid_amount: float = Field(0.0, ge=0)
    company_name: Optional[str] = Field(None, max_length=255)
    technician_name: Optional[str] = Field(None, max_length=255)
    remarks: Optional[str] = None
    document_url: Optional[str] = Field(None, max_length=1024)


class ServiceLogCreate(ServiceLogBase):
    pass


class ServiceLogUpdate(BaseModel):
    equipment_id: Optional[str] = Field(None, min_length=1)
    date: Optional[date_type] = None
    type: Optional[ServiceType] = None
    description: Optional[str] = None
    parts_replaced: Optional[List[str]] = None
    cost: Optional[float] = Field(None, ge=0)
    paid_amount: Optional[float] = Field(None, ge=0)
    company_name: Optional[str] = Field(None, max_length=255)
    technician_name: Optional[str] = Field(None, max_length=255)
    remarks: Optional[str] = None
    document_url: Optional[str] = Field(None, max_length=1024)


class ServiceLogResponse(ServiceLogBase):
    id: str
    equipment_name: Optional[str]
    remaining_amount: float
    payment_history: List[PaymentRecord] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ServiceLogListResponse(BaseModel):
    items: List[ServiceLogResponse]
    total: int
    page: int
    size: int
    total_pages: int
