from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from apps.equipment.models import EquipmentStatus
from core.coverage import Coverage, LicenseStatus
from core.liability import PaymentRecord


class LicenseInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    number: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    renewal_lead_days: int = Field(30, ge=0, description="Days before expiry to start renewal")
    renewal_source: Optional[str] = None
    notes: Optional[str] = None


class EquipmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    group_name: Optional[str] = Field(None, max_length=255, description="Groups standalone units under a shared label")
    brand: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=255)
    serial_number: Optional[str] = Field(None, max_length=255)
    manufacturer: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    quantity: int = Field(1, ge=1)
    purchase_price: float = Field(0.0, ge=0)
    paid_amount: float = Field(0.0, ge=0)
    purchase_date: Optional[date] = None
    installation_date: Optional[date] = None
    expected_lifecycle: Optional[int] = Field(None, ge=0, description="Expected lifecycle in years")
    has_warranty: bool = False
    warranty_duration_days: Optional[int] = Field(None, ge=0)
    warranty_expiry_date: Optional[date] = Field(None, description="Recomputed from purchase date and duration when both are set")
    supplier_id: Optional[str] = None
    supplier_name: Optional[str] = None
    contractor_ids: List[str] = Field(default_factory=list)
    status: EquipmentStatus = EquipmentStatus.OPERATIONAL
    notes: Optional[str] = None
    license_required: bool = False
    license_info: Optional[LicenseInfo] = None


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    group_name: Optional[str] = Field(None, max_length=255)
    brand: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=255)
    serial_number: Optional[str] = Field(None, max_length=255)
    manufacturer: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    quantity: Optional[int] = Field(None, ge=1)
    purchase_price: Optional[float] = Field(None, ge=0)
    paid_amount: Optional[float] = Field(None, ge=0)
    purchase_date: Optional[date] = None
    installation_date: Optional[date] = None
    expected_lifecycle: Optional[int] = Field(None, ge=0)
    has_warranty: Optional[bool] = None
    warranty_duration_days: Optional[int] = Field(None, ge=0)
    warranty_expiry_date: Optional[date] = None
    supplier_id: Optional[str] = None
    supplier_name: Optional[str] = None
    contractor_ids: Optional[List[str]] = None
    status: Optional[EquipmentStatus] = None
    notes: Optional[str] = None
    license_required: Optional[bool] = None
    license_info: Optional[LicenseInfo] = None


class EquipmentResponse(EquipmentBase):
    id: str
    remaining_amount: float
    payment_history: List[PaymentRecord] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EquipmentStatusUpdate(BaseModel):
    status: EquipmentStatus


class CoverageResponse(BaseModel):
    equipment_id: str
    coverage: Coverage


class LicenseRow(BaseModel):
    equipment_id: str
    equipment_name: str
    license_required: bool
    license_info: Optional[LicenseInfo] = None
    status: LicenseStatus
    renewal_due: bool


class EquipmentListResponse(BaseModel):
    items: List[EquipmentResponse]
    total: int
    page: int
    size: int
    total_pages: int
