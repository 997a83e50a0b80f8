from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

class SparePartBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Part name as written on service logs")
    quantity: int = Field(0, ge=0, description="Units in stock")
    min_quantity: int = Field(5, ge=0, description="Reorder threshold")
    price: float = Field(0.0, ge=0, description="Unit price")
    supplier: Optional[str] = Field(None, max_length=255)
    compatibility: List[str] = Field(default_factory=list, description="Equipment names the part fits")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return v.strip()

class SparePartCreate(SparePartBase):
    pass

class SparePartUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(None, ge=0)
    min_quantity: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = Field(None, max_length=255)
    compatibility: Optional[List[str]] = None

class SparePartResponse(SparePartBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class SparePartStockUpdate(BaseModel):
    quantity_change: int = Field(..., description="Positive to add stock, negative to remove")
    reason: Optional[str] = Field(None, description="Reason for stock change")

class SparePartListResponse(BaseModel):
    items: List[SparePartResponse]
    total: int
    page: int
    size: int
    total_pages: int

class LowStockAlert(BaseModel):
    spare_part: SparePartResponse
    current_stock: int
    minimum_level: int
    out_of_stock: bool
