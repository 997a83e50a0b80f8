from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class VendorMachine(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    brand: Optional[str] = None
    origin: Optional[str] = None
    description: Optional[str] = None


class VendorBase(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    machines: List[VendorMachine] = Field(default_factory=list)
    rating: float = Field(0.0, ge=0, le=5)


class VendorCreate(VendorBase):
    pass


class VendorUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    machines: Optional[List[VendorMachine]] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class VendorResponse(VendorBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
