from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class EngineerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company_id: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    specialties: Optional[str] = None


class EngineerCreate(EngineerBase):
    pass


class EngineerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    company_id: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    specialties: Optional[str] = None


class EngineerResponse(EngineerBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
