from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date, datetime

from apps.contracts.models import ContractType, ContractStatus
from core.coverage import ExpiryStatus


class ContractBase(BaseModel):
    equipment_id: str = Field(..., min_length=1)
    company_id: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    engineer_ids: List[str] = Field(default_factory=list)
    type: ContractType = ContractType.AMC
    start_date: Optional[date] = None
    end_date: date
    amount: float = Field(0.0, ge=0)
    description: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ContractCreate(ContractBase):
    pass


class ContractUpdate(BaseModel):
    equipment_id: Optional[str] = Field(None, min_length=1)
    company_id: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    engineer_ids: Optional[List[str]] = None
    type: Optional[ContractType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    amount: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None


class ContractResponse(ContractBase):
    id: str
    equipment_name: Optional[str]
    status: ContractStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ContractDetailResponse(ContractResponse):
    expiry_status: ExpiryStatus


class ContractWriteResponse(BaseModel):
    """Written contract plus any coverage overlap the caller should know about"""
    contract: ContractResponse
    warning: Optional[str] = None
