from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from apps.documents.models import DocumentCategory


class DocumentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: DocumentCategory = DocumentCategory.OTHER
    equipment_id: Optional[str] = None
    url: str = Field(..., min_length=1, max_length=1024)
    upload_date: Optional[date] = None


class DocumentCreate(DocumentBase):
    pass


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[DocumentCategory] = None
    equipment_id: Optional[str] = None
    url: Optional[str] = Field(None, min_length=1, max_length=1024)
    upload_date: Optional[date] = None


class DocumentResponse(DocumentBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
