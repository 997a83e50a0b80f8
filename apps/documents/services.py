from sqlalchemy.orm import Session
from typing import List, Optional
from fastapi import HTTPException, status, Depends
import logging

from apps.documents.models import Document, DocumentCategory
from apps.documents.schemas import DocumentCreate, DocumentUpdate
from core.database import get_db
from core.dates import utcnow

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, db: Session):
        self.db = db

    def get_document_or_404(self, document_id: str) -> Document:
        db_document = self.db.query(Document).filter(Document.id == document_id).first()
        if not db_document:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Document not found"
            )
        return db_document

    def get_documents(
        self,
        equipment_id: Optional[str] = None,
        category: Optional[DocumentCategory] = None
    ) -> List[Document]:
        query = self.db.query(Document)
        if equipment_id:
            query = query.filter(Document.equipment_id == equipment_id)
        if category:
            query = query.filter(Document.category == category)
        return query.order_by(Document.created_at.desc()).all()

    def create_document(self, document: DocumentCreate) -> Document:
        data = document.model_dump()
        data["upload_date"] = data["upload_date"] or utcnow().date()
        db_document = Document(**data)
        self.db.add(db_document)
        self.db.commit()
        self.db.refresh(db_document)

        logger.info(f"Registered document: {db_document.name} (ID: {db_document.id})")
        return db_document

    def update_document(self, document_id: str, document_update: DocumentUpdate) -> Document:
        db_document = self.get_document_or_404(document_id)
        for field, value in document_update.model_dump(exclude_unset=True).items():
            setattr(db_document, field, value)

        self.db.commit()
        self.db.refresh(db_document)

        logger.info(f"Updated document: {db_document.name}")
        return db_document

    def delete_document(self, document_id: str) -> bool:
        db_document = self.get_document_or_404(document_id)
        self.db.delete(db_document)
        self.db.commit()

        logger.info(f"Deleted document: {db_document.name}")
        return True


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(db)
