from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional

from apps.documents.models import DocumentCategory
from apps.documents.schemas import DocumentCreate, DocumentUpdate, DocumentResponse
from apps.documents.services import DocumentService, get_document_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel

router = APIRouter()

@router.post(
    "/",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register document",
    description="Record a manual, certificate or bill already stored elsewhere, by URL"
)
def create_document(
    document: DocumentCreate,
    service: DocumentService = Depends(get_document_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_document(document)

@router.get("/", response_model=List[DocumentResponse], summary="Get documents")
def get_documents(
    equipment_id: Optional[str] = Query(None, description="Filter by equipment"),
    category: Optional[DocumentCategory] = Query(None, description="Filter by category"),
    service: DocumentService = Depends(get_document_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_documents(equipment_id, category)

@router.get("/{document_id}", response_model=DocumentResponse, summary="Get document by ID")
def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_document_or_404(document_id)

@router.put("/{document_id}", response_model=DocumentResponse, summary="Update document")
def update_document(
    document_id: str,
    document_update: DocumentUpdate,
    service: DocumentService = Depends(get_document_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_document(document_id, document_update)

@router.delete("/{document_id}", summary="Delete document")
def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_document(document_id)
    return {"message": "Document deleted successfully"}
