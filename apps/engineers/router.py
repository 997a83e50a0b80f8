from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional

from apps.engineers.schemas import EngineerCreate, EngineerUpdate, EngineerResponse
from apps.engineers.services import EngineerService, get_engineer_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel

router = APIRouter()

@router.post("/", response_model=EngineerResponse, status_code=status.HTTP_201_CREATED, summary="Add engineer")
def create_engineer(
    engineer: EngineerCreate,
    service: EngineerService = Depends(get_engineer_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_engineer(engineer)

@router.get("/", response_model=List[EngineerResponse], summary="Get engineers")
def get_engineers(
    company_id: Optional[str] = Query(None, description="Filter by service company"),
    service: EngineerService = Depends(get_engineer_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_engineers(company_id)

@router.get("/{engineer_id}", response_model=EngineerResponse, summary="Get engineer by ID")
def get_engineer(
    engineer_id: str,
    service: EngineerService = Depends(get_engineer_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_engineer_or_404(engineer_id)

@router.put("/{engineer_id}", response_model=EngineerResponse, summary="Update engineer")
def update_engineer(
    engineer_id: str,
    engineer_update: EngineerUpdate,
    service: EngineerService = Depends(get_engineer_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_engineer(engineer_id, engineer_update)

@router.delete("/{engineer_id}", summary="Delete engineer")
def delete_engineer(
    engineer_id: str,
    service: EngineerService = Depends(get_engineer_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_engineer(engineer_id)
    return {"message": "Engineer deleted successfully"}
