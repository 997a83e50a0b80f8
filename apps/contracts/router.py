from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional
from datetime import datetime

from apps.contracts.schemas import (
    ContractCreate,
    ContractUpdate,
    ContractResponse,
    ContractDetailResponse,
    ContractWriteResponse
)
from apps.contracts.services import ContractService, get_contract_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.dates import utcnow

router = APIRouter()

@router.post(
    "/",
    response_model=ContractWriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enrol maintenance contract",
    description="Create an AMC/CMC. A warning is returned when the machine is already covered."
)
def create_contract(
    contract: ContractCreate,
    service: ContractService = Depends(get_contract_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_contract, warning = service.create_contract(contract)
    return ContractWriteResponse(contract=db_contract, warning=warning)

@router.get(
    "/",
    response_model=List[ContractResponse],
    summary="Get contracts",
    description="Maintenance contracts ordered by end date"
)
def get_contracts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    equipment_id: Optional[str] = Query(None, description="Filter by equipment"),
    search: Optional[str] = Query(None, description="Search in equipment or company name"),
    service: ContractService = Depends(get_contract_service),
    current_user: UserModel = Depends(get_current_user)
):
    contracts, _ = service.get_contracts(skip=skip, limit=limit, equipment_id=equipment_id, search=search)
    return contracts

@router.get(
    "/{contract_id}",
    response_model=ContractDetailResponse,
    summary="Get contract by ID",
    description="Contract with its Active / Expiring Soon / Expired label"
)
def get_contract(
    contract_id: str,
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: ContractService = Depends(get_contract_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_contract = service.get_contract_or_404(contract_id)
    response = ContractResponse.model_validate(db_contract)
    return ContractDetailResponse(
        **response.model_dump(),
        expiry_status=service.status_label(db_contract, as_of or utcnow())
    )

@router.put(
    "/{contract_id}",
    response_model=ContractWriteResponse,
    summary="Update contract"
)
def update_contract(
    contract_id: str,
    contract_update: ContractUpdate,
    service: ContractService = Depends(get_contract_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_contract, warning = service.update_contract(contract_id, contract_update)
    return ContractWriteResponse(contract=db_contract, warning=warning)

@router.delete(
    "/{contract_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete contract"
)
def delete_contract(
    contract_id: str,
    service: ContractService = Depends(get_contract_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_contract(contract_id)
    return {"message": "Contract deleted successfully"}
