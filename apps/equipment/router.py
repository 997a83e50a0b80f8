from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import datetime
import math

from apps.equipment.schemas import (
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentResponse,
    EquipmentListResponse,
    EquipmentStatusUpdate,
    CoverageResponse,
    LicenseRow
)
from apps.equipment.models import EquipmentStatus
from apps.equipment.services import EquipmentService, get_equipment_service
from apps.payments.schemas import PaymentCreate, PaymentResponse
from apps.payments.services import PaymentService, get_payment_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.dates import utcnow
from core.reports import AssetGroup

router = APIRouter()

# ============ STATIC ROUTES FIRST (before /{equipment_id}) ============

@router.get(
    "/groups",
    response_model=List[AssetGroup],
    summary="Asset groups",
    description="Equipment grouped by group name; ungrouped units fall under 'Standalone Assets'"
)
def get_groups(
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_groups()

@router.get(
    "/licenses/all",
    response_model=List[LicenseRow],
    summary="License register",
    description="Regulatory licenses of all equipment that requires one, with expiry status"
)
def get_licenses(
    search: Optional[str] = Query(None, description="Search by equipment or license name"),
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_licenses(as_of or utcnow(), search=search)

# ============ CRUD ROUTES ============

@router.post(
    "/",
    response_model=EquipmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register equipment",
    description="Register a new asset. Remaining amount and warranty expiry are computed."
)
def create_equipment(
    equipment: EquipmentCreate,
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_equipment(equipment)

@router.get(
    "/",
    response_model=EquipmentListResponse,
    summary="Get all equipment",
    description="Retrieve equipment with filtering and pagination"
)
def get_all_equipment(
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Number of items to return"),
    search: Optional[str] = Query(None, description="Search in name, serial number, group or brand"),
    status_filter: Optional[EquipmentStatus] = Query(None, alias="status", description="Filter by status"),
    group_name: Optional[str] = Query(None, description="Filter by group"),
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    items, total = service.get_all_equipment(
        skip=skip,
        limit=limit,
        search=search,
        status_filter=status_filter,
        group_name=group_name
    )

    total_pages = math.ceil(total / limit) if limit > 0 else 1
    current_page = (skip // limit) + 1 if limit > 0 else 1

    return EquipmentListResponse(
        items=items,
        total=total,
        page=current_page,
        size=limit,
        total_pages=total_pages
    )

# ============ DYNAMIC ROUTES ============

@router.get(
    "/{equipment_id}",
    response_model=EquipmentResponse,
    summary="Get equipment by ID"
)
def get_equipment(
    equipment_id: str,
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    equipment = service.get_equipment(equipment_id)
    if not equipment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Equipment not found"
        )
    return equipment

@router.put(
    "/{equipment_id}",
    response_model=EquipmentResponse,
    summary="Update equipment"
)
def update_equipment(
    equipment_id: str,
    equipment_update: EquipmentUpdate,
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_equipment(equipment_id, equipment_update)

@router.delete(
    "/{equipment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete equipment",
    description="Delete an asset. Related service logs, contracts and reminders are kept."
)
def delete_equipment(
    equipment_id: str,
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_equipment(equipment_id)
    return {"message": "Equipment deleted successfully"}

@router.patch(
    "/{equipment_id}/status",
    response_model=EquipmentResponse,
    summary="Update operational status",
    description="Toggle an asset between Operational, Under Maintenance, Down and Scrapped"
)
def update_status(
    equipment_id: str,
    status_update: EquipmentStatusUpdate,
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_status(equipment_id, status_update.status)

@router.get(
    "/{equipment_id}/coverage",
    response_model=CoverageResponse,
    summary="Current coverage",
    description="Warranty or maintenance contract protecting the asset, warranty first"
)
def get_coverage(
    equipment_id: str,
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to now)"),
    service: EquipmentService = Depends(get_equipment_service),
    current_user: UserModel = Depends(get_current_user)
):
    coverage = service.get_coverage(equipment_id, as_of or utcnow())
    return CoverageResponse(equipment_id=equipment_id, coverage=coverage)

@router.post(
    "/{equipment_id}/payments",
    response_model=PaymentResponse,
    summary="Record purchase payment",
    description="Settle part of the outstanding purchase balance"
)
def record_payment(
    equipment_id: str,
    payment: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.pay_equipment(equipment_id, payment)
