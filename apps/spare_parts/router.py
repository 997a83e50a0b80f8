from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from apps.spare_parts.schemas import (
    SparePartCreate,
    SparePartUpdate,
    SparePartResponse,
    SparePartStockUpdate,
    SparePartListResponse,
    LowStockAlert
)
from apps.spare_parts.services import SparePartService, get_spare_part_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
import math

router = APIRouter()

# ============ STATIC ROUTES FIRST ============

@router.get(
    "/alerts/low-stock",
    response_model=List[LowStockAlert],
    summary="Get low stock alerts",
    description="Spare parts whose stock is at or below their reorder threshold"
)
def get_low_stock_alerts(
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_low_stock_items()

@router.get(
    "/compatible/search",
    response_model=List[SparePartResponse],
    summary="Parts for a machine",
    description="Spare parts whose compatibility list mentions the given equipment name"
)
def get_compatible_parts(
    equipment_name: str = Query(..., min_length=1, description="Equipment name"),
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_compatible_parts(equipment_name)

@router.post(
    "/",
    response_model=SparePartResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new spare part",
    description="Add a spare part to the inventory"
)
def create_spare_part(
    spare_part: SparePartCreate,
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_spare_part(spare_part)

@router.get(
    "/",
    response_model=SparePartListResponse,
    summary="Get all spare parts",
    description="Retrieve spare parts with filtering and pagination"
)
def get_spare_parts(
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Number of items to return"),
    search: Optional[str] = Query(None, description="Search in name or supplier"),
    supplier: Optional[str] = Query(None, description="Filter by supplier"),
    low_stock_only: bool = Query(False, description="Show only low stock items"),
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    spare_parts, total = service.get_spare_parts(
        skip=skip,
        limit=limit,
        search=search,
        supplier=supplier,
        low_stock_only=low_stock_only
    )

    total_pages = math.ceil(total / limit) if limit > 0 else 1
    current_page = (skip // limit) + 1 if limit > 0 else 1

    return SparePartListResponse(
        items=spare_parts,
        total=total,
        page=current_page,
        size=limit,
        total_pages=total_pages
    )

# ============ DYNAMIC ROUTES ============

@router.get(
    "/{spare_part_id}",
    response_model=SparePartResponse,
    summary="Get spare part by ID"
)
def get_spare_part(
    spare_part_id: str,
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    spare_part = service.get_spare_part(spare_part_id)
    if not spare_part:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Spare part not found"
        )
    return spare_part

@router.put(
    "/{spare_part_id}",
    response_model=SparePartResponse,
    summary="Update spare part"
)
def update_spare_part(
    spare_part_id: str,
    spare_part_update: SparePartUpdate,
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_spare_part(spare_part_id, spare_part_update)

@router.delete(
    "/{spare_part_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete spare part"
)
def delete_spare_part(
    spare_part_id: str,
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_spare_part(spare_part_id)
    return {"message": "Spare part deleted successfully"}

@router.patch(
    "/{spare_part_id}/stock",
    response_model=SparePartResponse,
    summary="Update stock quantity",
    description="Add or withdraw stock. Stock cannot go below zero."
)
def update_stock(
    spare_part_id: str,
    stock_update: SparePartStockUpdate,
    service: SparePartService = Depends(get_spare_part_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_stock(spare_part_id, stock_update)
