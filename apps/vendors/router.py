from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional

from apps.vendors.schemas import VendorCreate, VendorUpdate, VendorResponse
from apps.vendors.services import VendorService, get_vendor_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel

router = APIRouter()

@router.post("/", response_model=VendorResponse, status_code=status.HTTP_201_CREATED, summary="Add vendor")
def create_vendor(
    vendor: VendorCreate,
    service: VendorService = Depends(get_vendor_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_vendor(vendor)

@router.get("/", response_model=List[VendorResponse], summary="Get vendors")
def get_vendors(
    search: Optional[str] = Query(None, description="Search by company name"),
    service: VendorService = Depends(get_vendor_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_vendors(search)

@router.get("/{vendor_id}", response_model=VendorResponse, summary="Get vendor by ID")
def get_vendor(
    vendor_id: str,
    service: VendorService = Depends(get_vendor_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.get_vendor_or_404(vendor_id)

@router.put("/{vendor_id}", response_model=VendorResponse, summary="Update vendor")
def update_vendor(
    vendor_id: str,
    vendor_update: VendorUpdate,
    service: VendorService = Depends(get_vendor_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_vendor(vendor_id, vendor_update)

@router.delete("/{vendor_id}", summary="Delete vendor")
def delete_vendor(
    vendor_id: str,
    service: VendorService = Depends(get_vendor_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_vendor(vendor_id)
    return {"message": "Vendor deleted successfully"}
