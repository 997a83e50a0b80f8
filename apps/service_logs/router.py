from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional
import math

from apps.service_logs.schemas import (
    ServiceLogCreate,
    ServiceLogUpdate,
    ServiceLogResponse,
    ServiceLogListResponse
)
from apps.service_logs.models import ServiceType
from apps.service_logs.services import ServiceLogService, get_service_log_service
from apps.payments.schemas import PaymentCreate, PaymentResponse
from apps.payments.services import PaymentService, get_payment_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel

router = APIRouter()

@router.post(
    "/",
    response_model=ServiceLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a service visit",
    description="Log preventive, corrective or calibration work on an asset"
)
def create_log(
    log: ServiceLogCreate,
    service: ServiceLogService = Depends(get_service_log_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.create_log(log)

@router.get(
    "/",
    response_model=ServiceLogListResponse,
    summary="Get service logs",
    description="Retrieve service logs with filtering and pagination, newest first"
)
def get_logs(
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Number of items to return"),
    equipment_id: Optional[str] = Query(None, description="Filter by equipment"),
    service_type: Optional[ServiceType] = Query(None, alias="type", description="Filter by service type"),
    search: Optional[str] = Query(None, description="Search in equipment, company or technician"),
    unpaid_only: bool = Query(False, description="Show only logs with a due balance"),
    service: ServiceLogService = Depends(get_service_log_service),
    current_user: UserModel = Depends(get_current_user)
):
    logs, total = service.get_logs(
        skip=skip,
        limit=limit,
        equipment_id=equipment_id,
        service_type=service_type,
        search=search,
        unpaid_only=unpaid_only
    )

    total_pages = math.ceil(total / limit) if limit > 0 else 1
    current_page = (skip // limit) + 1 if limit > 0 else 1

    return ServiceLogListResponse(
        items=logs,
        total=total,
        page=current_page,
        size=limit,
        total_pages=total_pages
    )

@router.get(
    "/{log_id}",
    response_model=ServiceLogResponse,
    summary="Get service log by ID"
)
def get_log(
    log_id: str,
    service: ServiceLogService = Depends(get_service_log_service),
    current_user: UserModel = Depends(get_current_user)
):
    log = service.get_log(log_id)
    if not log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service log not found"
        )
    return log

@router.put(
    "/{log_id}",
    response_model=ServiceLogResponse,
    summary="Update service log"
)
def update_log(
    log_id: str,
    log_update: ServiceLogUpdate,
    service: ServiceLogService = Depends(get_service_log_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.update_log(log_id, log_update)

@router.delete(
    "/{log_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete service log"
)
def delete_log(
    log_id: str,
    service: ServiceLogService = Depends(get_service_log_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.delete_log(log_id)
    return {"message": "Service log deleted successfully"}

@router.post(
    "/{log_id}/payments",
    response_model=PaymentResponse,
    summary="Record service payment",
    description="Settle part of the outstanding service bill"
)
def record_payment(
    log_id: str,
    payment: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
    current_user: UserModel = Depends(get_current_user)
):
    return service.pay_service_log(log_id, payment)
