from fastapi import APIRouter, Depends, Query
from typing import Optional

from apps.payments.services import PaymentService, get_payment_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.liability import LiabilitySummary

router = APIRouter()

@router.get(
    "/outstanding",
    response_model=LiabilitySummary,
    summary="Outstanding balances",
    description="Unsettled equipment purchases and service bills, largest balance first"
)
def get_outstanding(
    search: Optional[str] = Query(None, description="Filter items by name or provider"),
    service: PaymentService = Depends(get_payment_service),
    current_user: UserModel = Depends(get_current_user)
):
    summary = service.get_outstanding()
    if search:
        needle = search.lower()
        summary.items = [
            item for item in summary.items
            if needle in item.name.lower() or needle in item.provider.lower()
        ]
    return summary
