"""
Warranty and maintenance-contract coverage.

An asset is protected either by its own OEM warranty or by a maintenance
contract (AMC/CMC) whose end date has not passed. Warranty is checked first
and always wins when both are active. Expiry comparisons are made by
calendar day, so an asset whose cover ends today is still covered today.
"""

from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from core.dates import DateLike, add_days, ceil_days, to_date

WARNING_WINDOW_DAYS = 30
DEFAULT_RENEWAL_LEAD_DAYS = 30


class CoverageKind(str, Enum):
    WARRANTY = "warranty"
    CONTRACT = "contract"
    NONE = "none"


class ExpiryStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class LicenseStatus(str, Enum):
    VALID = "Valid"
    DUE_SOON = "Due Soon"
    EXPIRED = "Expired"
    INCOMPLETE = "Incomplete"


class Coverage(BaseModel):
    kind: CoverageKind
    expiry_date: Optional[date] = None
    days_remaining: Optional[int] = None
    contract_type: Optional[str] = None
    contract_id: Optional[str] = None

    @property
    def is_covered(self) -> bool:
        return self.kind != CoverageKind.NONE


class CoverageAudit(BaseModel):
    total: int
    warranty_count: int
    contract_count: int
    uncovered_count: int
    uncovered_ids: List[str]


def _value(obj):
    return getattr(obj, "value", obj)


def compute_warranty_expiry(purchase_date: Optional[DateLike], duration_days: Optional[int]) -> Optional[date]:
    """purchase_date + duration_days, or None when either is missing."""
    if purchase_date is None or duration_days is None:
        return None
    return add_days(purchase_date, int(duration_days))


def days_remaining(expiry: DateLike, now: DateLike) -> int:
    # Same-day and lapsed cover both display as zero.
    return max(0, ceil_days(expiry, now))


def is_warranty_active(asset, now: DateLike) -> bool:
    expiry = to_date(getattr(asset, "warranty_expiry_date", None))
    return bool(getattr(asset, "has_warranty", False)) and expiry is not None and expiry >= to_date(now)


def active_contracts(contracts: Iterable, now: DateLike, equipment_id: Optional[str] = None) -> list:
    today = to_date(now)
    result = []
    for contract in contracts:
        if equipment_id is not None and contract.equipment_id != equipment_id:
            continue
        end = to_date(contract.end_date)
        if end is not None and end >= today:
            result.append(contract)
    return result


def latest_active_contract(asset, contracts: Iterable, now: DateLike):
    candidates = active_contracts(contracts, now, equipment_id=asset.id)
    if not candidates:
        return None
    return max(candidates, key=lambda c: to_date(c.end_date))


def resolve_coverage(asset, contracts: Iterable, now: DateLike) -> Coverage:
    if is_warranty_active(asset, now):
        expiry = to_date(asset.warranty_expiry_date)
        return Coverage(
            kind=CoverageKind.WARRANTY,
            expiry_date=expiry,
            days_remaining=days_remaining(expiry, now),
        )

    contract = latest_active_contract(asset, contracts, now)
    if contract is not None:
        expiry = to_date(contract.end_date)
        return Coverage(
            kind=CoverageKind.CONTRACT,
            expiry_date=expiry,
            days_remaining=days_remaining(expiry, now),
            contract_type=_value(contract.type),
            contract_id=contract.id,
        )

    return Coverage(kind=CoverageKind.NONE)


def audit_coverage(assets: Iterable, contracts: Iterable, now: DateLike) -> CoverageAudit:
    """Resolve every asset once and count each under exactly one source."""
    contracts = list(contracts)
    total = warranty = contract = 0
    uncovered: List[str] = []
    for asset in assets:
        total += 1
        kind = resolve_coverage(asset, contracts, now).kind
        if kind == CoverageKind.WARRANTY:
            warranty += 1
        elif kind == CoverageKind.CONTRACT:
            contract += 1
        else:
            uncovered.append(asset.id)
    return CoverageAudit(
        total=total,
        warranty_count=warranty,
        contract_count=contract,
        uncovered_count=len(uncovered),
        uncovered_ids=uncovered,
    )


def coverage_conflict(asset, contracts: Iterable, now: DateLike, exclude_contract_id: Optional[str] = None) -> Optional[str]:
    """Warning text when enrolling a contract for an asset that is already covered."""
    others = [c for c in contracts if exclude_contract_id is None or c.id != exclude_contract_id]
    existing = latest_active_contract(asset, others, now)
    if existing is not None:
        return f"Machine already has an active Maintenance Contract until {to_date(existing.end_date).isoformat()}."
    if is_warranty_active(asset, now):
        return f"Machine is currently under Warranty until {to_date(asset.warranty_expiry_date).isoformat()}."
    return None


def expiry_status(expiry: DateLike, now: DateLike, window_days: int = WARNING_WINDOW_DAYS) -> ExpiryStatus:
    end = to_date(expiry)
    today = to_date(now)
    if end < today:
        return ExpiryStatus.EXPIRED
    if end <= add_days(today, window_days):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.ACTIVE


def _license_field(info, name):
    if info is None:
        return None
    if isinstance(info, dict):
        return info.get(name)
    return getattr(info, name, None)


def license_status(info, now: DateLike, window_days: int = WARNING_WINDOW_DAYS) -> LicenseStatus:
    expiry = _license_field(info, "expiry_date")
    if not expiry:
        return LicenseStatus.INCOMPLETE
    status = expiry_status(expiry, now, window_days)
    if status == ExpiryStatus.EXPIRED:
        return LicenseStatus.EXPIRED
    if status == ExpiryStatus.EXPIRING_SOON:
        return LicenseStatus.DUE_SOON
    return LicenseStatus.VALID


def license_renewal_due(asset, now: DateLike) -> bool:
    """True once now has reached expiry minus the renewal lead time."""
    info = getattr(asset, "license_info", None)
    expiry = _license_field(info, "expiry_date")
    if not getattr(asset, "license_required", False) or not expiry:
        return False
    lead = _license_field(info, "renewal_lead_days") or DEFAULT_RENEWAL_LEAD_DAYS
    return to_date(now) >= add_days(expiry, -int(lead))
