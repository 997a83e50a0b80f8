"""
Printable report projections.

Every builder works on collections that have already been loaded, takes an
optional selection of equipment IDs (``None`` selects the whole fleet) and
returns the same output for the same input and ``now``.
"""

from collections import OrderedDict
from datetime import date as date_type
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from core.coverage import Coverage, audit_coverage, latest_active_contract, resolve_coverage
from core.dates import DateLike, start_of_month, to_date
from core.liability import LiabilitySummary, PaymentRecord, aggregate_liability
from core.reminders import active_alerts, is_pending

STANDALONE_GROUP = "Standalone Assets"
UNKNOWN_EQUIPMENT = "Unknown"

CORRECTIVE = "Corrective"
PREVENTIVE = "Preventive"

STABLE = "Stable"
NEEDS_PM = "Needs PM"
UNRELIABLE = "Unreliable"

COVERED = "COVERED"
EXPOSED = "EXPOSED"

ACQUISITION = "Acquisition"
SERVICE = "Service"


class AssetGroup(BaseModel):
    name: str
    equipment_ids: List[str]


class FinancialHistoryRow(BaseModel):
    equipment_id: str
    name: str
    quantity: int
    total_spent: float
    paid: float
    due: float


class FinancialHistoryReport(BaseModel):
    rows: List[FinancialHistoryRow]
    total_spent: float
    total_paid: float
    total_due: float


class CostAnalysisRow(BaseModel):
    equipment_id: str
    name: str
    purchase_total: float
    service_total: float
    service_count: int
    grand_total: float


class BreakdownRow(BaseModel):
    equipment_id: str
    name: str
    breakdown_count: int
    pm_count: int
    ratio: float
    reliability: str


class PartUsageRow(BaseModel):
    name: str
    count: int
    machine_count: int
    stock: int
    price: float


class CoverageAuditRow(BaseModel):
    equipment_id: str
    name: str
    has_warranty: bool
    warranty_expiry_date: Optional[date_type] = None
    coverage: Coverage
    classification: str


class MaintenanceRow(BaseModel):
    id: str
    equipment_id: str
    equipment_name: str
    date: date_type
    type: str
    cost: float
    technician_name: Optional[str] = None
    company_name: Optional[str] = None


class DossierContract(BaseModel):
    id: str
    type: str
    company_name: Optional[str] = None
    end_date: date_type
    amount: float


class DossierLogRow(MaintenanceRow):
    parts_replaced: List[str] = []
    paid_amount: float
    remaining_amount: float


class TimelinePayment(PaymentRecord):
    category: str
    source_id: str


class AssetDossier(BaseModel):
    equipment_id: str
    name: str
    serial_number: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    location: Optional[str] = None
    group_name: str
    status: str
    purchase_date: Optional[date_type] = None
    installation_date: Optional[date_type] = None
    expected_lifecycle: Optional[int] = None
    has_warranty: bool
    warranty_expiry_date: Optional[date_type] = None
    license_required: bool
    license_info: Optional[dict] = None
    active_contract: Optional[DossierContract] = None
    service_logs: List[DossierLogRow]
    acquisition_total: float
    service_total: float
    total_due: float
    payment_timeline: List[TimelinePayment]


class FleetOverview(BaseModel):
    total_units: int
    running: int
    stopped: int
    needs_service: int
    liability: LiabilitySummary
    scheduled_count: int
    alert_count: int
    warranty_count: int
    contract_count: int
    uncovered_count: int
    low_stock_count: int


def _value(obj):
    return getattr(obj, "value", obj)


def _quantity(equipment) -> int:
    return equipment.quantity or 1


def _selection(equipment_ids: Optional[Iterable[str]]):
    return None if equipment_ids is None else set(equipment_ids)


def select_equipment(equipment: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> list:
    selected = _selection(equipment_ids)
    return [e for e in equipment if selected is None or e.id in selected]


def select_logs(service_logs: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> list:
    selected = _selection(equipment_ids)
    return [l for l in service_logs if selected is None or l.equipment_id in selected]


def _logs_by_equipment(service_logs: Iterable) -> Dict[str, list]:
    grouped: Dict[str, list] = {}
    for log in service_logs:
        grouped.setdefault(log.equipment_id, []).append(log)
    return grouped


def group_assets(equipment: Iterable) -> List[AssetGroup]:
    groups: "OrderedDict[str, List[str]]" = OrderedDict()
    for e in equipment:
        name = (e.group_name or "").strip() or STANDALONE_GROUP
        groups.setdefault(name, []).append(e.id)
    return [AssetGroup(name=name, equipment_ids=ids) for name, ids in groups.items()]


def financial_history(equipment: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> FinancialHistoryReport:
    rows = [
        FinancialHistoryRow(
            equipment_id=e.id,
            name=e.name,
            quantity=_quantity(e),
            total_spent=float(e.purchase_price or 0) * _quantity(e),
            paid=float(e.paid_amount or 0),
            due=float(e.remaining_amount or 0),
        )
        for e in select_equipment(equipment, equipment_ids)
    ]
    return FinancialHistoryReport(
        rows=rows,
        total_spent=sum(r.total_spent for r in rows),
        total_paid=sum(r.paid for r in rows),
        total_due=sum(r.due for r in rows),
    )


def cost_analysis(equipment: Iterable, service_logs: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> List[CostAnalysisRow]:
    by_equipment = _logs_by_equipment(service_logs)
    rows = []
    for e in select_equipment(equipment, equipment_ids):
        logs = by_equipment.get(e.id, [])
        purchase_total = float(e.purchase_price or 0) * _quantity(e)
        service_total = sum(float(l.cost or 0) for l in logs)
        rows.append(CostAnalysisRow(
            equipment_id=e.id,
            name=e.name,
            purchase_total=purchase_total,
            service_total=service_total,
            service_count=len(logs),
            grand_total=purchase_total + service_total,
        ))
    return sorted(rows, key=lambda r: r.grand_total, reverse=True)


def reliability_index(pm_count: int, breakdown_count: int):
    """Preventive visits per breakdown; zero breakdowns count as one, and preventive care with no breakdowns is Stable."""
    ratio = pm_count / max(breakdown_count, 1)
    if breakdown_count == 0 and pm_count > 0:
        return ratio, STABLE
    if ratio >= 2:
        return ratio, STABLE
    if ratio >= 1:
        return ratio, NEEDS_PM
    return ratio, UNRELIABLE


def breakdown_frequency(equipment: Iterable, service_logs: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> List[BreakdownRow]:
    by_equipment = _logs_by_equipment(service_logs)
    rows = []
    for e in select_equipment(equipment, equipment_ids):
        types = [_value(l.type) for l in by_equipment.get(e.id, [])]
        breakdowns = types.count(CORRECTIVE)
        pms = types.count(PREVENTIVE)
        ratio, label = reliability_index(pms, breakdowns)
        rows.append(BreakdownRow(
            equipment_id=e.id,
            name=e.name,
            breakdown_count=breakdowns,
            pm_count=pms,
            ratio=ratio,
            reliability=label,
        ))
    return sorted(rows, key=lambda r: r.breakdown_count, reverse=True)


def spare_parts_usage(service_logs: Iterable, spare_parts: Iterable, equipment_ids: Optional[Iterable[str]] = None) -> List[PartUsageRow]:
    # Part names are matched literally, case included.
    usage: "OrderedDict[str, dict]" = OrderedDict()
    for log in select_logs(service_logs, equipment_ids):
        for part_name in log.parts_replaced or []:
            entry = usage.setdefault(part_name, {"count": 0, "machines": set()})
            entry["count"] += 1
            entry["machines"].add(log.equipment_id)

    catalogue = {}
    for part in spare_parts:
        catalogue.setdefault(part.name, part)

    rows = []
    for name, entry in usage.items():
        part = catalogue.get(name)
        rows.append(PartUsageRow(
            name=name,
            count=entry["count"],
            machine_count=len(entry["machines"]),
            stock=(part.quantity or 0) if part is not None else 0,
            price=float(part.price or 0) if part is not None else 0.0,
        ))
    return sorted(rows, key=lambda r: r.count, reverse=True)


def warranty_audit(equipment: Iterable, contracts: Iterable, now: DateLike, equipment_ids: Optional[Iterable[str]] = None) -> List[CoverageAuditRow]:
    contracts = list(contracts)
    rows = []
    for e in select_equipment(equipment, equipment_ids):
        coverage = resolve_coverage(e, contracts, now)
        rows.append(CoverageAuditRow(
            equipment_id=e.id,
            name=e.name,
            has_warranty=bool(e.has_warranty),
            warranty_expiry_date=to_date(e.warranty_expiry_date),
            coverage=coverage,
            classification=COVERED if coverage.is_covered else EXPOSED,
        ))
    return rows


def monthly_maintenance(service_logs: Iterable, now: DateLike, equipment_ids: Optional[Iterable[str]] = None) -> List[MaintenanceRow]:
    first_day = start_of_month(now)
    today = to_date(now)
    rows = []
    for log in select_logs(service_logs, equipment_ids):
        logged_on = to_date(log.date)
        if logged_on is None or not (first_day <= logged_on <= today):
            continue
        rows.append(MaintenanceRow(
            id=log.id,
            equipment_id=log.equipment_id,
            equipment_name=log.equipment_name or UNKNOWN_EQUIPMENT,
            date=logged_on,
            type=_value(log.type),
            cost=float(log.cost or 0),
            technician_name=log.technician_name,
            company_name=log.company_name,
        ))
    return sorted(rows, key=lambda r: r.date)


def _timeline(history, category: str, source_id: str) -> List[TimelinePayment]:
    entries = []
    for entry in history or []:
        record = entry if isinstance(entry, PaymentRecord) else PaymentRecord.model_validate(entry)
        entries.append(TimelinePayment(**record.model_dump(), category=category, source_id=source_id))
    return entries


def asset_dossier(equipment: Iterable, service_logs: Iterable, contracts: Iterable, now: DateLike, equipment_ids: Optional[Iterable[str]] = None) -> List[AssetDossier]:
    """Profile, active agreement, service record and money trail of each selected asset."""
    by_equipment = _logs_by_equipment(service_logs)
    contracts = list(contracts)
    dossiers = []
    for e in select_equipment(equipment, equipment_ids):
        logs = sorted(by_equipment.get(e.id, []), key=lambda l: to_date(l.date), reverse=True)

        contract = latest_active_contract(e, contracts, now)
        active_contract = None
        if contract is not None:
            active_contract = DossierContract(
                id=contract.id,
                type=_value(contract.type),
                company_name=contract.company_name,
                end_date=to_date(contract.end_date),
                amount=float(contract.amount or 0),
            )

        timeline = _timeline(e.payment_history, ACQUISITION, e.id)
        for log in logs:
            timeline.extend(_timeline(log.payment_history, SERVICE, log.id))
        timeline.sort(key=lambda p: p.date, reverse=True)

        dossiers.append(AssetDossier(
            equipment_id=e.id,
            name=e.name,
            serial_number=e.serial_number,
            model=e.model,
            manufacturer=e.manufacturer,
            location=e.location,
            group_name=(e.group_name or "").strip() or STANDALONE_GROUP,
            status=_value(e.status),
            purchase_date=to_date(e.purchase_date),
            installation_date=to_date(e.installation_date),
            expected_lifecycle=e.expected_lifecycle,
            has_warranty=bool(e.has_warranty),
            warranty_expiry_date=to_date(e.warranty_expiry_date),
            license_required=bool(e.license_required),
            license_info=e.license_info,
            active_contract=active_contract,
            service_logs=[
                DossierLogRow(
                    id=log.id,
                    equipment_id=log.equipment_id,
                    equipment_name=log.equipment_name or e.name,
                    date=to_date(log.date),
                    type=_value(log.type),
                    cost=float(log.cost or 0),
                    technician_name=log.technician_name,
                    company_name=log.company_name,
                    parts_replaced=list(log.parts_replaced or []),
                    paid_amount=float(log.paid_amount or 0),
                    remaining_amount=float(log.remaining_amount or 0),
                )
                for log in logs
            ],
            acquisition_total=float(e.purchase_price or 0) * _quantity(e),
            service_total=sum(float(l.cost or 0) for l in logs),
            total_due=float(e.remaining_amount or 0) + sum(float(l.remaining_amount or 0) for l in logs),
            payment_timeline=timeline,
        ))
    return dossiers


def fleet_overview(equipment: Iterable, service_logs: Iterable, contracts: Iterable, reminders: Iterable, spare_parts: Iterable, now: DateLike) -> FleetOverview:
    equipment = list(equipment)
    reminders = list(reminders)

    def units(status: str) -> int:
        return sum(_quantity(e) for e in equipment if _value(e.status) == status)

    audit = audit_coverage(equipment, contracts, now)
    return FleetOverview(
        total_units=sum(_quantity(e) for e in equipment),
        running=units("Operational"),
        stopped=units("Down"),
        needs_service=units("Under Maintenance"),
        liability=aggregate_liability(equipment, service_logs),
        scheduled_count=sum(1 for r in reminders if is_pending(r)),
        alert_count=len(active_alerts(reminders, now)),
        warranty_count=audit.warranty_count,
        contract_count=audit.contract_count,
        uncovered_count=audit.uncovered_count,
        low_stock_count=sum(1 for p in spare_parts if (p.quantity or 0) <= (p.min_quantity or 0)),
    )
