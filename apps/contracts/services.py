from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple
from datetime import datetime
from fastapi import HTTPException, status, Depends
import logging

from apps.contracts.models import MaintenanceContract, ContractStatus
from apps.contracts.schemas import ContractCreate, ContractUpdate
from apps.equipment.models import Equipment
from core.config import Settings, get_settings
from core.coverage import ExpiryStatus, coverage_conflict, expiry_status
from core.database import get_db
from core.dates import to_date, utcnow
from core.errors import ValidationFailure

logger = logging.getLogger(__name__)

UNKNOWN_EQUIPMENT = "Unknown"


class ContractService:
    def __init__(self, db: Session, settings: Settings = None):
        self.db = db
        self.settings = settings or get_settings()

    def get_contract(self, contract_id: str) -> Optional[MaintenanceContract]:
        return self.db.query(MaintenanceContract).filter(MaintenanceContract.id == contract_id).first()

    def get_contract_or_404(self, contract_id: str) -> MaintenanceContract:
        db_contract = self.get_contract(contract_id)
        if not db_contract:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Contract not found"
            )
        return db_contract

    def get_contracts(
        self,
        skip: int = 0,
        limit: int = 100,
        equipment_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[MaintenanceContract], int]:
        query = self.db.query(MaintenanceContract)

        if equipment_id:
            query = query.filter(MaintenanceContract.equipment_id == equipment_id)

        if search:
            query = query.filter(or_(
                MaintenanceContract.equipment_name.ilike(f"%{search}%"),
                MaintenanceContract.company_name.ilike(f"%{search}%")
            ))

        total = query.count()
        contracts = query.order_by(MaintenanceContract.end_date).offset(skip).limit(limit).all()
        return contracts, total

    def status_label(self, db_contract: MaintenanceContract, now: datetime) -> ExpiryStatus:
        return expiry_status(db_contract.end_date, now, self.settings.EXPIRY_WARNING_DAYS)

    def _check_overlap(self, db_contract: MaintenanceContract, now: datetime) -> Optional[str]:
        """Coverage the asset already has, ignoring the contract being written"""
        equipment = self.db.query(Equipment).filter(Equipment.id == db_contract.equipment_id).first()
        if equipment is None:
            return None
        contracts = self.db.query(MaintenanceContract).filter(
            MaintenanceContract.equipment_id == db_contract.equipment_id
        ).all()
        warning = coverage_conflict(equipment, contracts, now, exclude_contract_id=db_contract.id)
        if warning:
            logger.warning(f"Contract for {equipment.name} overlaps existing coverage: {warning}")
        return warning

    def _apply_derived_fields(self, db_contract: MaintenanceContract, now: datetime):
        equipment = self.db.query(Equipment).filter(Equipment.id == db_contract.equipment_id).first()
        db_contract.equipment_name = equipment.name if equipment else UNKNOWN_EQUIPMENT
        if to_date(db_contract.end_date) >= to_date(now):
            db_contract.status = ContractStatus.ACTIVE
        else:
            db_contract.status = ContractStatus.EXPIRED

    def create_contract(self, contract: ContractCreate, now: Optional[datetime] = None) -> Tuple[MaintenanceContract, Optional[str]]:
        """Enrol a maintenance contract. Overlapping coverage is reported, not refused."""
        now = now or utcnow()
        db_contract = MaintenanceContract(**contract.model_dump())
        warning = self._check_overlap(db_contract, now)
        self._apply_derived_fields(db_contract, now)

        self.db.add(db_contract)
        self.db.commit()
        self.db.refresh(db_contract)

        logger.info(f"Created {db_contract.type.value} contract for {db_contract.equipment_name} (ID: {db_contract.id})")
        return db_contract, warning

    def update_contract(self, contract_id: str, contract_update: ContractUpdate, now: Optional[datetime] = None) -> Tuple[MaintenanceContract, Optional[str]]:
        now = now or utcnow()
        db_contract = self.get_contract_or_404(contract_id)

        for field, value in contract_update.model_dump(exclude_unset=True).items():
            setattr(db_contract, field, value)

        if db_contract.end_date is None:
            raise ValidationFailure("Contract end date is required", field="end_date")
        if db_contract.start_date and db_contract.start_date > db_contract.end_date:
            raise ValidationFailure("start_date must not be after end_date", field="start_date")

        warning = self._check_overlap(db_contract, now)
        self._apply_derived_fields(db_contract, now)

        self.db.commit()
        self.db.refresh(db_contract)

        logger.info(f"Updated contract {db_contract.id}")
        return db_contract, warning

    def delete_contract(self, contract_id: str) -> bool:
        db_contract = self.get_contract_or_404(contract_id)
        self.db.delete(db_contract)
        self.db.commit()

        logger.info(f"Deleted contract {contract_id}")
        return True


# Dependency injection
def get_contract_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> ContractService:
    return ContractService(db, settings)
