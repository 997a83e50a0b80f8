from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple
from datetime import datetime
from fastapi import HTTPException, status, Depends
from fastapi.encoders import jsonable_encoder
import logging

from apps.equipment.models import Equipment, EquipmentStatus
from apps.equipment.schemas import EquipmentCreate, EquipmentUpdate, LicenseRow
from apps.contracts.models import MaintenanceContract
from apps.reminders.services import close_settled_reminders
from core.config import Settings, get_settings
from core.coverage import (
    Coverage, compute_warranty_expiry, license_renewal_due, license_status, resolve_coverage
)
from core.database import get_db
from core.liability import compute_remaining
from core.reports import AssetGroup, group_assets

logger = logging.getLogger(__name__)

JSON_FIELDS = ("license_info", "contractor_ids")


def to_columns(data: dict, json_fields=JSON_FIELDS) -> dict:
    """Embedded documents are stored as plain JSON."""
    for field in json_fields:
        if data.get(field) is not None:
            data[field] = jsonable_encoder(data[field])
    return data


class EquipmentService:
    def __init__(self, db: Session, settings: Settings = None):
        self.db = db
        self.settings = settings or get_settings()

    @staticmethod
    def apply_derived_fields(db_equipment: Equipment) -> Equipment:
        """Recompute remaining amount and warranty expiry from their inputs."""
        db_equipment.remaining_amount = compute_remaining(
            db_equipment.purchase_price, db_equipment.paid_amount
        )
        if db_equipment.has_warranty:
            expiry = compute_warranty_expiry(
                db_equipment.purchase_date, db_equipment.warranty_duration_days
            )
            if expiry is not None:
                db_equipment.warranty_expiry_date = expiry
        return db_equipment

    def get_equipment(self, equipment_id: str) -> Optional[Equipment]:
        """Get equipment by ID"""
        return self.db.query(Equipment).filter(Equipment.id == equipment_id).first()

    def get_equipment_or_404(self, equipment_id: str) -> Equipment:
        db_equipment = self.get_equipment(equipment_id)
        if not db_equipment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Equipment not found"
            )
        return db_equipment

    def get_all_equipment(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        status_filter: Optional[EquipmentStatus] = None,
        group_name: Optional[str] = None
    ) -> Tuple[List[Equipment], int]:
        """Get equipment with filtering and pagination"""
        query = self.db.query(Equipment)

        if search:
            query = query.filter(or_(
                Equipment.name.ilike(f"%{search}%"),
                Equipment.serial_number.ilike(f"%{search}%"),
                Equipment.group_name.ilike(f"%{search}%"),
                Equipment.brand.ilike(f"%{search}%")
            ))

        if status_filter:
            query = query.filter(Equipment.status == status_filter)

        if group_name:
            query = query.filter(Equipment.group_name == group_name)

        total = query.count()
        items = query.order_by(Equipment.name).offset(skip).limit(limit).all()
        return items, total

    def create_equipment(self, equipment: EquipmentCreate) -> Equipment:
        """Register a new asset"""
        db_equipment = Equipment(**to_columns(equipment.model_dump()), payment_history=[])
        self.apply_derived_fields(db_equipment)

        self.db.add(db_equipment)
        self.db.commit()
        self.db.refresh(db_equipment)

        logger.info(f"Created equipment: {db_equipment.name} (ID: {db_equipment.id})")
        return db_equipment

    def update_equipment(self, equipment_id: str, equipment_update: EquipmentUpdate) -> Equipment:
        """Update an existing asset; the last write wins"""
        db_equipment = self.get_equipment_or_404(equipment_id)

        update_data = to_columns(equipment_update.model_dump(exclude_unset=True))
        for field, value in update_data.items():
            setattr(db_equipment, field, value)
        self.apply_derived_fields(db_equipment)
        if db_equipment.remaining_amount <= 0:
            close_settled_reminders(self.db, db_equipment.id)

        self.db.commit()
        self.db.refresh(db_equipment)

        logger.info(f"Updated equipment: {db_equipment.name} (ID: {db_equipment.id})")
        return db_equipment

    def delete_equipment(self, equipment_id: str) -> bool:
        """Delete an asset. Its service logs, contracts and reminders are left in place."""
        db_equipment = self.get_equipment_or_404(equipment_id)

        self.db.delete(db_equipment)
        self.db.commit()

        logger.info(f"Deleted equipment: {db_equipment.name} (ID: {equipment_id})")
        return True

    def update_status(self, equipment_id: str, new_status: EquipmentStatus) -> Equipment:
        db_equipment = self.get_equipment_or_404(equipment_id)
        db_equipment.status = new_status
        self.db.commit()
        self.db.refresh(db_equipment)

        logger.info(f"Equipment {db_equipment.name} status set to {new_status.value}")
        return db_equipment

    def get_groups(self) -> List[AssetGroup]:
        return group_assets(self.db.query(Equipment).order_by(Equipment.name).all())

    def get_coverage(self, equipment_id: str, now: datetime) -> Coverage:
        db_equipment = self.get_equipment_or_404(equipment_id)
        contracts = self.db.query(MaintenanceContract).filter(
            MaintenanceContract.equipment_id == equipment_id
        ).all()
        return resolve_coverage(db_equipment, contracts, now)

    def get_licenses(self, now: datetime, search: Optional[str] = None) -> List[LicenseRow]:
        """License register for assets that require one"""
        query = self.db.query(Equipment).filter(Equipment.license_required.is_(True))
        rows = []
        for item in query.order_by(Equipment.name).all():
            license_name = (item.license_info or {}).get("name") or ""
            if search and search.lower() not in item.name.lower() and search.lower() not in license_name.lower():
                continue
            rows.append(LicenseRow(
                equipment_id=item.id,
                equipment_name=item.name,
                license_required=True,
                license_info=item.license_info,
                status=license_status(item.license_info, now, self.settings.EXPIRY_WARNING_DAYS),
                renewal_due=license_renewal_due(item, now)
            ))
        return rows


# Dependency injection
def get_equipment_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> EquipmentService:
    return EquipmentService(db, settings)
